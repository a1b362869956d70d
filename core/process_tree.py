"""Termination of a process together with every process it spawned."""
from __future__ import annotations

from typing import List
import os
import signal

import psutil


SUPPORTS_PROCESS_GROUPS = hasattr(os, "killpg")


def collect_process_tree(pid: int) -> List[psutil.Process]:
    """Return the descendants of ``pid`` (deepest first) followed by the root."""

    try:
        parent = psutil.Process(pid)
    except psutil.NoSuchProcess:
        return []

    try:
        children = parent.children(recursive=True)
    except psutil.NoSuchProcess:
        children = []

    processes: List[psutil.Process] = list(reversed(children))
    processes.append(parent)
    return processes


def collect_process_group(pgid: int) -> List[psutil.Process]:
    """Return the processes whose process group is ``pgid``.

    Members re-parented after their parent exited are still found here, which
    a walk of the parent's children cannot do. Empty where process groups are
    not available.
    """

    if not SUPPORTS_PROCESS_GROUPS:
        return []

    members: List[psutil.Process] = []
    for proc in psutil.process_iter():
        try:
            if os.getpgid(proc.pid) == pgid:
                members.append(proc)
        except (ProcessLookupError, PermissionError):
            continue
    return members


def _signal_group(pgid: int, signum: int) -> None:
    try:
        os.killpg(pgid, signum)
    except (ProcessLookupError, PermissionError):
        # group already empty
        pass


def _terminate(processes: List[psutil.Process], *, timeout: float, pgid: int | None) -> int:
    signalled: List[psutil.Process] = []
    for proc in processes:
        try:
            proc.terminate()
        except psutil.NoSuchProcess:
            continue
        signalled.append(proc)
    if pgid is not None:
        _signal_group(pgid, signal.SIGTERM)

    _gone, alive = psutil.wait_procs(signalled, timeout=timeout)
    for proc in alive:
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            pass
    if pgid is not None:
        _signal_group(pgid, signal.SIGKILL)
    if alive:
        psutil.wait_procs(alive, timeout=timeout)

    return len(signalled)


def terminate_process_tree(pid: int, *, timeout: float = 3.0, process_group: bool = False) -> int:
    """Terminate ``pid`` and all of its descendants.

    Children are signalled before the root so that none of them is re-parented
    and left running. With ``process_group``, ``pid`` is also taken to lead its
    own process group and every member of that group is signalled as well.
    Processes still alive after ``timeout`` seconds are killed. Returns the
    number of processes that were signalled.
    """

    processes = collect_process_tree(pid)
    pgid = pid if process_group and SUPPORTS_PROCESS_GROUPS else None
    if pgid is not None:
        known = {proc.pid for proc in processes}
        processes.extend(proc for proc in collect_process_group(pgid) if proc.pid not in known)
    if not processes:
        return 0
    return _terminate(processes, timeout=timeout, pgid=pgid)


def terminate_process_group(pgid: int, *, timeout: float = 3.0) -> int:
    """Terminate what is left of process group ``pgid`` once its leader has exited."""

    processes = collect_process_group(pgid)
    if not processes:
        return 0
    return _terminate(processes, timeout=timeout, pgid=pgid)


__all__ = [
    "SUPPORTS_PROCESS_GROUPS",
    "collect_process_group",
    "collect_process_tree",
    "terminate_process_group",
    "terminate_process_tree",
]
