"""Supervised, streaming execution of a single texi2dvi run."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple
import asyncio
import codecs
import subprocess

from core.process_tree import terminate_process_group, terminate_process_tree

from .errors import LaunchError, TexPdfError
from .platform import Platform
from .system import environment_snapshot


OutputCallback = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class InvocationPlan:
    executable: Path
    environment: Mapping[str, str]
    args: Tuple[str, ...]
    working_dir: Path
    target: str

    @classmethod
    def for_target(
        cls,
        executable: Path,
        environment: Mapping[str, str],
        args: Sequence[str],
        target_file: Path,
    ) -> "InvocationPlan":
        """Plan a run of ``executable`` from the directory that holds ``target_file``."""
        return cls(
            executable=executable,
            environment=dict(environment),
            args=tuple(args),
            working_dir=target_file.parent,
            target=target_file.name,
        )

    @property
    def command(self) -> List[str]:
        return [str(self.executable), *self.args, self.target]


@dataclass(frozen=True, slots=True)
class InvocationResult:
    exit_code: int | None = None
    error: TexPdfError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class ProcessCallbacks:
    on_stdout: OutputCallback | None = None
    on_stderr: OutputCallback | None = None


async def _pump(reader: asyncio.StreamReader | None, callback: OutputCallback | None, chunk_size: int) -> None:
    if reader is None:
        return
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        chunk = await reader.read(chunk_size)
        if not chunk:
            break
        text = decoder.decode(chunk)
        if text and callback is not None:
            callback(text)
    tail = decoder.decode(b"", final=True)
    if tail and callback is not None:
        callback(tail)


def _launch_options(platform: Platform) -> Dict[str, Any]:
    """Start the child as the leader of a new process group."""
    if platform.is_windows:
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


class ProcessRunner:
    """Runs one child process and owns its whole process tree until it exits.

    The child leads its own process group, so descendants stay reachable even
    after the child itself has exited. Output is handed to the callbacks chunk
    by chunk as it arrives. If the awaiting task is cancelled, or anything else
    interrupts the run, the child and every process it spawned are terminated
    before the exception propagates. A non-zero exit status is returned, not
    raised.
    """

    CHUNK_SIZE = 4096

    def __init__(self, environment: Mapping[str, str] | None = None, *, terminate_timeout: float = 3.0) -> None:
        self._environment = dict(environment) if environment is not None else environment_snapshot()
        self._terminate_timeout = terminate_timeout
        self._platform = Platform.current()
        self._process: asyncio.subprocess.Process | None = None

    def merged_environment(self, overlay: Mapping[str, str]) -> Dict[str, str]:
        merged = dict(self._environment)
        merged.update(overlay)
        return merged

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    async def run(self, plan: InvocationPlan, callbacks: ProcessCallbacks | None = None) -> InvocationResult:
        callbacks = callbacks or ProcessCallbacks()
        try:
            process = await asyncio.create_subprocess_exec(
                *plan.command,
                cwd=str(plan.working_dir),
                env=self.merged_environment(plan.environment),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **_launch_options(self._platform),
            )
        except OSError as exc:
            return InvocationResult(error=LaunchError(str(plan.executable), exc.strerror or str(exc)))

        self._process = process
        try:
            await asyncio.gather(
                _pump(process.stdout, callbacks.on_stdout, self.CHUNK_SIZE),
                _pump(process.stderr, callbacks.on_stderr, self.CHUNK_SIZE),
            )
            returncode = await process.wait()
        except BaseException:
            await self._stop(process)
            await process.wait()
            raise
        finally:
            self._process = None

        return InvocationResult(exit_code=returncode)

    async def terminate(self) -> int:
        """Stop the running process tree, if any. Returns the number of processes signalled.

        The awaiting :meth:`run` then finishes with the exit status of the
        terminated child.
        """
        process = self._process
        if process is None:
            return 0
        return await self._stop(process)

    async def _stop(self, process: asyncio.subprocess.Process) -> int:
        if process.returncode is None:
            return await asyncio.to_thread(
                terminate_process_tree,
                process.pid,
                timeout=self._terminate_timeout,
                process_group=True,
            )
        # the child is gone but its group may still hold the output pipes
        return await asyncio.to_thread(terminate_process_group, process.pid, timeout=self._terminate_timeout)


__all__ = ["InvocationPlan", "InvocationResult", "OutputCallback", "ProcessCallbacks", "ProcessRunner"]
