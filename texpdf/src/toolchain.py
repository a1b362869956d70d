"""Version probing and distribution detection for texi2dvi."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import subprocess

from core.command_runner import CommandRunner

from .errors import ProbeExitError, ProbeLaunchError, ProbeTimeoutError


MIKTEX_MARKER = "MiKTeX"
VERSION_FLAG = "--version"
DEFAULT_PROBE_TIMEOUT = 30.0


class ToolchainVariant(str, Enum):
    DEFAULT = "default"
    # MiKTeX's texi2dvi ignores TEXINPUTS/BSTINPUTS and needs -I flags instead
    ALTERNATE = "alternate"


@dataclass(frozen=True, slots=True)
class ToolchainInfo:
    raw_output: str
    variant: ToolchainVariant


def classify_variant(output: str) -> ToolchainVariant:
    if output and MIKTEX_MARKER in output:
        return ToolchainVariant.ALTERNATE
    return ToolchainVariant.DEFAULT


def probe(
    runner: CommandRunner,
    executable: Path,
    *,
    flag: str = VERSION_FLAG,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> ToolchainInfo:
    """Run ``executable flag`` and classify the toolchain from its output.

    The probe runs with the ambient environment and blocks for at most
    ``timeout`` seconds.
    """
    program = str(executable)
    try:
        result = runner.run([program, flag], timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        raise ProbeTimeoutError(program, timeout) from exc
    except OSError as exc:
        raise ProbeLaunchError(program, exc.strerror or str(exc)) from exc

    if result.returncode != 0:
        raise ProbeExitError(program, result.returncode, result.stderr)

    return ToolchainInfo(raw_output=result.stdout, variant=classify_variant(result.stdout))


__all__ = [
    "DEFAULT_PROBE_TIMEOUT",
    "MIKTEX_MARKER",
    "ToolchainInfo",
    "ToolchainVariant",
    "VERSION_FLAG",
    "classify_variant",
    "probe",
]
