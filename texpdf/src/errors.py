"""Failures raised while preparing or launching a texi2dvi run."""
from __future__ import annotations


class TexPdfError(RuntimeError):
    """Base class for terminal compile failures.

    :meth:`summary` is the single line reported to the user.
    """

    def summary(self) -> str:
        return str(self)


class TargetPathError(TexPdfError):
    """The document path could not be resolved, e.g. because of a symlink loop."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Unable to resolve {path}: {reason}")
        self.path = path
        self.reason = reason


class ToolNotFoundError(TexPdfError):
    def __init__(self, program: str):
        super().__init__(f"can't find {program}")
        self.program = program


class ProbeError(TexPdfError):
    """The version probe could not produce usable output."""


class ProbeLaunchError(ProbeError):
    def __init__(self, executable: str, reason: str):
        super().__init__(f"Unable to run {executable}: {reason}")
        self.executable = executable
        self.reason = reason


class ProbeTimeoutError(ProbeError):
    def __init__(self, executable: str, timeout: float):
        super().__init__(f"{executable} did not answer the version probe within {timeout:g}s")
        self.executable = executable
        self.timeout = timeout


class ProbeExitError(ProbeError):
    """The probe ran but exited with a failure status.

    The toolchain's own error stream is the report, so :meth:`summary`
    returns it verbatim when there is one.
    """

    def __init__(self, executable: str, returncode: int, stderr: str):
        super().__init__(f"{executable} exited with code {returncode} while probing its version")
        self.executable = executable
        self.returncode = returncode
        self.stderr = stderr

    def summary(self) -> str:
        return self.stderr.rstrip("\n") if self.stderr.strip() else str(self)


class LaunchError(TexPdfError):
    def __init__(self, executable: str, reason: str):
        super().__init__(f"Unable to launch {executable}: {reason}")
        self.executable = executable
        self.reason = reason


__all__ = [
    "LaunchError",
    "ProbeError",
    "ProbeExitError",
    "ProbeLaunchError",
    "ProbeTimeoutError",
    "TargetPathError",
    "TexPdfError",
    "ToolNotFoundError",
]
