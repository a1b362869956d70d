"""
Context and Console classes for texpdf.
"""
import sys
from dataclasses import dataclass, field
from typing import Dict, TextIO

from core.command_runner import CommandRunner

from .config import Settings
from .platform import Platform
from .system import environment_snapshot


class Console:
    """Console output handler with configurable log level.

    Levels: none < error < info < debug
    Default: 'none' (no diagnostic output)

    Compiler output and the final error report bypass the level filter:
    they go through :meth:`write_output` and :meth:`write_error` unprefixed.
    """

    LEVELS = {
        "none": 0,
        "error": 1,
        "info": 2,
        "debug": 3,
    }

    def __init__(
        self,
        level: str = "none",
        dry_run: bool = False,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.level_name = level
        self.level = self.LEVELS.get(level, 0)
        self.dry_run = dry_run
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def info(self, message: str) -> None:
        if self.level >= self.LEVELS["info"]:
            print(f"[INFO] {message}", file=self.stdout)

    def error(self, message: str) -> None:
        if self.level >= self.LEVELS["error"]:
            print(f"[ERROR] {message}", file=self.stderr)

    def dry(self, message: str) -> None:
        if self.dry_run:
            print(f"[DRY] {message}", file=self.stdout)

    def debug(self, message: str) -> None:
        if self.level >= self.LEVELS["debug"]:
            print(f"[DEBUG] {message}", file=self.stdout)

    def write_output(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def write_error(self, text: str) -> None:
        self.stderr.write(text)
        self.stderr.flush()


@dataclass
class Context:
    settings: Settings
    console: Console
    runner: CommandRunner
    environment: Dict[str, str] = field(default_factory=environment_snapshot)
    platform: Platform = field(default_factory=Platform.current)
