"""Runtime description of the operating system conventions the toolchain follows."""
from __future__ import annotations

from enum import Enum
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Type
import platform


class Platform(str, Enum):
    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> "Platform":
        return cls.WINDOWS if platform.system().lower() == "windows" else cls.POSIX

    @property
    def is_windows(self) -> bool:
        return self is Platform.WINDOWS

    @property
    def path_separator(self) -> str:
        """Delimiter between entries of a search-path variable."""
        return ";" if self.is_windows else ":"

    @property
    def script_suffix(self) -> str:
        return ".cmd" if self.is_windows else ".sh"

    @property
    def path_type(self) -> Type[PurePath]:
        return PureWindowsPath if self.is_windows else PurePosixPath


def forward_slashes(text: str) -> str:
    return text.replace("\\", "/")


__all__ = ["Platform", "forward_slashes"]
