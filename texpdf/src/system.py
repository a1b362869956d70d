"""Thin wrappers around the host system: paths, executables and the environment."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping
import os
import shutil


def resolve_path(user_path: str | os.PathLike[str]) -> Path:
    """Expand ``~`` aliases and return the absolute filesystem path."""
    return Path(os.path.expanduser(os.fspath(user_path))).resolve()


def find_executable(name: str, environment: Mapping[str, str] | None = None) -> Path | None:
    search_path = environment.get("PATH") if environment is not None else None
    found = shutil.which(name, path=search_path)
    return Path(found) if found else None


def environment_snapshot() -> Dict[str, str]:
    return dict(os.environ)


def encode_for_system(text: str) -> str:
    """Round-trip ``text`` through the filesystem encoding so child processes see the same bytes."""
    return os.fsdecode(os.fsencode(text))


__all__ = ["encode_for_system", "environment_snapshot", "find_executable", "resolve_path"]
