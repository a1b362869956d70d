"""Reading a configuration file into a plain mapping."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import json
import tomllib

import yaml


SUPPORTED_SUFFIXES = (".toml", ".json", ".yaml", ".yml")


def _decode(text: str, suffix: str) -> Any:
    if suffix == ".toml":
        return tomllib.loads(text)
    if suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_config_file(path: Path) -> Mapping[str, Any]:
    """Decode ``path`` by its suffix. An empty document reads as ``{}``."""

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported configuration file extension: {suffix or '<none>'}. "
            f"Supported: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    data = _decode(path.read_text(encoding="utf-8"), suffix)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"Configuration file '{path}' must contain a mapping at the root")
    return data


def config_section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return the ``name`` table of ``data``; an absent or empty table reads as ``{}``."""

    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"Configuration section '{name}' must be a mapping")
    return section


__all__ = ["SUPPORTED_SUFFIXES", "config_section", "load_config_file"]
