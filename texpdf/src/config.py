"""Configuration loading for texpdf."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping
import os

from core.config_loader import config_section, load_config_file


CONFIG_ENV_VAR = "TEXPDF_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/texpdf/config.toml")

SECTION = "texpdf"
DEFAULTS: Dict[str, Any] = {
    "program": "texi2dvi",
    "probe_flag": "--version",
    "probe_timeout": 30.0,
    "share_dir": None,
    "scripts_dir": None,
    "log": None,
}


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(slots=True)
class Settings:
    program: str = "texi2dvi"
    probe_flag: str = "--version"
    probe_timeout: float = 30.0
    share_dir: str | None = None
    scripts_dir: Path | None = None
    log: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        section = config_section(data, SECTION)

        unknown = {str(key) for key in section.keys() if str(key) not in DEFAULTS}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ValueError(f"Configuration section '{SECTION}' contains unknown keys: {joined}")

        merged = {**DEFAULTS, **section}

        program = _optional_str(merged, "program")
        if program is None:
            raise ValueError("Configuration key 'program' must not be empty")

        try:
            probe_timeout = float(merged["probe_timeout"])
        except (TypeError, ValueError) as exc:
            raise ValueError("Configuration key 'probe_timeout' must be a number") from exc
        if probe_timeout <= 0:
            raise ValueError("Configuration key 'probe_timeout' must be positive")

        scripts_dir = _optional_str(merged, "scripts_dir")
        share_dir = _optional_str(merged, "share_dir")

        return cls(
            program=program,
            probe_flag=_optional_str(merged, "probe_flag") or "--version",
            probe_timeout=probe_timeout,
            share_dir=os.path.expanduser(share_dir) if share_dir else None,
            scripts_dir=Path(os.path.expanduser(scripts_dir)) if scripts_dir else None,
            log=_optional_str(merged, "log"),
        )


def resolve_config_path(cli_value: Path | None, environment: Mapping[str, str]) -> Path | None:
    """Determine the configuration file: CLI > ``TEXPDF_CONFIG`` > default location if present."""
    if cli_value is not None:
        return cli_value
    env_value = environment.get(CONFIG_ENV_VAR)
    if env_value:
        return Path(os.path.expanduser(env_value))
    default = Path(os.path.expanduser(str(DEFAULT_CONFIG_PATH)))
    if default.is_file():
        return default
    return None


def load_settings(path: Path | None) -> Settings:
    if path is None:
        return Settings()
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return Settings.from_mapping(load_config_file(path))


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULTS",
    "DEFAULT_CONFIG_PATH",
    "SECTION",
    "Settings",
    "load_settings",
    "resolve_config_path",
]
