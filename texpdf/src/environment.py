"""Environment composition for texi2dvi.

texi2dvi finds the LaTeX and BibTeX inputs that ship with R through the
``TEXINPUTS``, ``BIBINPUTS`` and ``BSTINPUTS`` search-path variables. Each
variable is composed from the ambient value (``.`` when unset) followed by the
matching directory under ``<R share>/texmf`` and an empty trailing entry; TeX
stops scanning the default directories when that empty entry is missing.

When the texmf tree cannot be found no input variable is produced at all and
the compile proceeds with the ambient environment only.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Dict, Mapping, Tuple
import os

from .platform import Platform, forward_slashes
from .system import encode_for_system


TEXINPUTS = "TEXINPUTS"
BIBINPUTS = "BIBINPUTS"
BSTINPUTS = "BSTINPUTS"

PDFLATEX_SCRIPT = "texpdf-pdflatex"
DEFAULT_SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "scripts"


@dataclass(frozen=True, slots=True)
class TexmfPaths:
    tex_inputs: PurePath
    bib_inputs: PurePath
    bst_inputs: PurePath


@dataclass(frozen=True, slots=True)
class SearchPathVariable:
    name: str
    segments: Tuple[str, ...]
    separator: str

    @property
    def value(self) -> str:
        return self.separator.join(self.segments)


def resolve_share_dir(configured: str | None, environment: Mapping[str, str]) -> str | None:
    """Pick the R share directory: configuration, then ``R_SHARE_DIR``, then ``$R_HOME/share``."""
    if configured:
        return configured
    share_dir = environment.get("R_SHARE_DIR")
    if share_dir:
        return share_dir
    r_home = environment.get("R_HOME")
    if r_home:
        return os.path.join(r_home, "share")
    return None


def locate_texmf_paths(share_dir: str | None, platform: Platform) -> TexmfPaths | None:
    """Return the texmf input directories, or ``None`` when the tree is absent."""
    if not share_dir or not os.path.isdir(share_dir):
        return None
    texmf_dir = os.path.join(os.path.abspath(share_dir), "texmf")
    if not os.path.isdir(texmf_dir):
        return None

    texmf = platform.path_type(texmf_dir)
    return TexmfPaths(
        tex_inputs=texmf / "tex" / "latex",
        bib_inputs=texmf / "bibtex" / "bib",
        bst_inputs=texmf / "bibtex" / "bst",
    )


def inputs_variable(
    name: str,
    extra_path: PurePath,
    environment: Mapping[str, str],
    platform: Platform,
    *,
    ensure_forward_slashes: bool,
) -> SearchPathVariable:
    ambient = environment.get(name) or "."
    segments = [ambient, encode_for_system(str(extra_path)), ""]
    # texi2dvi in R rewrites TEXINPUTS (only) with forward slashes on Windows
    if platform.is_windows and ensure_forward_slashes:
        segments = [forward_slashes(segment) for segment in segments]
    return SearchPathVariable(name=name, segments=tuple(segments), separator=platform.path_separator)


def compose_input_paths(
    paths: TexmfPaths | None,
    environment: Mapping[str, str],
    platform: Platform,
) -> Tuple[SearchPathVariable, ...]:
    if paths is None:
        return ()
    return (
        inputs_variable(TEXINPUTS, paths.tex_inputs, environment, platform, ensure_forward_slashes=True),
        inputs_variable(BIBINPUTS, paths.bib_inputs, environment, platform, ensure_forward_slashes=False),
        inputs_variable(BSTINPUTS, paths.bst_inputs, environment, platform, ensure_forward_slashes=False),
    )


def pdflatex_script(platform: Platform, scripts_dir: Path | None = None) -> Path:
    directory = scripts_dir if scripts_dir is not None else DEFAULT_SCRIPTS_DIR
    return directory / f"{PDFLATEX_SCRIPT}{platform.script_suffix}"


def texi2dvi_environment(
    paths: TexmfPaths | None,
    environment: Mapping[str, str],
    platform: Platform,
    scripts_dir: Path | None = None,
) -> Dict[str, str]:
    """Build the variables to overlay on the ambient environment for a texi2dvi run."""
    overlay: Dict[str, str] = {
        variable.name: variable.value
        for variable in compose_input_paths(paths, environment, platform)
    }

    # tools::texi2dvi defines these on POSIX systems
    if not platform.is_windows:
        overlay["TEXINDY"] = "false"
        overlay["LC_COLLATE"] = "C"

    script = pdflatex_script(platform, scripts_dir)
    overlay["PDFLATEX"] = encode_for_system(os.path.abspath(script))
    return overlay


__all__ = [
    "BIBINPUTS",
    "BSTINPUTS",
    "DEFAULT_SCRIPTS_DIR",
    "SearchPathVariable",
    "TEXINPUTS",
    "TexmfPaths",
    "compose_input_paths",
    "inputs_variable",
    "locate_texmf_paths",
    "pdflatex_script",
    "resolve_share_dir",
    "texi2dvi_environment",
]
