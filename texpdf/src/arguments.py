"""Command-line arguments for texi2dvi."""
from __future__ import annotations

from typing import List

from .environment import TexmfPaths
from .platform import Platform, forward_slashes
from .system import encode_for_system
from .toolchain import ToolchainInfo, ToolchainVariant


PDF_FLAG = "--pdf"
QUIET_FLAG = "--quiet"
INCLUDE_FLAG = "-I"


def build_args(info: ToolchainInfo, platform: Platform, paths: TexmfPaths | None) -> List[str]:
    """Return the texi2dvi arguments, without the target file.

    MiKTeX on Windows does not read the composed input variables, so the
    LaTeX and BibTeX style directories are passed with ``-I``. BIBINPUTS has
    no flag equivalent and is left out.
    """
    args: List[str] = [PDF_FLAG, QUIET_FLAG]

    if platform.is_windows and info.variant is ToolchainVariant.ALTERNATE and paths is not None:
        for directory in (paths.tex_inputs, paths.bst_inputs):
            args.append(INCLUDE_FLAG)
            args.append(forward_slashes(encode_for_system(str(directory))))

    return args


__all__ = ["INCLUDE_FLAG", "PDF_FLAG", "QUIET_FLAG", "build_args"]
