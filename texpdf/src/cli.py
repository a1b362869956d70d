"""Command line interface for texpdf."""
from __future__ import annotations

from argparse import ArgumentParser
from pathlib import Path
from typing import Sequence
import asyncio
import sys

from core.command_runner import SubprocessCommandRunner

from .compile import compile_many
from .config import load_settings, resolve_config_path
from .context import Console, Context
from .platform import Platform
from .system import environment_snapshot


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="texpdf",
        description="Compile LaTeX documents to PDF with texi2dvi",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="LaTeX source files to compile")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file (TOML, JSON or YAML)")
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Probe the toolchain and show the command without running it")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (maps to debug)")
    parser.add_argument(
        "--log",
        "-l",
        choices=["none", "error", "info", "debug"],
        default=None,
        help="Set log level (default: none, or the configured level)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    environment = environment_snapshot()

    # Explicit --log takes precedence, then --verbose, then the configuration
    bootstrap_level = args.log or ("debug" if args.verbose else "none")
    console = Console(level=bootstrap_level, dry_run=args.dry_run)

    config_path = resolve_config_path(args.config, environment)
    try:
        settings = load_settings(config_path)
    except Exception as e:
        print(f"Error: Failed to load config: {e}", file=sys.stderr)
        return 1

    if args.log is None and not args.verbose and settings.log:
        console = Console(level=settings.log, dry_run=args.dry_run)
    if config_path is not None:
        console.debug(f"Loaded configuration from {config_path}")

    ctx = Context(
        settings=settings,
        console=console,
        runner=SubprocessCommandRunner(),
        environment=environment,
        platform=Platform.current(),
    )

    results = asyncio.run(compile_many(ctx, args.files))
    failed = [result for result in results if not result.ok or result.exit_code != 0]
    return 1 if failed else 0


__all__ = ["build_parser", "main"]
