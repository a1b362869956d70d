"""
Compile a LaTeX document to PDF with texi2dvi.

The sequence is linear: locate texi2dvi, probe its version, compose the
environment and the arguments, then run it. The first failure is reported as a
single line on the console error stream and ends the attempt; nothing is
retried and nothing is raised to the caller.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List
import asyncio
import os

from .arguments import build_args
from .context import Context
from .environment import locate_texmf_paths, resolve_share_dir, texi2dvi_environment
from .errors import TargetPathError, TexPdfError, ToolNotFoundError
from .runner import InvocationPlan, InvocationResult, ProcessCallbacks, ProcessRunner
from .system import find_executable, resolve_path
from .toolchain import probe


def _describe_plan(ctx: Context, plan: InvocationPlan) -> None:
    ctx.console.dry(ctx.runner.format_command(plan.command))
    ctx.console.dry(f"      (cwd: {plan.working_dir})")
    for name, value in plan.environment.items():
        ctx.console.dry(f"      (env: {name}={value})")


def _resolve_target(file_path: str | os.PathLike[str]) -> Path:
    try:
        return resolve_path(file_path)
    except (OSError, RuntimeError) as exc:
        reason = getattr(exc, "strerror", None) or str(exc)
        raise TargetPathError(os.fspath(file_path), reason) from exc


async def _compile(ctx: Context, target: Path) -> InvocationResult:
    settings = ctx.settings
    environment = dict(ctx.environment)

    executable = find_executable(settings.program, environment)
    if executable is None:
        raise ToolNotFoundError(settings.program)
    ctx.console.debug(f"Using {executable}")

    info = await asyncio.to_thread(
        probe,
        ctx.runner,
        executable,
        flag=settings.probe_flag,
        timeout=settings.probe_timeout,
    )
    ctx.console.debug(f"Detected {info.variant.value} toolchain")

    paths = locate_texmf_paths(resolve_share_dir(settings.share_dir, environment), ctx.platform)
    if paths is None:
        ctx.console.debug("R texmf directory not found; keeping the ambient TeX search paths")

    overlay = texi2dvi_environment(paths, environment, ctx.platform, settings.scripts_dir)
    args = build_args(info, ctx.platform, paths)
    plan = InvocationPlan.for_target(executable, overlay, args, target)

    if ctx.console.dry_run:
        _describe_plan(ctx, plan)
        return InvocationResult(exit_code=0)

    ctx.console.info(f"Compiling {target}")
    callbacks = ProcessCallbacks(
        on_stdout=ctx.console.write_output,
        on_stderr=ctx.console.write_error,
    )
    result = await ProcessRunner(environment).run(plan, callbacks)
    if result.error is not None:
        raise result.error
    ctx.console.info(f"{settings.program} exited with code {result.exit_code} for {target.name}")
    return result


async def compile_to_pdf(ctx: Context, file_path: str | os.PathLike[str]) -> InvocationResult:
    """Compile ``file_path`` and report any failure on the console.

    The returned result carries the compiler's exit code, or the failure that
    was already reported.
    """
    try:
        target = _resolve_target(file_path)
        return await _compile(ctx, target)
    except TexPdfError as exc:
        ctx.console.write_error(f"{exc.summary()}\n")
        return InvocationResult(error=exc)


async def compile_many(ctx: Context, file_paths: Iterable[str | os.PathLike[str]]) -> List[InvocationResult]:
    """Compile independent documents concurrently."""
    return list(await asyncio.gather(*(compile_to_pdf(ctx, path) for path in file_paths)))


def tex_to_pdf(ctx: Context, file_path: str | os.PathLike[str]) -> InvocationResult:
    return asyncio.run(compile_to_pdf(ctx, file_path))


__all__ = ["compile_many", "compile_to_pdf", "tex_to_pdf"]
