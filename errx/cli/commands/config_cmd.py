from __future__ import annotations

from pathlib import Path

import typer

from errx.cli.context import build_context
from errx.output.console import Style


def config(
    path: Path | None = typer.Option(
        None,
        "--path",
        help="Settings file (default: errx.toml or pyproject.toml in the current dir)",
    ),
) -> None:
    """Show the effective stack capture settings."""
    ctx = build_context(path)
    source = str(ctx.config_path) if ctx.config_path is not None else "defaults"
    capturer = ctx.config.capturer()

    ctx.console.print(f"source: {source}", Style.DIM)
    ctx.console.print(f"caller_skip_level: {ctx.config.caller_skip_level}")
    ctx.console.print(f"max_stack_depth: {ctx.config.max_stack_depth}")
    ctx.console.print(f"effective skip: {capturer.skip}", Style.DIM)
