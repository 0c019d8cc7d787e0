from __future__ import annotations

import typer

from errx.cli.context import build_context
from errx.core.stack import trim_path


def trim(
    module: str = typer.Argument(..., help="Dotted module name, e.g. pkg.sub.mod"),
    file: str = typer.Argument(..., help="Absolute path of the module's source file"),
) -> None:
    """Show the project-relative path a trace would print for FILE."""
    ctx = build_context()
    ctx.console.print(trim_path(module, file))
