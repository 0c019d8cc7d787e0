from __future__ import annotations

import typer

from errx.cli.context import build_context
from errx.core.chain import ErrorFactory, ErrorNode
from errx.output.errors import print_error


def _open_settings(errors: ErrorFactory) -> ErrorNode:
    cause = FileNotFoundError(2, "No such file or directory", "settings.toml")
    return errors.wrap(cause, "opening settings")


def _load_settings(errors: ErrorFactory) -> ErrorNode:
    return errors.wrap(_open_settings(errors), "loading settings")


def demo(
    trace: bool = typer.Option(True, "--trace/--no-trace", help="Print stack traces."),
) -> None:
    """Print a sample three-level error chain."""
    ctx = build_context()
    errors = ctx.config.factory()
    err = errors.wrap(_load_settings(errors), "starting up")
    print_error(err, ctx.console, trace=trace)
