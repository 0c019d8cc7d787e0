from __future__ import annotations

import typer

from errx import __version__
from errx.cli.commands.config_cmd import config
from errx.cli.commands.demo import demo
from errx.cli.commands.trim import trim


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(trim)
app.command()(config)
app.command()(demo)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
