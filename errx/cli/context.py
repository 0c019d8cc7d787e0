from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from errx.core.config import Config, load_config
from errx.core.errors import ErrorCode
from errx.core.result import Err
from errx.output.console import ConsoleProtocol, RichConsole

CONFIG_CANDIDATES = ("errx.toml", "pyproject.toml")


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    config_path: Path | None
    console: ConsoleProtocol


def find_config(start: Path) -> Path | None:
    """Return the first settings file present in start, if any."""
    for name in CONFIG_CANDIDATES:
        candidate = start / name
        if candidate.is_file():
            return candidate
    return None


def build_context(config_path: Path | None = None) -> CLIContext:
    console = RichConsole()
    path = config_path if config_path is not None else find_config(Path.cwd())
    if path is None:
        return CLIContext(config=Config(), config_path=None, console=console)

    result = load_config(path)
    if isinstance(result, Err):
        RichConsole(stderr=True).error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(config=result.value, config_path=path, console=console)
