"""Error presentation on a console."""

from __future__ import annotations

from typing import TYPE_CHECKING

from errx.core.chain import ErrorNode
from errx.output.console import Style

if TYPE_CHECKING:
    from errx.output.console import ConsoleProtocol

__all__ = ["print_error"]


def print_error(error: BaseException, console: ConsoleProtocol, *, trace: bool = False) -> None:
    """Print an error summary, optionally followed by its stack traces.

    Args:
        error: Any exception; ErrorNode chains get the chain summary.
        console: Where to print.
        trace: Also print each trace line of an ErrorNode chain, dimmed.
    """
    match error:
        case ErrorNode() if trace:
            summary, _, traces = error.render_with_trace().partition("\n")
            console.error(summary)
            for line in traces.splitlines():
                console.print(line, Style.DIM)
        case _:
            console.error(str(error))
