"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .errors import print_error
from .logformat import ChainFormatter, JSONChainFormatter

__all__ = [
    "ChainFormatter",
    "ConsoleProtocol",
    "JSONChainFormatter",
    "MockConsole",
    "RichConsole",
    "Style",
    "print_error",
]
