"""Result type for explicit error returns.

Functions that can fail in expected ways return ``Ok(value)`` or
``Err(error)`` instead of raising. An ``Err`` holding an exception can pick
up context on its way up through ``Err.context``, which wraps the error in
an ErrorNode chain.

Usage:
    def load(path: Path) -> Result[bytes, OSError]:
        try:
            return Ok(path.read_bytes())
        except OSError as e:
            return Err(e)

    match load(path):
        case Ok(value):
            print(len(value))
        case Err() as err:
            print(err.context(f"loading {path}").error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeGuard, TypeVar

from .chain import _DEFAULT_CAPTURER, Chained, ErrorNode, _new_node, _wrap_node

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Returns the contained value."""
        return self.value

    def context(self, message: str) -> Ok[T]:
        """Returns self unchanged (nothing to add context to)."""
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises the contained error.

        Exceptions are raised as they are; any other error value is reported
        through a ValueError.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"called unwrap on Err: {self.error}")

    def context(self, message: str) -> Err[ErrorNode]:
        """Wrap the contained error with a context message.

        An exception error is wrapped exactly as ``errx.wrap`` would; the
        trace, when one is captured, starts at the caller of this method.
        Any other error value becomes the origin of a new chain, traced at
        the caller of this method.

        Args:
            message: Context describing what was being attempted.

        Returns:
            Err holding the wrapping ErrorNode.
        """
        if isinstance(self.error, BaseException):
            return Err(_wrap_node(self.error, message, _DEFAULT_CAPTURER))
        origin = _new_node(str(self.error), _DEFAULT_CAPTURER)
        return Err(ErrorNode(message, Chained(origin)))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Type guard that checks if a Result is Ok."""
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Type guard that checks if a Result is Err."""
    return isinstance(result, Err)
