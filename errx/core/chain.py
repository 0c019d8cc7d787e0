"""Chained error values.

An ErrorNode carries a message, an optional cause, and the stack trace of
the point where the chain picked up a new origin. Wrapping an ErrorNode adds
context without capturing again; wrapping any other exception captures a
trace at the wrap site, since that is the only trace available for it.

Usage:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise errx.wrap(e, f"reading {path}") from e

    err = errx.wrap(errx.wrap(errx.new("inner"), "middle"), "outer")
    str(err)                  # "outer: middle: inner"
    err.render_with_trace()   # "outer: middle: inner\\n  at ...\\n"
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Self

from .stack import StackCapturer, StackTrace

__all__ = [
    "SEPARATOR",
    "Cause",
    "Chained",
    "ErrorFactory",
    "ErrorNode",
    "Opaque",
    "errorf",
    "inner_of",
    "new",
    "stack_trace_of",
    "wrap",
    "wrapf",
]

SEPARATOR = ": "


@dataclass(frozen=True, slots=True)
class Chained:
    """Cause that is itself an ErrorNode (a private copy of it)."""

    node: ErrorNode


@dataclass(frozen=True, slots=True)
class Opaque:
    """Cause that is a foreign exception, held by reference."""

    error: BaseException


type Cause = Chained | Opaque | None


@dataclass(frozen=True, slots=True)
class _Link:
    depth: int
    text: str
    stack_trace: StackTrace | None


class ErrorNode(Exception):
    """An error message with an optional cause and stack trace.

    Attributes:
        message: Context added by this node; may be empty.
        cause: Chained, Opaque, or None for a terminal node.
        stack_trace: Trace captured when this node was created, or None
            when the trace lives further down the chain.

    Instances are raisable. The interpreter's ``__cause__`` is pointed at
    ``inner`` so a raised chain also reads well in a plain traceback.
    """

    def __init__(
        self,
        message: str = "",
        cause: Cause = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.stack_trace = stack_trace
        inner = self.inner
        if isinstance(inner, BaseException):
            self.__cause__ = inner

    @property
    def inner(self) -> BaseException | None:
        """The wrapped error value, or None for a terminal node."""
        match self.cause:
            case Chained(node=node):
                return node
            case Opaque(error=error):
                return error
            case None:
                return None

    def is_zero(self) -> bool:
        """True when the node carries no message, cause, or trace."""
        return self.cause is None and self.message == "" and self.stack_trace is None

    def render_summary(self) -> str:
        """Messages of the whole chain joined by ': ', without traces."""
        return SEPARATOR.join(link.text for link in self._links() if link.text)

    def render_with_trace(self) -> str:
        """The summary followed by every trace in the chain.

        The first trace in the chain starts at the normal frame indent; each
        trace owned by a deeper node is indented one level further per chain
        link. Returns the bare summary when no node owns a trace.
        """
        links = self._links()
        summary = SEPARATOR.join(link.text for link in links if link.text)
        traced = [link for link in links if link.stack_trace is not None]
        if not traced:
            return summary
        base = traced[0].depth
        traces = "".join(
            link.stack_trace.format(link.depth - base)
            for link in traced
            if link.stack_trace is not None
        )
        return f"{summary}\n{traces}"

    def as_dict(self) -> dict[str, object]:
        """Export the node's fields, omitting the ones that are absent."""
        out: dict[str, object] = {}
        if self.message:
            out["message"] = self.message
        match self.cause:
            case Chained(node=node):
                out["inner"] = node.as_dict()
            case Opaque(error=error):
                out["inner"] = {"type": type(error).__name__, "message": _safe_str(error)}
            case None:
                pass
        if self.stack_trace is not None:
            out["stack_trace"] = self.stack_trace.as_list()
        return out

    def _links(self) -> list[_Link]:
        links: list[_Link] = []
        seen: set[int] = set()
        node: ErrorNode = self
        depth = 0
        while True:
            seen.add(id(node))
            links.append(_Link(depth, node.message, node.stack_trace))
            match node.cause:
                case Chained(node=inner):
                    if inner.is_zero() or id(inner) in seen:
                        break
                    node = inner
                    depth += 1
                case Opaque(error=error):
                    links.append(_Link(depth + 1, _safe_str(error), None))
                    break
                case _:
                    break
        return links

    def __copy__(self) -> Self:
        dup = type(self).__new__(type(self), *self.args)
        dup.__dict__.update(self.__dict__)
        dup.__cause__ = self.__cause__
        return dup

    def __str__(self) -> str:
        return self.render_summary()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


def _safe_str(error: BaseException) -> str:
    try:
        return str(error)
    except Exception:
        return f"<unprintable {type(error).__name__}>"


def _format(template: str, args: tuple[object, ...], kwargs: dict[str, object]) -> str:
    """Build a message from template, keeping it verbatim when it cannot be formatted.

    Without arguments the template is the message, braces included.
    """
    if not (args or kwargs):
        return template
    try:
        return template.format(*args, **kwargs)
    except (IndexError, KeyError, ValueError):
        return template


def _new_node(message: str, capturer: StackCapturer) -> ErrorNode:
    return ErrorNode(message, None, capturer.capture())


def _wrap_node(cause: BaseException | None, message: str, capturer: StackCapturer) -> ErrorNode:
    if isinstance(cause, ErrorNode):
        return ErrorNode(message, Chained(copy.copy(cause)))
    if cause is None:
        return ErrorNode(message, None, capturer.capture())
    return ErrorNode(message, Opaque(cause), capturer.capture())


@dataclass(frozen=True, slots=True)
class ErrorFactory:
    """Error constructors bound to a specific StackCapturer.

    Build one at startup when errors are created through helper functions:

        errors = ErrorFactory(StackCapturer().adjusted(1))

        def setup_error(what: str) -> ErrorNode:
            return errors.new(f"setup failed: {what}")

    Traces from ``setup_error`` then start at its caller.
    """

    capturer: StackCapturer = StackCapturer()

    def new(self, message: str) -> ErrorNode:
        return _new_node(message, self.capturer)

    def errorf(self, template: str, *args: object, **kwargs: object) -> ErrorNode:
        return _new_node(_format(template, args, kwargs), self.capturer)

    def wrap(self, cause: BaseException | None, message: str) -> ErrorNode:
        return _wrap_node(cause, message, self.capturer)

    def wrapf(
        self, cause: BaseException | None, template: str, *args: object, **kwargs: object
    ) -> ErrorNode:
        return _wrap_node(cause, _format(template, args, kwargs), self.capturer)


_DEFAULT_CAPTURER = StackCapturer()


def new(message: str) -> ErrorNode:
    """Create a terminal error with a trace starting at the caller.

    Args:
        message: Error message; may be empty.

    Returns:
        A node with no cause and a freshly captured stack trace.
    """
    return _new_node(message, _DEFAULT_CAPTURER)


def errorf(template: str, *args: object, **kwargs: object) -> ErrorNode:
    """Like new(), with the message built by ``template.format(*args, **kwargs)``.

    The template is used verbatim when no arguments are given or when it
    does not match them.
    """
    return _new_node(_format(template, args, kwargs), _DEFAULT_CAPTURER)


def wrap(cause: BaseException | None, message: str) -> ErrorNode:
    """Add context to an existing error.

    Args:
        cause: The error being wrapped. An ErrorNode is copied and keeps its
            own trace; any other exception is held by reference and a trace
            is captured here. None yields a terminal node with a trace.
        message: Context message; may be empty.

    Returns:
        The wrapping node.
    """
    return _wrap_node(cause, message, _DEFAULT_CAPTURER)


def wrapf(cause: BaseException | None, template: str, *args: object, **kwargs: object) -> ErrorNode:
    """Like wrap(), with the message built like errorf()."""
    return _wrap_node(cause, _format(template, args, kwargs), _DEFAULT_CAPTURER)


def inner_of(err: BaseException | None) -> BaseException | None:
    """Return the wrapped error if err is an ErrorNode, else None."""
    if isinstance(err, ErrorNode):
        return err.inner
    return None


def stack_trace_of(err: BaseException | None) -> StackTrace | None:
    """Return the stack trace if err is an ErrorNode, else None."""
    if isinstance(err, ErrorNode):
        return err.stack_trace
    return None
