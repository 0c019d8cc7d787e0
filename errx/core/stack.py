"""Call-stack capture for error values.

A StackCapturer walks the interpreter's frames at the point an error is
created and records them as an immutable StackTrace. Capturers are plain
frozen values: code that creates errors through a helper builds an adjusted
capturer once at startup and passes it along (usually via ErrorFactory).

Usage:
    capturer = StackCapturer().adjusted(1)  # errors are created one call deeper
    trace = capturer.capture()
    print(trace, end="")
"""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass, replace
from types import FrameType

__all__ = [
    "MAX_STACK_DEPTH",
    "MIN_CALLER_SKIP",
    "StackCapturer",
    "StackFrame",
    "StackTrace",
    "frame_from",
    "trim_path",
]

# capture() itself, the node builder, and the public entry point.
MIN_CALLER_SKIP = 3
MAX_STACK_DEPTH = 32

INDENT = "  "

_SEPARATORS = frozenset({"/", os.sep})


@dataclass(frozen=True, slots=True)
class StackFrame:
    """One call site in a stack trace.

    Attributes:
        function_name: Module-qualified function name, e.g. ``pkg.mod.Class.method``.
        file_name: Absolute path of the source file.
        trimmed_file_name: file_name relative to the project root.
        line: Line number being executed.
    """

    function_name: str
    file_name: str
    trimmed_file_name: str
    line: int

    def format(self, depth: int = 0) -> str:
        """Render the frame as one listing line, indented for the given chain depth."""
        indent = INDENT * (depth + 1)
        return f"{indent}at {self.function_name}({self.trimmed_file_name}:{self.line})\n"

    def as_dict(self) -> dict[str, object]:
        return {
            "function_name": self.function_name,
            "file_name": self.file_name,
            "trimmed_file_name": self.trimmed_file_name,
            "line": self.line,
        }

    def __str__(self) -> str:
        return self.format()


class StackTrace(tuple[StackFrame, ...]):
    """Ordered frames, closest to the capture point first.

    A StackTrace may hold zero frames. Callers that need to know whether a
    trace was captured at all compare against None, never truthiness.
    """

    __slots__ = ()

    def format(self, depth: int = 0) -> str:
        """Render every frame, indented for the given chain depth."""
        return "".join(frame.format(depth) for frame in self)

    def as_list(self) -> list[dict[str, object]]:
        return [frame.as_dict() for frame in self]

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"StackTrace({list(self)!r})"


def trim_path(module: str, file_name: str) -> str:
    """Return file_name relative to the root its module was imported from.

    The module's dotted name says how many directories sit between the
    import root and the file: ``pkg.sub.mod`` lives in ``pkg/sub/mod.py``,
    so three path segments are kept. A package ``__init__.py`` keeps one
    more segment for the package directory itself.

    Args:
        module: Dotted module name (``__name__`` of the frame's globals).
        file_name: Absolute source file path.

    Returns:
        The trimmed path, or file_name unchanged when it has fewer
        separators than the module name implies.

    Example:
        trim_path("pkg.sub.mod", "/home/user/src/pkg/sub/mod.py")
        # -> "pkg/sub/mod.py"
    """
    goal = module.count(".") + 1
    if _basename(file_name) == "__init__.py":
        goal += 1

    i = len(file_name)
    for _ in range(goal):
        i = _last_separator(file_name, i)
        if i == -1:
            return file_name
    return file_name[i + 1 :]


def _last_separator(path: str, end: int) -> int:
    return max(path.rfind(sep, 0, end) for sep in _SEPARATORS)


def _basename(path: str) -> str:
    return path[_last_separator(path, len(path)) + 1 :]


def frame_from(frame: FrameType) -> StackFrame | None:
    """Build a StackFrame from a live interpreter frame.

    Returns None when the frame has no line number to report.
    """
    line = frame.f_lineno
    if line is None:
        return None

    code = frame.f_code
    module = frame.f_globals.get("__name__")
    if not isinstance(module, str):
        module = ""

    qualname = code.co_qualname
    function_name = f"{module}.{qualname}" if module else qualname

    file_name = code.co_filename
    if not file_name.startswith("<"):
        file_name = os.path.abspath(file_name)

    return StackFrame(
        function_name=function_name,
        file_name=file_name,
        trimmed_file_name=trim_path(module, file_name) if module else file_name,
        line=line,
    )


@dataclass(frozen=True, slots=True)
class StackCapturer:
    """Captures stack traces starting a fixed number of frames up.

    Attributes:
        skip: Frames to discard above capture() itself. Never below
            MIN_CALLER_SKIP, which keeps the library's own frames out of
            the trace.
        max_depth: Maximum number of frames to record.

    A capturer is meant to be configured once during initialization and
    then shared; it holds no mutable state.
    """

    skip: int = MIN_CALLER_SKIP
    max_depth: int = MAX_STACK_DEPTH

    def __post_init__(self) -> None:
        if self.skip < MIN_CALLER_SKIP:
            object.__setattr__(self, "skip", MIN_CALLER_SKIP)
        if self.max_depth < 0:
            object.__setattr__(self, "max_depth", 0)

    def adjusted(self, delta: int) -> StackCapturer:
        """Return a capturer that skips delta more frames.

        Use this when errors are created through wrapper helpers, passing the
        number of wrapping functions, so traces still start at the helper's
        caller. The result is clamped to MIN_CALLER_SKIP.
        """
        return replace(self, skip=max(MIN_CALLER_SKIP, self.skip + delta))

    def capture(self) -> StackTrace:
        """Record the active call stack.

        Returns:
            The captured frames. Empty when the interpreter does not expose
            frames or the stack is shallower than the skip level.
        """
        frame = inspect.currentframe()
        for _ in range(self.skip):
            if frame is None:
                break
            frame = frame.f_back

        frames: list[StackFrame] = []
        while frame is not None and len(frames) < self.max_depth:
            record = frame_from(frame)
            if record is not None:
                frames.append(record)
            frame = frame.f_back

        # Break the reference cycle through the local frame variable.
        del frame
        return StackTrace(frames)
