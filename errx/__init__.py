"""errx: chained errors that keep the stack trace of their origin.

    err = errx.wrap(errx.wrap(errx.new("inner"), "middle"), "outer")
    str(err)                  # outer: middle: inner
    err.render_with_trace()   # outer: middle: inner
                              #   at app.main(app.py:13)
                              #   ...
"""

from errx.core.chain import (
    Cause,
    Chained,
    ErrorFactory,
    ErrorNode,
    Opaque,
    errorf,
    inner_of,
    new,
    stack_trace_of,
    wrap,
    wrapf,
)
from errx.core.stack import StackCapturer, StackFrame, StackTrace

__version__ = "0.1.0"

__all__ = [
    "Cause",
    "Chained",
    "ErrorFactory",
    "ErrorNode",
    "Opaque",
    "StackCapturer",
    "StackFrame",
    "StackTrace",
    "errorf",
    "inner_of",
    "new",
    "stack_trace_of",
    "wrap",
    "wrapf",
]
