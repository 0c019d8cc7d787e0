"""Core error chain and stack capture."""

from .chain import (
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
from .config import Config, ConfigError, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .stack import StackCapturer, StackFrame, StackTrace, trim_path

__all__ = [
    # chain
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
    # config
    "Config",
    "ConfigError",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # stack
    "StackCapturer",
    "StackFrame",
    "StackTrace",
    "trim_path",
]
