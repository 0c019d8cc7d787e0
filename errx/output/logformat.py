"""logging formatters that understand error chains.

ChainFormatter keeps the usual text layout but renders an ErrorNode passed
as ``exc_info`` with its own chain and trace instead of the interpreter
traceback. JSONChainFormatter emits one JSON object per record with the
error's structured export.

Usage:
    handler = logging.StreamHandler()
    handler.setFormatter(ChainFormatter("%(levelname)s %(message)s"))
    logging.getLogger().addHandler(handler)

    try:
        ...
    except OSError as e:
        logger.error("sync failed", exc_info=errx.wrap(e, "syncing"))
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from types import TracebackType
from typing import Any

from errx.core.chain import ErrorNode

__all__ = ["ChainFormatter", "JSONChainFormatter", "error_fields"]

type _ExcInfo = (
    tuple[type[BaseException], BaseException, TracebackType | None] | tuple[None, None, None]
)

# Attributes every LogRecord has; anything else came in through ``extra``.
_RECORD_FIELDS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "taskName",
    }
)


class ChainFormatter(logging.Formatter):
    """Text formatter that prints ErrorNode chains with their traces."""

    def formatException(self, ei: _ExcInfo) -> str:
        error = ei[1]
        if isinstance(error, ErrorNode):
            return error.render_with_trace().rstrip("\n")
        return super().formatException(ei)


def error_fields(error: BaseException) -> dict[str, Any]:
    """Describe an exception for a structured log record.

    ErrorNode chains export their fields (absent ones omitted) plus the
    rendered summary; other exceptions fall back to the interpreter
    traceback text.
    """
    if isinstance(error, ErrorNode):
        return {"type": type(error).__name__, "summary": error.render_summary(), **error.as_dict()}
    return {
        "type": type(error).__name__,
        "message": str(error),
        "stack_trace": "".join(traceback.format_exception(error)),
    }


class JSONChainFormatter(logging.Formatter):
    """JSON formatter with structured error chains.

    Outputs log records as JSON with standard fields:
    - timestamp: ISO 8601 formatted timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - context: Fields passed through ``extra``
    - error: error_fields() of the record's exception, when present
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {k: v for k, v in record.__dict__.items() if k not in _RECORD_FIELDS}
        if context:
            log_data["context"] = context

        if record.exc_info and record.exc_info[1] is not None:
            log_data["error"] = error_fields(record.exc_info[1])

        return json.dumps(log_data, default=str)
