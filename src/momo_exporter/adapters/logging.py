"""Standard library logging configuration for the exporter.

Two output formats are supported, mirroring the Prometheus exporter
conventions: ``logfmt`` (key=value pairs) and ``json`` (one object per line).
Extra fields passed via ``logger.info(..., extra={...})`` are included.
"""

import json
import logging
import sys
import traceback
from datetime import UTC, datetime
from typing import Any

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
LOG_FORMATS = ("logfmt", "json")

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the structured fields of a log record."""
    fields: dict[str, Any] = {
        "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(
            timespec="milliseconds"
        ),
        "level": record.levelname.lower(),
        "caller": f"{record.module}:{record.lineno}",
        "msg": record.getMessage(),
    }

    # Add any extra attributes passed via logging call
    for key, value in record.__dict__.items():
        if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
            value, (str, int, float, bool)
        ):
            fields[key] = value

    if record.exc_info:
        exc_type, exc_value, exc_tb = record.exc_info
        if exc_type is not None:
            fields["exc_type"] = exc_type.__name__
        if exc_value is not None:
            fields["exc_message"] = str(exc_value)
        if exc_tb is not None:
            fields["exc_traceback"] = "".join(
                traceback.format_exception(exc_type, exc_value, exc_tb)
            )
    return fields


def _logfmt_value(value: Any) -> str:
    text = str(value).lower() if isinstance(value, bool) else str(value)
    if text == "" or any(c in text for c in ' ="\n'):
        return json.dumps(text)
    return text


class LogfmtFormatter(logging.Formatter):
    """Formats records as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        fields = _record_fields(record)
        return " ".join(f"{key}={_logfmt_value(value)}" for key, value in fields.items())


class JSONFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(_record_fields(record))


def configure_logging(level: str = "info", fmt: str = "logfmt") -> logging.Handler:
    """Install a single stream handler on the root logger.

    Args:
        level: One of debug, info, warn, error.
        fmt: ``logfmt`` or ``json``.

    Returns:
        The installed handler.

    Raises:
        ValueError: On an unknown level or format.
    """
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format {fmt!r}")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if fmt == "json" else LogfmtFormatter())
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(LOG_LEVELS[level])
    return handler
