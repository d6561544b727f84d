"""
Structured logging for the session store.

Log records are emitted as one JSON object per line. Modules log through
``logging.getLogger(__name__)`` and attach structured context with
``extra={"extra_data": {...}}``.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

LOGGER_NAME = "redis_session_store"


class JSONFormatter(logging.Formatter):
    """
    Log formatter that outputs logs in JSON format.

    Each log entry contains:
    - timestamp: ISO 8601 formatted UTC timestamp
    - level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - message: The log message
    - logger: Name of the logger that produced the entry

    Fields in the record's ``extra_data`` attribute are merged in.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.module:
            log_data["module"] = record.module
        if record.funcName and record.funcName != "<module>":
            log_data["function"] = record.funcName
        if record.lineno:
            log_data["line"] = record.lineno

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            log_data.update(extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_trace"] = record.stack_info

        return json.dumps(log_data, default=str)


def configure_logging(
    settings: Optional[Any] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Install JSON logging on the package logger.

    Only the ``redis_session_store`` logger is configured so the host
    application's own logging setup is left untouched.

    Args:
        settings: Settings providing ``log_level``; INFO when omitted
        stream: Output stream, stdout by default

    Returns:
        The configured package logger
    """
    log_level_str = "INFO"
    if settings is not None and getattr(settings, "log_level", None):
        log_level_str = settings.log_level

    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicate logs
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JSONFormatter())
    package_logger.addHandler(handler)
    package_logger.propagate = False

    package_logger.debug("Logging configured", extra={
        "extra_data": {"log_level": log_level_str}
    })
    return package_logger
