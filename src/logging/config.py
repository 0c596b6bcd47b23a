"""Logging configuration with JSON formatting for Lambda invocations."""

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any

from src.config import settings


class JSONFormatter(logging.Formatter):
    """
    Formatter that renders each log record as a single JSON line.

    CloudWatch indexes one JSON object per line, so every record carries:
    - timestamp: ISO 8601 timestamp in UTC
    - level, logger, message
    - correlation_id: Invocation request id (if passed via ``extra``)
    - function_name: Lambda function name when running on Lambda
    - fields of the ``context`` dict passed via ``extra``, flattened
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "correlation_id"):
            log_data["correlation_id"] = record.correlation_id

        function_name = os.getenv("AWS_LAMBDA_FUNCTION_NAME")
        if function_name:
            log_data["function_name"] = function_name

        if hasattr(record, "context"):
            log_data.update(record.context)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.levelno == logging.DEBUG:
            log_data["file"] = record.pathname
            log_data["line"] = record.lineno
            log_data["function"] = record.funcName

        # Users and other context values are not always JSON native
        return json.dumps(log_data, default=str)


def configure_logging() -> None:
    """
    Configure the root logger to write JSON lines to stdout.

    Lambda forwards stdout to CloudWatch. The level comes from LOG_LEVEL.
    Safe to call on every cold start; existing handlers are replaced.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # The Lambda runtime installs its own plain-text handler
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    root_logger.debug(
        "Logging configured",
        extra={"context": {"log_level": settings.log_level}},
    )


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)


def log_extra(correlation_id: str | None, **context: Any) -> dict[str, Any]:
    """
    Build the ``extra`` mapping used throughout the adapter.

    Args:
        correlation_id: Invocation request id, omitted when None
        **context: Fields flattened into the JSON record

    Returns:
        Dict suitable for the ``extra`` argument of logger calls
    """
    extra: dict[str, Any] = {"context": context}
    if correlation_id is not None:
        extra["correlation_id"] = correlation_id
    return extra
