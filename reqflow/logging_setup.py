"""
Structured JSON Logging for reqflow

Provides a JSON formatter for structured logging output and helpers to
keep credentials out of log lines.
"""

import json
import logging
import sys
from typing import Any, Dict, Mapping

REDACTED = "***REDACTED***"
SENSITIVE_HEADER_PARTS = ("authorization", "cookie", "api-key", "api_key", "token", "secret")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string with timestamp, logger name, level, message
        """
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        # Request fields passed via ``extra``
        for field in ("method", "url"):
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO) -> None:
    """
    Configure structured JSON logging for reqflow.

    Args:
        level: Logging level (default: logging.INFO)

    Example:
        >>> from reqflow.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    sdk_logger = logging.getLogger("reqflow")
    sdk_logger.setLevel(level)
    sdk_logger.handlers = [handler]
    sdk_logger.propagate = False


def setup_logging(debug: bool = False) -> None:
    """
    Setup plain-text logging

    Args:
        debug: Enable debug level logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("reqflow").setLevel(level)


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Redact credential-bearing headers.

    Example:
        >>> sanitize_headers({"Authorization": "Bearer x", "Accept": "*/*"})
        {'Authorization': '***REDACTED***', 'Accept': '*/*'}
    """
    sanitized = {}

    for key, value in headers.items():
        if any(part in str(key).lower() for part in SENSITIVE_HEADER_PARTS):
            sanitized[key] = REDACTED
        else:
            sanitized[key] = value

    return sanitized
