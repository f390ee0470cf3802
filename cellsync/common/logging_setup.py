"""
Settings Logging

One logger per client service under the `cellsync.` namespace. Records
carry the service name plus the settings context of the round-trip that
produced them (operation, resource, status, validation errors).

CELLSYNC_LOG_LEVEL picks the level, CELLSYNC_LOG_FORMAT picks `json`
(default) or `text`.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# Record attributes copied into the output when set
CONTEXT_FIELDS = ("operation", "resource", "status_code", "errors")


def _context_of(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", record.name),
            "message": record.getMessage(),
            **_context_of(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human readable line with the settings context appended"""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context_of(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class ServiceLogger(logging.LoggerAdapter):
    """
    Adapter binding a service name and settings context to every record.

    Per-call `extra` wins over the bound context.
    """

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def bind(self, **context: Any) -> "ServiceLogger":
        """New adapter on the same logger with extra context"""
        return ServiceLogger(self.logger, {**self.extra, **context})


def get_service_logger(service_name: str, **context: Any) -> ServiceLogger:
    """
    Get the logger for a client service.

    The underlying logger is configured on first use; later calls reuse
    its handler.
    """
    logger = logging.getLogger(f"cellsync.{service_name}")
    level = getattr(logging, os.environ.get("CELLSYNC_LOG_LEVEL", "INFO").upper(), logging.INFO)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        json_format = os.environ.get("CELLSYNC_LOG_FORMAT", "json").lower() == "json"
        handler.setFormatter(JsonFormatter() if json_format else TextFormatter())
        logger.addHandler(handler)
        # Host applications configure their own root handlers
        logger.propagate = False

    return ServiceLogger(logger, {"service": service_name, **context})
