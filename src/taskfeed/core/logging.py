"""Structured JSON logging for the taskfeed API.

Each record becomes one JSON object. Besides the usual level, logger and
message it carries the request correlation id and the verified caller's
``user_id``. Rejections logged by the error handlers keep their envelope
outcome under ``error`` and document ids passed through ``extra`` (``post_id``,
``target_id``...) are gathered under ``refs``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import get_caller_id, get_request_id

# Attributes every LogRecord has; anything else came in through ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
_CONTEXT_ATTRS = frozenset({"request_id", "user_id"})
_ERROR_ATTRS = {"code": "code", "status_code": "status"}


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonLogFormatter(logging.Formatter):
    """Render log records as taskfeed JSON events."""

    def __init__(self, *, static_fields: dict[str, Any] | None = None, datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)
        self._static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            **self._static_fields,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
            "user_id": getattr(record, "user_id", None),
        }

        error: dict[str, Any] = {}
        refs: dict[str, str] = {}
        for key, value in vars(record).items():
            if key in _STANDARD_ATTRS or key in _CONTEXT_ATTRS:
                continue
            if key in _ERROR_ATTRS:
                error[_ERROR_ATTRS[key]] = value
            elif key.endswith("_id"):
                refs[key] = str(value)
            else:
                event.setdefault(key, _jsonable(value))
        if error:
            event["error"] = error
        if refs:
            event["refs"] = refs

        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            event["stack"] = self.formatStack(record.stack_info)
        return json.dumps(event, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the request id and the caller's user id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        # An explicit ``extra={"user_id": ...}`` wins over the bound caller.
        if getattr(record, "user_id", None) is None:
            record.user_id = get_caller_id()
        return True


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.captureWarnings(True)

    stdout_handler = {
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stdout",
        "formatter": "json",
        "level": level,
        "filters": ["request_context"],
    }
    server_logger = {"handlers": ["default"], "level": level, "propagate": False}
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonLogFormatter,
                    "static_fields": {
                        "service": settings.project_name,
                        "environment": settings.environment,
                    },
                }
            },
            "filters": {"request_context": {"()": RequestContextFilter}},
            "handlers": {"default": stdout_handler},
            "loggers": {
                "": {"handlers": ["default"], "level": level},
                "taskfeed": {"level": level},
                "uvicorn": dict(server_logger),
                "uvicorn.error": dict(server_logger),
                "uvicorn.access": dict(server_logger),
            },
        }
    )


__all__ = ["JsonLogFormatter", "RequestContextFilter", "configure_logging"]
