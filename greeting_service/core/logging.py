"""Centralized logging configuration.

- Structured logs (JSON) to stdout so the container runtime / cluster log agent collects them
- No request/response bodies, no query strings, no headers are logged
- Extra fields are optional; the formatter must never raise due to missing keys
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import UTC, datetime
from typing import Any

from greeting_service.core.settings import get_settings


class JsonFormatter(logging.Formatter):
    """Emit JSON logs while safely handling missing `extra` fields.

    A `'%(request_id)s'`-style format string raises KeyError when a record doesn't
    include those fields (e.g. uvicorn's own startup logs).
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
            "method": getattr(record, "method", getattr(record, "http_method", None)),
            "path": getattr(record, "path", getattr(record, "request_path", None)),
            "status_code": getattr(record, "status_code", None),
            "duration_ms": getattr(record, "duration_ms", None),
        }

        # Startup records carry the bind address instead of request metadata.
        host = getattr(record, "host", None)
        if host is not None:
            payload["host"] = host
            payload["port"] = getattr(record, "port", None)
        app_name = getattr(record, "app", None)
        if app_name is not None:
            payload["app"] = app_name
            payload["env"] = getattr(record, "env", None)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str | None = None) -> None:
    """Configure application logging (JSON to stdout).

    Without an explicit level, use `Settings.log_level` so a `LOG_LEVEL` from `.env`
    applies both to the CLI and to uvicorn's import of `greeting_service.main`.
    """

    if level is None:
        level = get_settings().log_level

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "greeting_service.core.logging.JsonFormatter",
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {
                "level": level.upper(),
                "handlers": ["default"],
            },
        }
    )
