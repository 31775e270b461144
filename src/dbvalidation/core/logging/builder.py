"""
Build and apply the dictConfig logging configuration from Settings.

Settings knobs used here:
 - LOG_LEVEL, LOG_FORMAT ("json" | "text"), ENV
 - LOG_TO_STDOUT / LOG_DIR / LOG_MAX_BYTES / LOG_BACKUP_COUNT: console-only vs. rotating files
 - ENABLE_SQL_LOGGING: sqlalchemy.engine at DEBUG (statements + parameters)
 - LOG_SQL_DETAILS: let `sql` / `bindings` extras through the RedactFilter

Settings is duck-typed on purpose: tests pass SimpleNamespace objects, so optional knobs
are read with getattr and a default.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from .formatters import JsonFormatter, ColorFormatter, SERVICE_NAME
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

from ...config.settings import Settings


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping:
      - formatters: "standard" (colour in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: console + (file, error_file) when writing to LOG_DIR, else error_console
      - loggers: root, "dbvalidation", "sqlalchemy.engine"
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": SERVICE_NAME,
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter, "redact_sql": not getattr(settings, "LOG_SQL_DETAILS", False)},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers),
                "level": settings.LOG_LEVEL,
            },
            SERVICE_NAME: {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            # statements and bound parameters contain user data
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Create LOG_DIR when logging to files, apply the dictConfig and add a RequestIdFilter
    on the root logger so %(request_id)s is always available.
    """
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())


__all__ = ["make_dict_config", "setup_logging"]
