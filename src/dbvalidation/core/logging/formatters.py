"""
Log formatters.

  - JsonFormatter: one JSON object per record with service/env/version/request_id and
    any `extra` fields; non-serializable extras are stringified so formatting never raises.
  - ColorFormatter: compact ANSI-coloured lines for a developer console.
"""

import json
import logging
from importlib import metadata as importlib_metadata
from logging import LogRecord
from typing import Any

SERVICE_NAME = "dbvalidation"

# Attributes every LogRecord has; anything else on the record came in through `extra`.
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "taskName"}


def get_project_version(default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(SERVICE_NAME)
    except importlib_metadata.PackageNotFoundError:
        return default


PROJECT_VERSION = get_project_version()


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name (e.g. "production")
      - service: logical service name included in every record
      - datefmt: passed to logging.Formatter (used by formatTime)
    """

    def __init__(self, *, env: str | None = None, service: str = SERVICE_NAME, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in log_record or key in _RECORD_ATTRS or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Development formatter: TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE with a coloured level."""

    COLOR_CODES = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"] if color else ""
        line = (
            f"{self.formatTime(record, self.datefmt)} | "
            f"{color}{record.levelname}{reset} | "
            f"{record.name} | "
            f"{getattr(record, 'request_id', '-')} | "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


__all__ = ["JsonFormatter", "ColorFormatter", "get_project_version", "PROJECT_VERSION"]
