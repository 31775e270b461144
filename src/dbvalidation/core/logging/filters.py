"""
Logging filters.

RequestIdFilter guarantees every record carries `request_id` (so format strings using
%(request_id)s never fail) and reads it from a contextvar, which follows the logical
request across threads and asyncio tasks alike.

RedactFilter masks sensitive record attributes. Database errors drag SQL text and bound
parameters (user data) along with them; the translator only logs those at DEBUG under
the `sql` / `bindings` / `raw` keys, and this filter masks them too unless SQL details
are explicitly enabled (LOG_SQL_DETAILS).
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None):
    """Set the request id for the current context; returns a token for reset_request_id()."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Set `record.request_id` to, in order of preference: an explicit `extra` value,
    the contextvar value, or the sentinel "-". Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", None) or get_request_id() or "-"
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization"}
    SQL_DETAILS = {"sql", "statement", "bindings", "params", "raw"}

    def __init__(self, name: str = "", redact_sql: bool = True):
        super().__init__(name)
        self.redact_sql = redact_sql

    def filter(self, record: LogRecord) -> bool:
        keys = self.SENSITIVE | self.SQL_DETAILS if self.redact_sql else self.SENSITIVE
        for key in list(record.__dict__):
            if key.lower() in keys and record.__dict__[key] is not None:
                record.__dict__[key] = REDACTED
        return True


__all__ = ["set_request_id", "reset_request_id", "get_request_id", "RequestIdFilter", "RedactFilter", "REDACTED"]
