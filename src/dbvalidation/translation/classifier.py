"""
Decide whether a database error can be translated.

Drivers disagree on how they expose the engine error, so everything is first
normalized into a RawDatabaseError: PyMySQL and mysqlclient raise exceptions whose
args are (errno, message); SQLAlchemy wraps those in DBAPIError.orig together with
the statement and its bound parameters.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import DBAPIError, StatementError

from .templates import TemplateRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawDatabaseError:
    """
    - code: engine error code (None when the driver exposes none)
    - message: engine error text
    - sql / params: statement and bindings, kept for diagnostics only
    """

    code: int | None
    message: str
    sql: str | None = None
    params: Any = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "RawDatabaseError":
        sql = params = None
        orig: BaseException | None = exc
        if isinstance(exc, StatementError):
            sql, params = exc.statement, exc.params
            orig = exc.orig if exc.orig is not None else exc

        args = getattr(orig, "args", ())
        code = args[0] if args and isinstance(args[0], int) and not isinstance(args[0], bool) else None
        message = args[1] if len(args) > 1 and isinstance(args[1], str) else str(orig)
        return cls(code=code, message=message, sql=sql, params=params)


def as_raw_error(error: RawDatabaseError | BaseException) -> RawDatabaseError:
    if isinstance(error, RawDatabaseError):
        return error
    if isinstance(error, BaseException):
        return RawDatabaseError.from_exception(error)
    raise TypeError(f"Expected RawDatabaseError or exception, got {type(error).__name__}")


class ErrorClassifier:
    """Gate in front of the extractor: is there a template for this engine code?"""

    def __init__(self, registry: TemplateRegistry):
        self.registry = registry

    def is_supported(self, error: RawDatabaseError | BaseException) -> bool:
        raw = as_raw_error(error)
        return raw.code is not None and raw.code in self.registry.get_templates()

    def check(self, exc: BaseException) -> bool:
        """True for a SQLAlchemy DBAPIError whose engine code has a template."""
        if not isinstance(exc, DBAPIError):
            return False
        supported = self.is_supported(exc)
        if not supported:
            logger.debug("classifier.unsupported", extra={"engine_code": as_raw_error(exc).code})
        return supported


__all__ = ["RawDatabaseError", "as_raw_error", "ErrorClassifier"]
