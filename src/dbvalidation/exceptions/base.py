"""
Exceptions raised while translating database errors into validation messages.

Two levels, mirroring how the translator is used:

- TranslationError and its subclasses describe why a raw engine error could NOT be
  turned into validation messages. They are for callers and operators; none of them
  is meant to be shown to an end user.
- ValidationError is the product of a successful translation: a field -> messages
  mapping ready to be rendered by the HTTP layer (see api/error_handlers.py).
"""

from typing import Iterable, Mapping, NoReturn, Sequence


class TranslationError(Exception):
    """
    Base exception for translator failures.

    - message: description of the failure (logs / operators)
    - code: engine error code that was being translated, if known
    - error_code: canonical short code (e.g. 'unsupported', 'malformed')
    """

    def __init__(self, message: str, *, code: int | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.code is not None:
            parts.append(f"engine code: {int(self.code)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message


class UnsupportedErrorType(TranslationError):
    """The engine code has no registered template; route to generic error handling."""

    def __init__(self, code: int | None):
        super().__init__("No message template for database error", code=code, error_code="unsupported")


class MalformedErrorText(TranslationError):
    """The template's parse pattern did not match the engine message (template/engine mismatch)."""

    def __init__(self, code: int, pattern: str):
        super().__init__(f"Error text does not match pattern {pattern!r}", code=code, error_code="malformed")
        self.pattern = pattern


class TemplateConfigurationError(TranslationError):
    """A message template is internally inconsistent (capture groups vs. parameter names)."""

    def __init__(self, message: str, *, code: int | None = None):
        super().__init__(message, code=code, error_code="misconfigured")


class SchemaLookupError(TranslationError, LookupError):
    """The schema lookup could not resolve an index name into its columns."""

    def __init__(self, message: str, *, index_name: str | None = None, code: int | None = None):
        super().__init__(message, code=code, error_code="lookup_failed")
        self.index_name = index_name


class ValidationError(Exception):
    """
    Field-addressable validation failure produced from a database error.

    - messages: mapping field name -> ordered list of human-readable messages

    The database exception is kept as __cause__ (see raise_validation_error),
    so SQL text and bindings stay available to operators but never reach the payload.
    """

    STATUS_CODE = 422

    def __init__(self, messages: Mapping[str, Sequence[str]]):
        self.messages: dict[str, list[str]] = {field: list(lines) for field, lines in messages.items()}
        super().__init__(self.summary())

    @property
    def fields(self) -> list[str]:
        return list(self.messages)

    def summary(self) -> str:
        for lines in self.messages.values():
            if lines:
                return lines[0]
        return "The given data was invalid."

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict for API responses:
            {
                "message": "The email has already been taken.",
                "errors": {"email": ["The email has already been taken."]},
            }
        """
        return {"message": self.summary(), "errors": {k: list(v) for k, v in self.messages.items()}}

    def http_status(self) -> int:
        return self.STATUS_CODE


def raise_validation_error(messages: Mapping[str, Iterable[str]], cause: BaseException | None = None) -> NoReturn:
    """Raise ValidationError for `messages`, chained from the database exception if given."""
    raise ValidationError({field: list(lines) for field, lines in messages.items()}) from cause


__all__ = [
    "TranslationError",
    "UnsupportedErrorType",
    "MalformedErrorText",
    "TemplateConfigurationError",
    "SchemaLookupError",
    "ValidationError",
    "raise_validation_error",
]
