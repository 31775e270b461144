# dbvalidation/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py          # Translation errors + the outgoing ValidationError
# │   └── error_codes.py   # MySQL engine error codes handled by the translator

from .base import (
    TranslationError,
    UnsupportedErrorType,
    MalformedErrorText,
    TemplateConfigurationError,
    SchemaLookupError,
    ValidationError,
    raise_validation_error,
)
from .error_codes import MySQLErrorCodes

__all__ = [
    "TranslationError",
    "UnsupportedErrorType",
    "MalformedErrorText",
    "TemplateConfigurationError",
    "SchemaLookupError",
    "ValidationError",
    "raise_validation_error",
    "MySQLErrorCodes",
]
