"""
dbvalidation: turn MySQL constraint / truncation errors into field-level validation messages.

    from dbvalidation import build_translator, MySQLErrorCodes

    translator = build_translator()
    translator.add_validation_message("Pick another e-mail.", MySQLErrorCodes.ER_DUP_ENTRY, "email")
    translator.render(exc)   # {"email": ["Pick another e-mail."]}
"""

from .exceptions import (
    MySQLErrorCodes,
    TranslationError,
    UnsupportedErrorType,
    MalformedErrorText,
    TemplateConfigurationError,
    SchemaLookupError,
    ValidationError,
)
from .translation import (
    QueryErrorTranslator,
    build_translator,
    RawDatabaseError,
    ParsedError,
    MessageTemplate,
    TemplateRegistry,
    CustomRuleStore,
    DictLocalizer,
    IndexInfo,
    SqlAlchemySchemaLookup,
)

__all__ = [
    "MySQLErrorCodes",
    "TranslationError",
    "UnsupportedErrorType",
    "MalformedErrorText",
    "TemplateConfigurationError",
    "SchemaLookupError",
    "ValidationError",
    "QueryErrorTranslator",
    "build_translator",
    "RawDatabaseError",
    "ParsedError",
    "MessageTemplate",
    "TemplateRegistry",
    "CustomRuleStore",
    "DictLocalizer",
    "IndexInfo",
    "SqlAlchemySchemaLookup",
]
