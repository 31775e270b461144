# dbvalidation/translation/
# ├─ substitution.py   # :placeholder replacement (longest key first, 3 casings)
# ├─ localization.py   # default phrase text (Localizer protocol, DictLocalizer)
# ├─ schema_lookup.py  # index name -> columns (SchemaLookup protocol, SQLAlchemy implementation)
# ├─ hooks.py          # post-processing hooks (DuplicateKeyHook)
# ├─ templates.py      # MessageTemplate + build-once TemplateRegistry
# ├─ custom_rules.py   # ordered, append-only CustomRuleStore
# ├─ classifier.py     # RawDatabaseError + ErrorClassifier
# ├─ extractor.py      # MessageExtractor -> ParsedError
# ├─ adapter.py        # ExceptionAdapter -> {field: [message]} / ValidationError
# └─ translator.py     # QueryErrorTranslator facade + build_translator()

from .substitution import make_replacements, sort_replacements
from .localization import DictLocalizer, Localizer
from .schema_lookup import IndexInfo, SchemaLookup, SqlAlchemySchemaLookup
from .hooks import DuplicateKeyHook, PostProcessHook
from .parsed_error import ParsedError
from .templates import MessageTemplate, TemplateRegistry
from .custom_rules import CustomRule, CustomRuleStore
from .classifier import ErrorClassifier, RawDatabaseError
from .extractor import MessageExtractor
from .adapter import ExceptionAdapter, to_messages
from .translator import QueryErrorTranslator, build_translator

__all__ = [
    "make_replacements",
    "sort_replacements",
    "DictLocalizer",
    "Localizer",
    "IndexInfo",
    "SchemaLookup",
    "SqlAlchemySchemaLookup",
    "DuplicateKeyHook",
    "PostProcessHook",
    "ParsedError",
    "MessageTemplate",
    "TemplateRegistry",
    "CustomRule",
    "CustomRuleStore",
    "ErrorClassifier",
    "RawDatabaseError",
    "MessageExtractor",
    "ExceptionAdapter",
    "to_messages",
    "QueryErrorTranslator",
    "build_translator",
]
