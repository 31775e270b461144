"""
Facade over the translation pipeline.

Build one QueryErrorTranslator at startup (build_translator reads Settings), register
custom messages on it during configuration, then share it with request handling code:

    translator = build_translator()
    translator.add_validation_message("This e-mail is already registered.", MySQLErrorCodes.ER_DUP_ENTRY, "email")

    with translator.translate_errors(session):
        session.add(user)
        session.flush()
"""

import logging
from contextlib import contextmanager
from typing import Iterator, NoReturn

from sqlalchemy import create_engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from ..config.settings import Settings, get_settings
from .adapter import ExceptionAdapter
from .classifier import ErrorClassifier, RawDatabaseError
from .custom_rules import CustomRule, CustomRuleStore
from .extractor import MessageExtractor
from .localization import DictLocalizer, Localizer
from .parsed_error import ParsedError
from .schema_lookup import SchemaLookup, SqlAlchemySchemaLookup
from .templates import TemplateRegistry

logger = logging.getLogger(__name__)


class QueryErrorTranslator:
    def __init__(self, registry: TemplateRegistry | None = None, rules: CustomRuleStore | None = None):
        self.registry = registry or TemplateRegistry()
        self.rules = rules or CustomRuleStore()
        self.classifier = ErrorClassifier(self.registry)
        self.extractor = MessageExtractor(self.registry, self.rules, self.classifier)
        self.adapter = ExceptionAdapter(self.extractor)

    def add_validation_message(
        self,
        message: str,
        error_type: int,
        field: str | None = None,
        new_field: str | None = None,
    ) -> CustomRule:
        """
        Override the message for `error_type` (optionally only for `field`) and
        optionally report it under `new_field`. First registered match wins.
        """
        return self.rules.register(message, error_type, field, new_field)

    def is_supported(self, error: RawDatabaseError | BaseException) -> bool:
        return self.classifier.is_supported(error)

    def check(self, exc: BaseException) -> bool:
        return self.classifier.check(exc)

    def extract(self, error: RawDatabaseError | BaseException) -> ParsedError:
        return self.extractor.extract(error)

    def render(self, error: RawDatabaseError | BaseException) -> dict[str, list[str]]:
        return self.adapter.render(error)

    def raise_for(self, exc: BaseException) -> NoReturn:
        self.adapter.raise_for(exc)

    @contextmanager
    def translate_errors(self, session: Session | None = None) -> Iterator[None]:
        """
        Usage:
            with translator.translate_errors(session):
                ... DB ops that may raise DBAPIError ...

        Rolls the session back on a database error, then raises ValidationError for
        translatable errors and re-raises everything else untouched.
        """
        try:
            yield
        except DBAPIError as exc:
            if session is not None:
                try:
                    session.rollback()
                except Exception:
                    logger.exception("translator.rollback_failed")
            if not self.check(exc):
                raise
            self.raise_for(exc)


def build_translator(
    settings: Settings | None = None,
    *,
    lookup: SchemaLookup | None = None,
    localizer: Localizer | None = None,
) -> QueryErrorTranslator:
    """
    Assemble a translator from settings.

    - localizer: VALIDATION_LANG_FILE overrides on top of the English defaults
    - lookup: an engine on DATABASE_URL, unless one is injected; without either,
      duplicate-key errors cannot be translated (SchemaLookupError)
    """
    settings = settings or get_settings()

    if localizer is None:
        if settings.VALIDATION_LANG_FILE:
            localizer = DictLocalizer.from_json(settings.VALIDATION_LANG_FILE)
        else:
            localizer = DictLocalizer()

    if lookup is None and settings.DATABASE_URL:
        engine = create_engine(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO, pool_pre_ping=True)
        lookup = SqlAlchemySchemaLookup(engine)

    logger.debug("translator.built", extra={"schema_lookup": lookup is not None})
    return QueryErrorTranslator(TemplateRegistry(localizer, lookup))


__all__ = ["QueryErrorTranslator", "build_translator"]
