import logging
from typing import NoReturn

from ..exceptions.base import raise_validation_error
from .classifier import RawDatabaseError
from .extractor import MessageExtractor
from .parsed_error import ParsedError

logger = logging.getLogger(__name__)


def to_messages(parsed: ParsedError) -> dict[str, list[str]]:
    """
    Field -> [message] mapping. A comma-joined field name (composite index) reports the
    same message under every listed field.
    """
    return {field: [parsed.message] for field in parsed.field_name.split(",")}


class ExceptionAdapter:
    """Drive the extractor and hand the result to the HTTP layer as a ValidationError."""

    def __init__(self, extractor: MessageExtractor):
        self.extractor = extractor

    def render(self, error: RawDatabaseError | BaseException) -> dict[str, list[str]]:
        return to_messages(self.extractor.extract(error))

    def raise_for(self, exc: BaseException) -> NoReturn:
        """Raise ValidationError for `exc`, chained from it. Extraction failures propagate unchanged."""
        messages = self.render(exc)
        logger.info("adapter.rendered", extra={"fields": list(messages)})
        raise_validation_error(messages, cause=exc)


__all__ = ["to_messages", "ExceptionAdapter"]
