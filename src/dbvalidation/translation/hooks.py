"""
Post-processing hooks run between parsing and field resolution.

A hook receives the in-progress ParsedError and may add or change parameters (including
the designator parameter, which decides the reported field) or replace the default
message text. Hooks fail with SchemaLookupError; they never fall back to a guess.
"""

import logging
from typing import Protocol

from ..exceptions.base import SchemaLookupError
from .parsed_error import ParsedError
from .schema_lookup import SchemaLookup

logger = logging.getLogger(__name__)


class PostProcessHook(Protocol):
    def __call__(self, parsed: ParsedError) -> None: ...


class DuplicateKeyHook:
    """
    Resolve the index named in a duplicate-key error into the columns it covers.

    "Duplicate entry 'bob@x.com' for key 'users_email_unique'" only names the index;
    the schema lookup turns it into attribute="email" (or "first,last" for composite
    indexes) plus table_name. A non-empty index comment replaces the default message.
    """

    def __init__(self, lookup: SchemaLookup | None):
        self.lookup = lookup

    def __call__(self, parsed: ParsedError) -> None:
        index_name = parsed.parameters["index_name"]
        if self.lookup is None:
            raise SchemaLookupError(
                "No schema lookup configured to resolve duplicate-key index names",
                index_name=index_name,
                code=parsed.code,
            )

        try:
            info = self.lookup.lookup_index(index_name)
        except SchemaLookupError:
            raise
        except Exception as exc:
            raise SchemaLookupError(
                f"Could not look up index {index_name!r}", index_name=index_name, code=parsed.code
            ) from exc

        parsed.parameters["attribute"] = info.columns
        if info.table_name is not None:
            parsed.parameters["table_name"] = info.table_name
        if info.comment:
            parsed.message = info.comment

        logger.debug(
            "hooks.duplicate_key_resolved",
            extra={"index_name": index_name, "fields": info.columns, "has_comment": bool(info.comment)},
        )


__all__ = ["PostProcessHook", "DuplicateKeyHook"]
