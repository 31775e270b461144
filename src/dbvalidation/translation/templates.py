"""
Message templates, one per supported engine error code.

A template knows how to read the engine's error text (regex with ordered capture
groups), what the captured groups mean (parameter names), what to say by default and
which parameter names the offending field. The registry builds the table once, on
first use, and serves it read-only afterwards.
"""

import logging
import re
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from ..exceptions.base import TemplateConfigurationError
from ..exceptions.error_codes import MySQLErrorCodes
from .hooks import DuplicateKeyHook, PostProcessHook
from .localization import DictLocalizer, Localizer
from .schema_lookup import SchemaLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageTemplate:
    """
    - code: engine error code
    - pattern: regex searched in the engine message; group N feeds params[N-1]
    - message: default message text, may contain :placeholders
    - params: parameter names by capture-group order
    - field_param: parameter whose value is the reported field name
    - post_process: optional hook run after parsing
    """

    code: int
    pattern: re.Pattern | str
    message: str
    params: tuple[str, ...]
    field_param: str = "attribute"
    post_process: PostProcessHook | None = None

    def __post_init__(self):
        pattern = re.compile(self.pattern) if isinstance(self.pattern, str) else self.pattern
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "params", tuple(self.params))
        if pattern.groups != len(self.params):
            raise TemplateConfigurationError(
                f"Pattern {pattern.pattern!r} has {pattern.groups} group(s) "
                f"but {len(self.params)} parameter name(s)",
                code=self.code,
            )

    def parse(self, text: str) -> dict[str, str] | None:
        """Return parameters captured from `text`, or None if the pattern does not match."""
        match = self.pattern.search(text)
        if match is None:
            return None
        return {name: match.group(index) or "" for index, name in enumerate(self.params, start=1)}


class TemplateRegistry:
    """
    Build-once table of MessageTemplate keyed by engine code.

    The localizer is consulted once per localized template when the table is built.
    Construction is cheap; the table is built lazily under a lock so concurrent first
    access builds it exactly once.
    """

    def __init__(
        self,
        localizer: Localizer | None = None,
        lookup: SchemaLookup | None = None,
        extra_templates: Iterable[MessageTemplate] = (),
    ):
        self.localizer = localizer or DictLocalizer()
        self.lookup = lookup
        self._extra_templates = tuple(extra_templates)
        self._templates: Mapping[int, MessageTemplate] | None = None
        self._lock = threading.Lock()

    def get_templates(self) -> Mapping[int, MessageTemplate]:
        templates = self._templates
        if templates is None:
            with self._lock:
                if self._templates is None:
                    self._templates = MappingProxyType(self._build())
                templates = self._templates
        return templates

    def get(self, code: int | None) -> MessageTemplate | None:
        if code is None:
            return None
        return self.get_templates().get(code)

    def supported_codes(self) -> frozenset[int]:
        return frozenset(self.get_templates())

    def _build(self) -> dict[int, MessageTemplate]:
        codes = MySQLErrorCodes
        templates = [
            MessageTemplate(
                code=codes.ER_BAD_NULL_ERROR,
                pattern=r"Column '(.*?)' cannot be null",
                message=self.localizer.get("required"),
                params=("attribute",),
            ),
            MessageTemplate(
                code=codes.ER_DUP_ENTRY,
                pattern=r"Duplicate entry '(.*?)' for key '(.*?)'",
                message=self.localizer.get("unique"),
                params=("value", "index_name"),
                post_process=DuplicateKeyHook(self.lookup),
            ),
            MessageTemplate(
                code=codes.ER_DATA_TOO_LONG,
                pattern=r"Data too long for column '(.*?)' at row ([0-9]+)",
                message="The :attribute is too long.",
                params=("attribute", "rownum"),
            ),
            # enum columns: an out-of-list value is truncated
            MessageTemplate(
                code=codes.WARN_DATA_TRUNCATED,
                pattern=r"Data truncated for column '(.*?)' at row ([0-9]+)",
                message=self.localizer.get("in"),
                params=("attribute", "rownum"),
            ),
            MessageTemplate(
                code=codes.ER_TRUNCATED_WRONG_VALUE_FOR_FIELD,
                pattern=r"Incorrect (.*?) value: '(.*?)' for column '(.*?)' at row ([0-9]+)",
                message="The :attribute must be an :field_type type.",
                params=("field_type", "value", "attribute", "rownum"),
            ),
            *self._extra_templates,
        ]

        table: dict[int, MessageTemplate] = {}
        for template in templates:
            code = int(template.code)
            if code in table:
                raise TemplateConfigurationError(f"Duplicate template for engine code {code}", code=code)
            table[code] = template
        logger.debug("templates.built", extra={"codes": sorted(table)})
        return table


__all__ = ["MessageTemplate", "TemplateRegistry"]
