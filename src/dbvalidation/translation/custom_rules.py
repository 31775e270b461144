"""
Caller-registered message overrides.

Rules are matched in registration order and the first match wins, so register the
specific (code, field) rules before catch-all ones for the same code.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomRule:
    """
    - message: replacement message text (may contain :placeholders)
    - error_type: engine error code the rule applies to
    - field: only match this field name; None matches any field
    - new_field: report the error under this field name instead
    """

    message: str
    error_type: int
    field: str | None = None
    new_field: str | None = None

    def matches(self, code: int, field_name: str | None) -> bool:
        return self.error_type == code and (self.field is None or self.field == field_name)


class CustomRuleStore:
    """
    Append-only, ordered rule list.

    Writes are serialized and publish a new tuple; readers iterate whatever tuple was
    current when they started, so lookups never take the lock.
    """

    def __init__(self):
        self._rules: tuple[CustomRule, ...] = ()
        self._lock = threading.Lock()

    def register(
        self,
        message: str,
        error_type: int,
        field: str | None = None,
        new_field: str | None = None,
    ) -> CustomRule:
        rule = CustomRule(message=message, error_type=int(error_type), field=field, new_field=new_field)
        with self._lock:
            self._rules = self._rules + (rule,)
        logger.debug(
            "custom_rules.registered",
            extra={"engine_code": rule.error_type, "field": field, "new_field": new_field},
        )
        return rule

    def find_match(self, code: int, field_name: str | None) -> CustomRule | None:
        for rule in self._rules:
            if rule.matches(code, field_name):
                return rule
        return None

    @property
    def rules(self) -> tuple[CustomRule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[CustomRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


__all__ = ["CustomRule", "CustomRuleStore"]
