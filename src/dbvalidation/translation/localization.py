"""
Default phrase text for validation messages.

The translator only needs one capability from a localization service: turn a message
key ("required", "unique", "in") into template text. Anything with a `get(key)` method
satisfies the Localizer protocol; DictLocalizer is the built-in implementation.
"""

import json
import logging
from pathlib import Path
from typing import Mapping, Protocol

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES: dict[str, str] = {
    "required": "The :attribute field is required.",
    "unique": "The :attribute has already been taken.",
    "in": "The selected :attribute is invalid.",
}


class Localizer(Protocol):
    def get(self, key: str) -> str: ...


class DictLocalizer:
    """
    Localizer backed by a plain dict, layered over DEFAULT_MESSAGES.

    An unknown key resolves to "validation.<key>", the same thing a translation
    catalog returns for a missing line, so the gap is visible in the output.
    """

    def __init__(self, messages: Mapping[str, str] | None = None):
        self._messages = {**DEFAULT_MESSAGES, **(messages or {})}

    def get(self, key: str) -> str:
        try:
            return self._messages[key]
        except KeyError:
            logger.warning("localization.missing_key", extra={"key": key})
            return f"validation.{key}"

    @classmethod
    def from_json(cls, path: str | Path) -> "DictLocalizer":
        """
        Load overrides from a flat JSON object, e.g. {"unique": "Ce :attribute existe déjà."}.
        """
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object of message keys")
        logger.debug("localization.loaded", extra={"path": str(path), "keys": sorted(data)})
        return cls({str(k): str(v) for k, v in data.items()})


__all__ = ["DEFAULT_MESSAGES", "Localizer", "DictLocalizer"]
