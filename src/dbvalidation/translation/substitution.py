"""
Placeholder substitution for validation messages.

Placeholders are written `:key` and are replaced in three spellings:

    :attribute  -> value as given
    :ATTRIBUTE  -> value upper-cased
    :Attribute  -> value with its first character upper-cased

Replacement is plain substring replacement (no regex, no word boundaries) so existing
message catalogs written for this format keep rendering exactly the same text.
Longer keys are replaced first; otherwise `:a` would eat the start of `:attribute`.
"""

from typing import Mapping


def ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def sort_replacements(replace: Mapping[str, object]) -> list[tuple[str, str]]:
    """
    Order replacements by descending key length.

    sorted() is stable, so keys of equal length keep their insertion order.
    """
    return sorted(((str(k), str(v)) for k, v in replace.items()), key=lambda item: -len(item[0]))


def make_replacements(line: str, replace: Mapping[str, object]) -> str:
    """Replace every `:key` / `:KEY` / `:Key` placeholder in `line` with the matching value."""
    if not replace:
        return line

    for key, value in sort_replacements(replace):
        line = line.replace(":" + key, value)
        line = line.replace(":" + key.upper(), value.upper())
        line = line.replace(":" + ucfirst(key), ucfirst(value))

    return line


__all__ = ["ucfirst", "sort_replacements", "make_replacements"]
