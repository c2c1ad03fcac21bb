from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hmda_etl.fields.aliases import aliases_for
from hmda_etl.models.canonical import to_text


class _NotFound:
    """Sentinel for a field that no key in the record matched."""

    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


def _lowercase_index(record: Mapping[str, Any]) -> dict[str, str]:
    index: dict[str, str] = {}
    for key in record:
        index.setdefault(str(key).strip().lower(), key)
    return index


def resolve_field_value(record: Mapping[str, Any], field_name: str) -> Any:
    """Find the value for ``field_name`` using its known spellings.

    The first key that exists wins even when its value is zero, empty or None.
    Returns ``NOT_FOUND`` only when no spelling matched at all.
    """
    if field_name in record:
        return record[field_name]

    aliases = aliases_for(field_name)
    for alias in aliases:
        if alias in record:
            return record[alias]

    lowered = _lowercase_index(record)
    for alias in aliases:
        key = lowered.get(alias.strip().lower())
        if key is not None:
            return record[key]

    key = lowered.get(field_name.strip().lower())
    if key is not None:
        return record[key]
    return NOT_FOUND


def resolve_text(record: Mapping[str, Any], field_name: str) -> str:
    value = resolve_field_value(record, field_name)
    if value is NOT_FOUND:
        return ""
    return to_text(value)
