from __future__ import annotations

from collections.abc import Mapping

from hmda_etl.fields.aliases import LONG_FORM_FIELD_MAP
from hmda_etl.models.canonical import is_blank

_LOWERCASE_FIELD_MAP: dict[str, str] = {}
for _source_name, _canonical_name in LONG_FORM_FIELD_MAP.items():
    _LOWERCASE_FIELD_MAP.setdefault(_source_name.strip().lower(), _canonical_name)


def normalize_field_name(name: str) -> str:
    """Map one export column spelling onto its canonical field name.

    Unknown names come back unchanged so that nothing is silently dropped.
    """
    canonical = LONG_FORM_FIELD_MAP.get(name)
    if canonical is not None:
        return canonical
    canonical = _LOWERCASE_FIELD_MAP.get(str(name).strip().lower())
    if canonical is not None:
        return canonical
    return name


def normalize_record_keys(record: Mapping[str, object]) -> dict[str, object]:
    """Return a copy of ``record`` keyed by canonical names.

    When several source columns collapse onto one canonical name the first
    non-blank value wins. The original spelling is kept alongside unless it
    would collide with a key already present.
    """
    normalized: dict[str, object] = {}
    for key, value in record.items():
        canonical = normalize_field_name(key)
        if canonical not in normalized or (is_blank(normalized[canonical]) and not is_blank(value)):
            normalized[canonical] = value

    for key, value in record.items():
        if key not in normalized:
            normalized[key] = value
    return normalized
