"""Column-name normalization and alias-aware value lookup."""

from hmda_etl.fields.aliases import (
    FIELD_VARIATIONS,
    HELPER_FIELDS,
    LAR_POSITION_FIELD_MAP,
    LONG_FORM_FIELD_MAP,
    aliases_for,
)
from hmda_etl.fields.normalizer import normalize_field_name, normalize_record_keys
from hmda_etl.fields.resolver import NOT_FOUND, resolve_field_value, resolve_text

__all__ = [
    "FIELD_VARIATIONS",
    "HELPER_FIELDS",
    "LAR_POSITION_FIELD_MAP",
    "LONG_FORM_FIELD_MAP",
    "NOT_FOUND",
    "aliases_for",
    "normalize_field_name",
    "normalize_record_keys",
    "resolve_field_value",
    "resolve_text",
]
