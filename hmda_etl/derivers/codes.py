from __future__ import annotations

import re

from hmda_etl.models.canonical import is_blank, to_text

PLACEHOLDER_CODE = "1111"

_AUS_SYSTEM_CODE = re.compile(r"^[1-6]$")
_AUS_RESULT_CODE = re.compile(r"^(?:[1-9]|1[0-7])$")
_NON_AMORTIZING_CODE = re.compile(r"^[123]$")
_NMLS_PREFIX = re.compile(r"^NMLS?#?\s*", re.IGNORECASE)

_AUS_SYSTEM_TEXT: dict[str, str] = {
    "desktop underwriter": "1",
    "du": "1",
    "fannie mae": "1",
    "fnma": "1",
    "loan prospector": "2",
    "lp": "2",
    "loan product advisor": "2",
    "lpa": "2",
    "freddie mac": "2",
    "fhlmc": "2",
    "total": "3",
    "total scorecard": "3",
    "fha total": "3",
    "fha total mortgage scorecard": "3",
    "gus": "4",
    "guaranteed underwriting system": "4",
    "usda": "4",
    "rural development": "4",
    "other": "5",
    "not applicable": "6",
    "n/a": "6",
    "na": "6",
    "none": "6",
    "exempt": "6",
}

_AUS_RESULT_TEXT: dict[str, str] = {
    "approve/eligible": "1",
    "approve eligible": "1",
    "approved/eligible": "1",
    "approved eligible": "1",
    "approve/ineligible": "2",
    "approved/ineligible": "2",
    "refer/eligible": "3",
    "refer eligible": "3",
    "refer/ineligible": "4",
    "refer ineligible": "4",
    "refer with caution": "5",
    "out of scope": "6",
    "error": "7",
    "accept": "8",
    "caution": "9",
    "ineligible": "10",
    "incomplete": "11",
    "invalid": "12",
    "unable to determine": "14",
    "other": "15",
    "not applicable": "16",
    "n/a": "16",
    "na": "16",
    "exempt": "17",
}

NON_AMORTIZING_BALLOON = "1"
NON_AMORTIZING_INTEREST_ONLY = "2"
NON_AMORTIZING_NEGATIVE_AMORTIZATION = "3"
# Blank and unmapped non-amortizing values report as interest-only.
NON_AMORTIZING_DEFAULT = NON_AMORTIZING_INTEREST_ONLY

_NON_AMORTIZING_TEXT: dict[str, str] = {
    "balloon": NON_AMORTIZING_BALLOON,
    "balloon payment": NON_AMORTIZING_BALLOON,
    "interest only": NON_AMORTIZING_INTEREST_ONLY,
    "interest-only": NON_AMORTIZING_INTEREST_ONLY,
    "io": NON_AMORTIZING_INTEREST_ONLY,
    "negative amortization": NON_AMORTIZING_NEGATIVE_AMORTIZATION,
    "neg am": NON_AMORTIZING_NEGATIVE_AMORTIZATION,
    "negative am": NON_AMORTIZING_NEGATIVE_AMORTIZATION,
    "none": PLACEHOLDER_CODE,
    "no": PLACEHOLDER_CODE,
    "n/a": PLACEHOLDER_CODE,
    "na": PLACEHOLDER_CODE,
    "not applicable": PLACEHOLDER_CODE,
}

_TRUE_FLAGS: frozenset[str] = frozenset({"1", "yes", "y", "true"})


def _map_code(value: object, pattern: re.Pattern[str], table: dict[str, str]) -> str:
    if is_blank(value):
        return ""
    text = to_text(value)
    if text == PLACEHOLDER_CODE:
        return ""
    lowered = text.lower()
    if pattern.match(lowered):
        return lowered
    return table.get(lowered, text)


def map_aus_system(value: object) -> str:
    """Map an automated underwriting system name to its HMDA code (1-6)."""
    return _map_code(value, _AUS_SYSTEM_CODE, _AUS_SYSTEM_TEXT)


def map_aus_result(value: object) -> str:
    """Map an automated underwriting result to its HMDA code (1-17)."""
    return _map_code(value, _AUS_RESULT_CODE, _AUS_RESULT_TEXT)


def is_true_flag(value: object) -> bool:
    return not is_blank(value) and to_text(value).lower() in _TRUE_FLAGS


def map_non_amortizing_features(
    value: object,
    balloon: object = None,
    interest_only: object = None,
    negative_amortization: object = None,
) -> str:
    """Resolve the HMDA non-amortizing feature code.

    Feature flags win in the order balloon, interest-only, negative
    amortization. Otherwise the raw value is mapped, and blank or unmapped
    input falls back to interest-only.
    """
    if is_true_flag(balloon):
        return NON_AMORTIZING_BALLOON
    if is_true_flag(interest_only):
        return NON_AMORTIZING_INTEREST_ONLY
    if is_true_flag(negative_amortization):
        return NON_AMORTIZING_NEGATIVE_AMORTIZATION

    if is_blank(value):
        return NON_AMORTIZING_DEFAULT
    lowered = to_text(value).lower()
    if lowered == PLACEHOLDER_CODE:
        return NON_AMORTIZING_DEFAULT
    if _NON_AMORTIZING_CODE.match(lowered):
        return lowered
    return _NON_AMORTIZING_TEXT.get(lowered, NON_AMORTIZING_DEFAULT)


def strip_nmls_prefix(value: object) -> str:
    """Drop a leading "NMLS#" style label from a loan originator identifier."""
    return _NMLS_PREFIX.sub("", to_text(value)).strip()
