from __future__ import annotations

import math
import numbers

from hmda_etl.models.canonical import is_blank, to_text

# Intro-rate-period values that mean "no introductory period" (fixed rate).
_FIXED_RATE_MARKERS: frozenset[str] = frozenset({"n/a", "na", "exempt", "1111"})
_COMMON_YEAR_TERMS: frozenset[float] = frozenset({1, 2, 3, 5, 7, 10, 15, 20, 25, 30, 40})

RATE_TYPE_FIXED = "1"
RATE_TYPE_VARIABLE = "2"

_RATE_TYPE_TEXT: dict[str, str] = {
    "fixed": RATE_TYPE_FIXED,
    "fixed rate": RATE_TYPE_FIXED,
    "1": RATE_TYPE_FIXED,
    "variable": RATE_TYPE_VARIABLE,
    "variable rate": RATE_TYPE_VARIABLE,
    "adjustable": RATE_TYPE_VARIABLE,
    "adjustable rate": RATE_TYPE_VARIABLE,
    "arm": RATE_TYPE_VARIABLE,
    "2": RATE_TYPE_VARIABLE,
}


def parse_number(value: object) -> float | None:
    """Parse a loosely-typed numeric cell; blanks and non-numeric text give None."""
    if isinstance(value, bool) or is_blank(value):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    else:
        text = to_text(value).replace(",", "")
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _format_whole(number: float) -> str:
    return str(int(math.floor(number + 0.5)))


def _is_fixed_rate_marker(value: object) -> bool:
    return is_blank(value) or to_text(value).lower() in _FIXED_RATE_MARKERS


def derive_rate_type(intro_rate_period: object) -> str:
    """Fixed (1) unless the introductory rate period is a positive number (2)."""
    if _is_fixed_rate_marker(intro_rate_period):
        return RATE_TYPE_FIXED
    months = parse_number(intro_rate_period)
    if months is not None and months > 0:
        return RATE_TYPE_VARIABLE
    return RATE_TYPE_FIXED


def derive_variable_term(intro_rate_period: object) -> str:
    """Variable-rate term in whole years, rounded up; blank for fixed-rate loans."""
    if _is_fixed_rate_marker(intro_rate_period):
        return ""
    months = parse_number(intro_rate_period)
    if months is not None and months > 0:
        return str(math.ceil(months / 12))
    return ""


def rate_type_from_text(value: object) -> str:
    """Map an explicit rate-type label from a source export; unknown text gives ""."""
    if is_blank(value):
        return ""
    return _RATE_TYPE_TEXT.get(to_text(value).lower(), "")


def loan_term_years(months: object) -> str:
    number = parse_number(months)
    if number is None or number <= 0:
        return ""
    return str(int(number // 12))


def loan_term_months(value: object) -> str:
    """Loan term in months.

    Values above 40 are already months. Common whole-year terms are scaled by
    12 and anything else in 1..40 is taken to be months.
    """
    number = parse_number(value)
    if number is None or number <= 0:
        return ""
    if number > 40:
        return _format_whole(number)
    if number in _COMMON_YEAR_TERMS:
        return _format_whole(number * 12)
    return _format_whole(number)
