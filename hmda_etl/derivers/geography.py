from __future__ import annotations

import re

from hmda_etl.models.canonical import is_blank, to_text

_TRACT_SPECIAL_VALUES: frozenset[str] = frozenset({"na", "exempt"})
_TRACT_WIDTH = 11
_COUNTY_WIDTH = 5
_ZIP_MAX_LENGTH = 10
_NON_ZIP_CHARS = re.compile(r"[^\d-]")
_DIGITS = re.compile(r"^\d+$")

_STATE_ABBREVIATIONS: dict[str, str] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "district of columbia": "DC",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}


def format_census_tract(value: object) -> str:
    """Zero-pad a census tract to 11 digits; NA and Exempt pass through upper-cased."""
    if is_blank(value):
        return ""
    text = to_text(value)
    if text.lower() in _TRACT_SPECIAL_VALUES:
        return text.upper()

    cleaned = text.replace(".", "").lstrip("0")
    if _DIGITS.match(cleaned):
        return cleaned.rjust(_TRACT_WIDTH, "0")
    return text


def abbreviate_state(value: object) -> str:
    """Return the two-letter code for a spelled-out state name, else the trimmed input."""
    text = to_text(value)
    if len(text) <= 2:
        return text
    return _STATE_ABBREVIATIONS.get(" ".join(text.lower().split()), text)


def clean_zip_code(value: object) -> str:
    return _NON_ZIP_CHARS.sub("", to_text(value))[:_ZIP_MAX_LENGTH]


def pad_county_code(value: object) -> str:
    """Left-pad a numeric county FIPS code to five digits."""
    text = to_text(value)
    if _DIGITS.match(text) and len(text) < _COUNTY_WIDTH:
        return text.rjust(_COUNTY_WIDTH, "0")
    return text
