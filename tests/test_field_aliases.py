from __future__ import annotations

import pytest

from hmda_etl.fields import (
    FIELD_VARIATIONS,
    HELPER_FIELDS,
    LAR_POSITION_FIELD_MAP,
    LONG_FORM_FIELD_MAP,
    NOT_FOUND,
    aliases_for,
    normalize_field_name,
    normalize_record_keys,
    resolve_field_value,
    resolve_text,
)
from hmda_etl.fields.aliases import _verify_alias_tables
from hmda_etl.models import HMDA_COLUMN_ORDER


def test_every_canonical_column_has_known_spellings() -> None:
    missing = [column for column in HMDA_COLUMN_ORDER if not aliases_for(column)]

    assert missing == []
    assert set(HELPER_FIELDS).issubset(FIELD_VARIATIONS)


def test_long_form_targets_are_canonical_or_helper_fields() -> None:
    known = set(HMDA_COLUMN_ORDER) | set(HELPER_FIELDS)

    assert set(LONG_FORM_FIELD_MAP.values()) <= known


@pytest.mark.parametrize("column", [*HMDA_COLUMN_ORDER, *HELPER_FIELDS])
def test_normalize_field_name_is_idempotent_on_canonical_names(column: str) -> None:
    assert normalize_field_name(column) == column


@pytest.mark.parametrize(
    "spelling",
    sorted({*LONG_FORM_FIELD_MAP, *(alias for aliases in FIELD_VARIATIONS.values() for alias in aliases)}),
)
def test_normalize_field_name_is_idempotent_on_known_spellings(spelling: str) -> None:
    once = normalize_field_name(spelling)

    assert normalize_field_name(once) == once


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Legal Entity Identifier (LEI)", "LEI"),
        ("legal entity identifier (lei)", "LEI"),
        ("  Universal Loan Identifier (ULI)  ", "ULI"),
        ("Loan Number", "ApplNumb"),
        ("Loan Amount", "LoanAmountInDollars"),
        ("Rate Type", "RateType"),
        ("Some Custom Column", "Some Custom Column"),
    ],
)
def test_normalize_field_name(raw: str, expected: str) -> None:
    assert normalize_field_name(raw) == expected


def test_alias_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        LONG_FORM_FIELD_MAP["New Column"] = "ULI"  # type: ignore[index]
    with pytest.raises(TypeError):
        LAR_POSITION_FIELD_MAP[500] = "ULI"  # type: ignore[index]


def test_lar_position_map_covers_fields_one_through_109() -> None:
    assert LAR_POSITION_FIELD_MAP[0] == "RecordType"
    assert LAR_POSITION_FIELD_MAP[1] == "LEI"
    assert LAR_POSITION_FIELD_MAP[2] == "ULI"
    assert set(range(1, 110)) <= set(LAR_POSITION_FIELD_MAP)


def test_verify_alias_tables_rejects_unknown_target() -> None:
    with pytest.raises(ValueError, match="unknown canonical field"):
        _verify_alias_tables({"Mystery": "NotAColumn"}, {"ULI": ("ULI",)})


def test_verify_alias_tables_rejects_conflicting_spellings() -> None:
    with pytest.raises(ValueError, match="maps to both"):
        _verify_alias_tables({"Loan Number": "ApplNumb", "loan number": "ULI"}, {"ULI": ("ULI",)})


def test_verify_alias_tables_rejects_renaming_a_canonical_field() -> None:
    with pytest.raises(ValueError, match="renames canonical field"):
        _verify_alias_tables({"City": "Address"}, {"City": ("City",)})


def test_normalize_record_keys_first_non_blank_value_wins() -> None:
    record = {
        "Loan Amount": "",
        "Loan Amount in Dollars": 250000,
        "Legal Entity Identifier (LEI)": "LEI123",
        "Custom": "kept",
    }

    normalized = normalize_record_keys(record)

    assert normalized["LoanAmountInDollars"] == 250000
    assert normalized["LEI"] == "LEI123"
    assert normalized["Custom"] == "kept"
    # Original spellings survive next to the canonical names.
    assert normalized["Legal Entity Identifier (LEI)"] == "LEI123"
    assert record == {
        "Loan Amount": "",
        "Loan Amount in Dollars": 250000,
        "Legal Entity Identifier (LEI)": "LEI123",
        "Custom": "kept",
    }


def test_resolve_field_value_prefers_direct_key_even_when_zero() -> None:
    record = {"LoanAmountInDollars": 0, "Loan Amount": 500}

    assert resolve_field_value(record, "LoanAmountInDollars") == 0
    assert resolve_text(record, "LoanAmountInDollars") == "0"


def test_resolve_field_value_falls_back_to_aliases_then_case_insensitive_keys() -> None:
    assert resolve_field_value({"Property Address": "1 Main St"}, "Address") == "1 Main St"
    assert resolve_field_value({"PROPERTY CITY": "Macon"}, "City") == "Macon"
    assert resolve_field_value({"uli": "U1"}, "ULI") == "U1"


def test_resolve_field_value_distinguishes_empty_from_not_found() -> None:
    assert resolve_field_value({"ULI": None}, "ULI") is None
    assert resolve_field_value({"LEI": "X"}, "ULI") is NOT_FOUND
    assert not NOT_FOUND
    assert resolve_text({"LEI": "X"}, "ULI") == ""
