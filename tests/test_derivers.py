from __future__ import annotations

from datetime import date, datetime

import pytest

from hmda_etl.derivers import (
    abbreviate_state,
    clean_zip_code,
    derive_rate_type,
    derive_variable_term,
    format_census_tract,
    format_hmda_date,
    loan_term_months,
    loan_term_years,
    map_aus_result,
    map_aus_system,
    map_non_amortizing_features,
    pad_county_code,
    parse_number,
    rate_type_from_text,
    split_borrower_name,
    strip_nmls_prefix,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, ""),
        ("", ""),
        (date(2024, 1, 5), "1/5/24"),
        (datetime(2023, 12, 31, 14, 30), "12/31/23"),
        ("20240315", "3/15/24"),
        (20240315, "3/15/24"),
        (45292, "1/1/24"),
        (45292.75, "1/1/24"),
        ("3/15/2024", "3/15/2024"),
        (" 1/15/24 ", "1/15/24"),
        ("2024-03-15", "2024-03-15"),
        (999, "999"),
        ("pending", "pending"),
    ],
)
def test_format_hmda_date(raw: object, expected: str) -> None:
    assert format_hmda_date(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "1"),
        ("", "1"),
        ("NA", "1"),
        ("n/a", "1"),
        ("Exempt", "1"),
        ("1111", "1"),
        ("0", "1"),
        ("abc", "1"),
        ("60", "2"),
        (84.0, "2"),
    ],
)
def test_derive_rate_type(raw: object, expected: str) -> None:
    assert derive_rate_type(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, ""),
        ("NA", ""),
        ("0", ""),
        ("60", "5"),
        ("61", "6"),
        ("12", "1"),
        ("6", "1"),
    ],
)
def test_derive_variable_term_rounds_up_to_whole_years(raw: object, expected: str) -> None:
    assert derive_variable_term(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Fixed", "1"),
        ("FIXED RATE", "1"),
        ("Variable", "2"),
        ("ARM", "2"),
        ("Adjustable", "2"),
        ("balloon", ""),
        (None, ""),
    ],
)
def test_rate_type_from_text(raw: object, expected: str) -> None:
    assert rate_type_from_text(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, ""),
        ("0", ""),
        ("360", "360"),
        ("360.4", "360"),
        ("30", "360"),
        ("15", "180"),
        ("40", "480"),
        ("18", "18"),
        ("1,200", "1200"),
    ],
)
def test_loan_term_months(raw: object, expected: str) -> None:
    assert loan_term_months(raw) == expected


@pytest.mark.parametrize(("months", "expected"), [("360", "30"), ("180", "15"), ("18", "1"), ("", "")])
def test_loan_term_years(months: str, expected: str) -> None:
    assert loan_term_years(months) == expected


def test_parse_number_handles_text_and_rejects_garbage() -> None:
    assert parse_number("250,000") == 250000.0
    assert parse_number(0) == 0.0
    assert parse_number(True) is None
    assert parse_number("n/a") is None
    assert parse_number(float("inf")) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Smith, John A", ("John", "Smith")),
        ("Smith,John", ("John", "Smith")),
        ("Smith, John, Jr", ("John", "Smith")),
        ("Mary Jane Watson", ("Mary", "Jane Watson")),
        ("Cher", ("Cher", "")),
        (None, ("", "")),
    ],
)
def test_split_borrower_name(raw: object, expected: tuple[str, str]) -> None:
    name = split_borrower_name(raw)

    assert (name.first_name, name.last_name) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("13121001100", "13121001100"),
        ("1234.56", "00000123456"),
        ("0013121001100", "13121001100"),
        ("na", "NA"),
        ("Exempt", "EXEMPT"),
        ("unknown", "unknown"),
        (None, ""),
    ],
)
def test_format_census_tract(raw: object, expected: str) -> None:
    assert format_census_tract(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Georgia", "GA"),
        ("  north   carolina ", "NC"),
        ("District of Columbia", "DC"),
        ("GA", "GA"),
        ("Atlantis", "Atlantis"),
    ],
)
def test_abbreviate_state(raw: str, expected: str) -> None:
    assert abbreviate_state(raw) == expected


def test_clean_zip_code_and_pad_county_code() -> None:
    assert clean_zip_code(" 31201-1234 ") == "31201-1234"
    assert clean_zip_code("ZIP 31201") == "31201"
    assert clean_zip_code("31201123456789") == "3120112345"
    assert pad_county_code("21") == "00021"
    assert pad_county_code("13021") == "13021"
    assert pad_county_code("NA") == "NA"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Desktop Underwriter", "1"),
        ("LPA", "2"),
        ("3", "3"),
        ("1111", ""),
        ("Something Else", "Something Else"),
        (None, ""),
    ],
)
def test_map_aus_system(raw: object, expected: str) -> None:
    assert map_aus_system(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Approve/Eligible", "1"),
        ("Refer with Caution", "5"),
        ("17", "17"),
        ("18", "18"),
        ("1111", ""),
    ],
)
def test_map_aus_result(raw: object, expected: str) -> None:
    assert map_aus_result(raw) == expected


@pytest.mark.parametrize(
    ("value", "balloon", "interest_only", "negative_amortization", "expected"),
    [
        ("", "Y", "", "", "1"),
        ("", "", "yes", "", "2"),
        ("", "", "", "TRUE", "3"),
        ("", "", "", "", "2"),
        ("1111", None, None, None, "2"),
        ("3", None, None, None, "3"),
        ("Balloon Payment", None, None, None, "1"),
        ("None", None, None, None, "1111"),
        ("surprise", None, None, None, "2"),
    ],
)
def test_map_non_amortizing_features(
    value: object,
    balloon: object,
    interest_only: object,
    negative_amortization: object,
    expected: str,
) -> None:
    assert map_non_amortizing_features(value, balloon, interest_only, negative_amortization) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("NMLS#123456", "123456"), ("nmls 98765", "98765"), ("NML#55", "55"), ("445566", "445566"), (None, "")],
)
def test_strip_nmls_prefix(raw: object, expected: str) -> None:
    assert strip_nmls_prefix(raw) == expected
