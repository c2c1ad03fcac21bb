from __future__ import annotations

import pytest

from hmda_etl.branches import (
    BRANCH_DIRECTORY,
    branch_from_uli,
    build_officer_lookup,
    lookup_branch_name,
    no_officer_lookup,
)

_LEI = "5493001KJTIIGC8Y1R12"


def test_branch_directory_is_read_only() -> None:
    assert BRANCH_DIRECTORY["101"] == "Columbus"
    with pytest.raises(TypeError):
        BRANCH_DIRECTORY["999"] = "Nowhere"  # type: ignore[index]


@pytest.mark.parametrize(
    ("branch", "expected"),
    [("101", "Columbus"), (101, "Columbus"), (" 110 ", "Valdosta"), ("999", ""), (None, "")],
)
def test_lookup_branch_name(branch: object, expected: str) -> None:
    assert lookup_branch_name(branch) == expected


@pytest.mark.parametrize(
    ("uli", "expected"),
    [
        (f"{_LEI}1091234567890", "109"),
        (f"{_LEI}9991234567890", ""),
        (f"{_LEI}10X1234567890", ""),
        (f"{_LEI}109", ""),
        ("", ""),
    ],
)
def test_branch_from_uli_reads_positions_21_to_23(uli: str, expected: str) -> None:
    assert branch_from_uli(uli) == expected


def test_build_officer_lookup_ignores_case_and_spacing() -> None:
    lookup = build_officer_lookup({"Jane  Doe": "114", "": "101", "Nobody": ""})

    assert lookup("jane doe") == "114"
    assert lookup("  JANE DOE ") == "114"
    assert lookup("John Roe") == ""
    assert lookup("") == ""
    assert lookup("Nobody") == ""


def test_no_officer_lookup_never_resolves() -> None:
    assert no_officer_lookup("Jane Doe") == ""
    assert build_officer_lookup(None)("Jane Doe") == ""
