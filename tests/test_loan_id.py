from __future__ import annotations

import pandas as pd
import pytest

from hmda_etl.qa import find_duplicate_ids, normalize_loan_id


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (12345.0, "12345"),
        ("  5493001abc 0012024.0  ", "5493001ABC0012024"),
        ("l-10 01", "L-1001"),
        ("   ", None),
        (None, None),
        (float("nan"), None),
    ],
)
def test_normalize_loan_id(raw: object, expected: str | None) -> None:
    assert normalize_loan_id(raw) == expected


def test_find_duplicate_ids_returns_duplicate_rows_with_normalized_value() -> None:
    rows = [
        {"ULI": " 549300abc1.0 ", "source": "encompass"},
        {"ULI": "549300ABC1", "source": "laserpro"},
        {"ULI": "549300xyz2", "source": "encompass"},
        {"ULI": "549300 XYZ2", "source": "laserpro"},
        {"ULI": "549300UNIQUE", "source": "encompass"},
    ]

    duplicates = find_duplicate_ids(rows, "ULI")

    assert len(duplicates) == 4
    assert {row["normalized_loan_id"] for row in duplicates} == {"549300ABC1", "549300XYZ2"}


def test_find_duplicate_ids_on_frame_ignores_blank_ids() -> None:
    df = pd.DataFrame({"ULI": ["A1", "a1", "", None, "B2"]}, dtype=object)

    duplicates = find_duplicate_ids(df, "ULI")

    assert duplicates.index.tolist() == [0, 1]
    assert duplicates["normalized_loan_id"].tolist() == ["A1", "A1"]


def test_find_duplicate_ids_on_frame_requires_column() -> None:
    with pytest.raises(KeyError, match="Column 'ULI' not found"):
        find_duplicate_ids(pd.DataFrame({"LEI": ["X"]}), "ULI")
