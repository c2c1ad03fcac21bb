from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from hmda_etl.models import to_text

DIFFERENCE_COLUMNS: tuple[str, ...] = (
    "Type",
    "Column",
    "Rows Affected",
    "Sample Actual",
    "Sample Expected",
)


@dataclass(frozen=True)
class ComparisonResult:
    actual_rows: int
    expected_rows: int
    differences: pd.DataFrame = field(repr=False)

    @property
    def identical(self) -> bool:
        return self.differences.empty

    @property
    def row_diff(self) -> int:
        return abs(self.actual_rows - self.expected_rows)


def _difference(
    kind: str,
    *,
    column: str = "",
    rows_affected: int | None = None,
    sample_actual: str = "",
    sample_expected: str = "",
) -> dict[str, object]:
    return {
        "Type": kind,
        "Column": column,
        "Rows Affected": rows_affected,
        "Sample Actual": sample_actual,
        "Sample Expected": sample_expected,
    }


def compare_outputs(actual_df: pd.DataFrame, expected_df: pd.DataFrame) -> ComparisonResult:
    """Compare a produced HMDA frame against a known-good one, row by position."""
    differences: list[dict[str, object]] = []
    actual_rows = int(len(actual_df))
    expected_rows = int(len(expected_df))

    if actual_rows != expected_rows:
        differences.append(
            _difference("Row Count", sample_actual=str(actual_rows), sample_expected=str(expected_rows))
        )

    actual_columns = [str(column) for column in actual_df.columns]
    expected_columns = [str(column) for column in expected_df.columns]
    missing = [column for column in expected_columns if column not in actual_columns]
    extra = [column for column in actual_columns if column not in expected_columns]
    if missing:
        differences.append(_difference("Missing Columns in Actual", column=", ".join(missing)))
    if extra:
        differences.append(_difference("Extra Columns in Actual", column=", ".join(extra)))

    rows_to_compare = min(actual_rows, expected_rows)
    for column in (column for column in actual_columns if column in expected_columns):
        actual_values = actual_df[column].iloc[:rows_to_compare].map(to_text).reset_index(drop=True)
        expected_values = expected_df[column].iloc[:rows_to_compare].map(to_text).reset_index(drop=True)
        mismatched = actual_values != expected_values
        mismatch_count = int(mismatched.sum())
        if not mismatch_count:
            continue
        first = int(mismatched.idxmax())
        differences.append(
            _difference(
                "Value Difference",
                column=column,
                rows_affected=mismatch_count,
                sample_actual=actual_values.iloc[first],
                sample_expected=expected_values.iloc[first],
            )
        )

    return ComparisonResult(
        actual_rows=actual_rows,
        expected_rows=expected_rows,
        differences=pd.DataFrame(differences, columns=list(DIFFERENCE_COLUMNS)),
    )
