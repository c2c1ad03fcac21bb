from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from hmda_etl.models import ValidationFinding, is_blank
from hmda_etl.qa.loan_id import find_duplicate_ids, normalize_loan_id

_DISTRIBUTION_COLUMNS: tuple[tuple[str, str], ...] = (
    ("LoanType", "Loan Type"),
    ("Action", "Action Taken"),
    ("Purpose", "Loan Purpose"),
)


def _safe_frame_rows(df: pd.DataFrame | None) -> int:
    return 0 if df is None else int(len(df))


def _build_sheet_rows(qa_dict: dict[str, int | float]) -> list[dict[str, int | float]]:
    ordered_rows = [
        ("Input Rows", qa_dict["input_rows"]),
        ("Supplemental Rows", qa_dict["supplemental_rows"]),
        ("Duplicates Removed", qa_dict["duplicates_removed"]),
        ("Output Rows", qa_dict["output_rows"]),
        ("Unique ULIs", qa_dict["unique_ulis"]),
        ("Duplicate ULI Rows", qa_dict["duplicate_uli_rows"]),
        ("Supplemental Matches", qa_dict["merge_matched"]),
        ("Match Rate", qa_dict["match_rate"]),
        ("Valid Rows", qa_dict["valid_rows"]),
        ("Invalid Rows", qa_dict["invalid_rows"]),
        ("Rows With Warnings", qa_dict["rows_with_warnings"]),
        ("Total Loan Amount", qa_dict["total_loan_amount"]),
    ]
    return [{"Metric": metric, "Value": value} for metric, value in ordered_rows]


def value_distribution(df: pd.DataFrame | None, column: str) -> dict[str, int]:
    """Count non-blank values of one canonical column, ordered by value."""
    if df is None or column not in df.columns:
        return {}
    values = df[column].loc[~df[column].map(is_blank)].astype(str).str.strip()
    counts = values.value_counts()
    return {str(value): int(counts[value]) for value in sorted(counts.index)}


def _distribution_rows(df: pd.DataFrame | None) -> list[dict[str, int | str]]:
    rows: list[dict[str, int | str]] = []
    for column, label in _DISTRIBUTION_COLUMNS:
        for value, count in value_distribution(df, column).items():
            rows.append({"Metric": f"{label} = {value}", "Value": count})
    return rows


def compute_qa(
    *,
    canonical_df: pd.DataFrame | None = None,
    findings: Sequence[ValidationFinding] = (),
    input_rows: int | None = None,
    supplemental_rows: int = 0,
    duplicates_removed: int = 0,
    merge_matched: int = 0,
    uli_column: str = "ULI",
    loan_amount_column: str = "LoanAmountInDollars",
) -> tuple[pd.DataFrame, dict[str, int | float]]:
    """Compute run-level QA summary metrics for one pipeline run."""
    output_rows = _safe_frame_rows(canonical_df)

    if canonical_df is not None and uli_column in canonical_df.columns:
        ulis = canonical_df[uli_column].map(normalize_loan_id).dropna()
        unique_ulis = int(ulis.nunique())
        duplicate_uli_rows = int(len(find_duplicate_ids(canonical_df, uli_column)))
    else:
        unique_ulis = 0
        duplicate_uli_rows = 0

    if canonical_df is not None and loan_amount_column in canonical_df.columns:
        amounts = pd.to_numeric(canonical_df[loan_amount_column], errors="coerce")
        total_loan_amount = float(amounts.fillna(0.0).sum())
    else:
        total_loan_amount = 0.0

    invalid_rows = sum(1 for finding in findings if not finding.is_valid)
    qa_dict: dict[str, int | float] = {
        "input_rows": int(input_rows) if input_rows is not None else output_rows,
        "supplemental_rows": int(supplemental_rows),
        "duplicates_removed": int(duplicates_removed),
        "output_rows": output_rows,
        "unique_ulis": unique_ulis,
        "duplicate_uli_rows": duplicate_uli_rows,
        "merge_matched": int(merge_matched),
        "match_rate": float(merge_matched / output_rows) if output_rows else 0.0,
        "valid_rows": len(findings) - invalid_rows,
        "invalid_rows": invalid_rows,
        "rows_with_warnings": sum(1 for finding in findings if finding.warnings),
        "total_loan_amount": total_loan_amount,
    }

    qa_df = pd.DataFrame(_build_sheet_rows(qa_dict), columns=["Metric", "Value"])
    distribution_rows = _distribution_rows(canonical_df)
    if distribution_rows:
        spacer = pd.DataFrame([{"Metric": "", "Value": ""}], columns=["Metric", "Value"])
        distribution_df = pd.DataFrame(distribution_rows, columns=["Metric", "Value"])
        qa_df = pd.concat([qa_df, spacer, distribution_df], ignore_index=True)
    return qa_df, qa_dict
