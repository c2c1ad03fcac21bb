from __future__ import annotations

import pandas as pd
import pytest

from hmda_etl.models import ValidationFinding, build_canonical_df
from hmda_etl.qa import compute_qa, value_distribution


def _canonical_df() -> pd.DataFrame:
    return build_canonical_df(
        [
            {"ULI": "U1", "LoanType": "1", "Action": "1", "Purpose": "1", "LoanAmountInDollars": "100000"},
            {"ULI": "u1", "LoanType": "2", "Action": "1", "Purpose": "31", "LoanAmountInDollars": "50000.5"},
            {"ULI": "U2", "LoanType": "1", "Action": "3", "Purpose": "1", "LoanAmountInDollars": "n/a"},
            {"ULI": "", "LoanType": "", "Action": "1", "Purpose": "", "LoanAmountInDollars": ""},
        ]
    )


def test_compute_qa_with_full_inputs_returns_expected_metrics() -> None:
    findings = [
        ValidationFinding(row_index=0, identifier="U1"),
        ValidationFinding(row_index=1, identifier="u1", warnings=["Missing Property Address"]),
        ValidationFinding(row_index=2, identifier="U2"),
        ValidationFinding(row_index=3, identifier="Row 3", errors=["Missing both ULI and LEI"]),
    ]

    qa_df, qa_dict = compute_qa(
        canonical_df=_canonical_df(),
        findings=findings,
        input_rows=6,
        supplemental_rows=3,
        duplicates_removed=2,
        merge_matched=3,
    )

    assert qa_df.columns.tolist() == ["Metric", "Value"]
    assert qa_dict["input_rows"] == 6
    assert qa_dict["supplemental_rows"] == 3
    assert qa_dict["duplicates_removed"] == 2
    assert qa_dict["output_rows"] == 4
    assert qa_dict["unique_ulis"] == 2
    assert qa_dict["duplicate_uli_rows"] == 2
    assert qa_dict["merge_matched"] == 3
    assert qa_dict["match_rate"] == pytest.approx(0.75)
    assert qa_dict["valid_rows"] == 3
    assert qa_dict["invalid_rows"] == 1
    assert qa_dict["rows_with_warnings"] == 1
    assert qa_dict["total_loan_amount"] == pytest.approx(150000.5)

    by_metric = dict(zip(qa_df["Metric"].tolist(), qa_df["Value"].tolist(), strict=True))
    assert by_metric["Output Rows"] == 4
    assert by_metric["Invalid Rows"] == 1
    assert by_metric["Loan Type = 1"] == 2
    assert by_metric["Loan Type = 2"] == 1
    assert by_metric["Action Taken = 1"] == 3
    assert by_metric["Loan Purpose = 31"] == 1


def test_compute_qa_separates_distributions_with_a_spacer_row() -> None:
    qa_df, _ = compute_qa(canonical_df=_canonical_df())

    metrics = qa_df["Metric"].tolist()
    spacer_index = metrics.index("")
    assert metrics[spacer_index - 1] == "Total Loan Amount"
    assert metrics[spacer_index + 1].startswith("Loan Type = ")


def test_compute_qa_handles_empty_run() -> None:
    qa_df, qa_dict = compute_qa(canonical_df=build_canonical_df([]))

    assert qa_dict["input_rows"] == 0
    assert qa_dict["output_rows"] == 0
    assert qa_dict["match_rate"] == 0.0
    assert qa_dict["total_loan_amount"] == 0.0
    assert "" not in qa_df["Metric"].tolist()


def test_compute_qa_without_frame_defaults_to_zero() -> None:
    _, qa_dict = compute_qa()

    assert qa_dict["output_rows"] == 0
    assert qa_dict["unique_ulis"] == 0


def test_value_distribution_skips_blanks_and_sorts_values() -> None:
    assert value_distribution(_canonical_df(), "LoanType") == {"1": 2, "2": 1}
    assert value_distribution(_canonical_df(), "NotAColumn") == {}
    assert value_distribution(None, "LoanType") == {}
