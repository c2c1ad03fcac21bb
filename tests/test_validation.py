from __future__ import annotations

import pytest

from hmda_etl.models import empty_canonical_record
from hmda_etl.qa import (
    apply_auto_corrections,
    build_validation_report_df,
    plan_auto_corrections,
    validate_record,
    validate_records,
)
from hmda_etl.qa.validation import VALIDATION_REPORT_COLUMNS


def _valid_record(**overrides: str) -> dict[str, str]:
    record = empty_canonical_record()
    record.update(
        {
            "ULI": "U1",
            "LEI": "L1",
            "LoanType": "1",
            "Action": "1",
            "Address": "1 Main St",
            "Income": "85",
            "LoanAmountInDollars": "250000",
            "InterestRate": "6.875",
        }
    )
    record.update(overrides)
    return record


def test_validate_record_accepts_complete_row() -> None:
    finding = validate_record(_valid_record(), 3)

    assert finding.is_valid
    assert finding.row_index == 3
    assert finding.identifier == "U1"
    assert finding.errors == []
    assert finding.warnings == []


def test_validate_record_reports_missing_required_fields() -> None:
    finding = validate_record(_valid_record(ULI="", LEI="", LoanType="", Action=""), 0)

    assert not finding.is_valid
    assert finding.identifier == "Row 0"
    assert finding.errors == ["Missing both ULI and LEI", "Missing Loan Type", "Missing Action Taken"]


@pytest.mark.parametrize(
    ("rate", "expected_errors"),
    [
        ("25", []),
        ("25.5", ["Interest rate 25.5 exceeds 25%"]),
        ("-30", []),
        ("NA", []),
        ("", []),
    ],
)
def test_validate_record_flags_only_positive_rates_above_limit(rate: str, expected_errors: list[str]) -> None:
    finding = validate_record(_valid_record(InterestRate=rate))

    assert finding.errors == expected_errors


def test_validate_record_rejects_action_codes_outside_hmda_domain() -> None:
    finding = validate_record(_valid_record(Action="9"))

    assert finding.errors == ["Invalid Action Taken code: 9 (expected 1-8)"]


def test_validate_record_warnings_do_not_invalidate() -> None:
    finding = validate_record(_valid_record(Address="", Income="", LoanAmountInDollars="0"))

    assert finding.is_valid
    assert finding.warnings == [
        "Missing Property Address",
        "Missing Income for originated loan",
        "Missing or zero loan amount",
    ]


def test_validate_record_only_expects_income_for_originations() -> None:
    finding = validate_record(_valid_record(Action="3", Income=""))

    assert finding.warnings == []


def test_validate_records_returns_one_finding_per_row_in_order() -> None:
    records = [_valid_record(ULI="A"), _valid_record(ULI="", LEI=""), _valid_record(ULI="C")]

    findings = validate_records(records)

    assert [finding.row_index for finding in findings] == [0, 1, 2]
    assert [finding.is_valid for finding in findings] == [True, False, True]
    assert validate_records([]) == []


def test_auto_corrections_are_planned_applied_and_reported() -> None:
    records = [
        _valid_record(State_abrv="Georgia", Zip="31201 ", County_5="21"),
        _valid_record(State_abrv="GA", Zip="31201", County_5="13021"),
    ]

    plans = [plan_auto_corrections(record) for record in records]
    corrected = apply_auto_corrections(records, plans)
    findings = validate_records(corrected, corrections=plans)

    assert plans[0] == {
        "State_abrv": {"from": "Georgia", "to": "GA"},
        "County_5": {"from": "21", "to": "00021"},
    }
    assert plans[1] == {}
    assert corrected[0]["State_abrv"] == "GA"
    assert corrected[0]["County_5"] == "00021"
    assert records[0]["State_abrv"] == "Georgia"
    assert findings[0].auto_corrected == plans[0]
    assert findings[1].auto_corrected == {}


def test_apply_auto_corrections_requires_one_plan_per_record() -> None:
    with pytest.raises(ValueError, match="one plan per record"):
        apply_auto_corrections([_valid_record()], [])


def test_finding_to_dict_uses_report_keys() -> None:
    finding = validate_record(_valid_record(Address=""), 2)

    assert finding.to_dict() == {
        "rowIndex": 2,
        "identifier": "U1",
        "isValid": True,
        "errors": [],
        "warnings": ["Missing Property Address"],
        "autoCorrected": {},
    }


def test_build_validation_report_df_flattens_findings() -> None:
    records = [_valid_record(State_abrv="Georgia"), _valid_record(ULI="", LEI="")]
    plans = [plan_auto_corrections(record) for record in records]
    findings = validate_records(apply_auto_corrections(records, plans), corrections=plans)

    report_df = build_validation_report_df(findings)

    assert list(report_df.columns) == list(VALIDATION_REPORT_COLUMNS)
    assert report_df.loc[0, "Auto Corrected"] == "State_abrv: Georgia -> GA"
    assert report_df.loc[1, "Identifier"] == "Row 1"
    assert report_df.loc[1, "Errors"] == "Missing both ULI and LEI"
    assert not bool(report_df.loc[1, "Is Valid"])


def test_validate_records_reports_uncorrected_formatting_as_warnings() -> None:
    findings = validate_records(
        [_valid_record(State_abrv="Georgia", County_5="21")],
        report_uncorrected=True,
    )

    assert findings[0].is_valid
    assert findings[0].auto_corrected == {}
    assert findings[0].warnings == [
        "State_abrv 'Georgia' is not in HMDA format (expected 'GA')",
        "County_5 '21' is not in HMDA format (expected '00021')",
    ]
