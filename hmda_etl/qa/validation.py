from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging

import pandas as pd

from hmda_etl.derivers import abbreviate_state, clean_zip_code, pad_county_code, parse_number
from hmda_etl.models import ValidationFinding, is_blank, to_text

logger = logging.getLogger(__name__)

INTEREST_RATE_MAX = 25.0
VALID_ACTION_CODES: frozenset[str] = frozenset(str(code) for code in range(1, 9))
ORIGINATED_ACTION_CODE = "1"

VALIDATION_REPORT_COLUMNS: tuple[str, ...] = (
    "Row Index",
    "Identifier",
    "Is Valid",
    "Errors",
    "Warnings",
    "Auto Corrected",
)

# Columns whose normalization is unambiguous enough to correct automatically.
_AUTO_CORRECTORS = (
    ("State_abrv", abbreviate_state),
    ("Zip", clean_zip_code),
    ("County_5", pad_county_code),
)


def _text(record: Mapping[str, object], column: str) -> str:
    value = record.get(column)
    if is_blank(value):
        return ""
    return to_text(value)


def _identifier(record: Mapping[str, object], row_index: int) -> str:
    return _text(record, "ULI") or _text(record, "LEI") or f"Row {row_index}"


def validate_record(record: Mapping[str, object], row_index: int = 0) -> ValidationFinding:
    errors: list[str] = []
    warnings: list[str] = []

    if not _text(record, "ULI") and not _text(record, "LEI"):
        errors.append("Missing both ULI and LEI")
    if not _text(record, "LoanType"):
        errors.append("Missing Loan Type")

    action = _text(record, "Action")
    if not action:
        errors.append("Missing Action Taken")
    elif action not in VALID_ACTION_CODES:
        errors.append(f"Invalid Action Taken code: {action} (expected 1-8)")

    interest_rate = parse_number(record.get("InterestRate"))
    if interest_rate is not None and interest_rate > 0 and interest_rate > INTEREST_RATE_MAX:
        errors.append(f"Interest rate {_text(record, 'InterestRate')} exceeds {INTEREST_RATE_MAX:g}%")

    if not _text(record, "Address"):
        warnings.append("Missing Property Address")
    if action == ORIGINATED_ACTION_CODE and not _text(record, "Income"):
        warnings.append("Missing Income for originated loan")
    loan_amount = parse_number(record.get("LoanAmountInDollars"))
    if loan_amount is None or loan_amount == 0:
        warnings.append("Missing or zero loan amount")

    return ValidationFinding(
        row_index=row_index,
        identifier=_identifier(record, row_index),
        errors=errors,
        warnings=warnings,
    )


def validate_records(
    records: Sequence[Mapping[str, object]],
    *,
    corrections: Sequence[Mapping[str, Mapping[str, str]]] | None = None,
    report_uncorrected: bool = False,
) -> list[ValidationFinding]:
    """Validate every record, returning one finding per record in input order.

    ``corrections`` attaches already-applied auto-corrections to the findings.
    With ``report_uncorrected`` the fixes auto-correction would have made are
    listed as warnings instead.
    """
    findings: list[ValidationFinding] = []
    for row_index, record in enumerate(records):
        finding = validate_record(record, row_index)
        if report_uncorrected:
            for column, change in plan_auto_corrections(record).items():
                finding.warnings.append(
                    f"{column} '{change['from']}' is not in HMDA format (expected '{change['to']}')"
                )
        if corrections is not None and row_index < len(corrections):
            finding.auto_corrected = {
                column: dict(change) for column, change in corrections[row_index].items()
            }
        findings.append(finding)

    invalid_count = sum(1 for finding in findings if not finding.is_valid)
    logger.info("Validated %s rows: %s invalid", len(findings), invalid_count)
    return findings


def plan_auto_corrections(record: Mapping[str, object]) -> dict[str, dict[str, str]]:
    """Return the safe ``from -> to`` rewrites for one canonical row."""
    plan: dict[str, dict[str, str]] = {}
    for column, corrector in _AUTO_CORRECTORS:
        original = _text(record, column)
        if not original:
            continue
        corrected = corrector(original)
        if corrected != original:
            plan[column] = {"from": original, "to": corrected}
    return plan


def apply_auto_corrections(
    records: Sequence[Mapping[str, str]],
    plans: Sequence[Mapping[str, Mapping[str, str]]],
) -> list[dict[str, str]]:
    """Apply planned corrections to copies of ``records``."""
    if len(records) != len(plans):
        raise ValueError(
            f"apply_auto_corrections needs one plan per record ({len(records)} records, {len(plans)} plans)"
        )
    corrected_records: list[dict[str, str]] = []
    for record, plan in zip(records, plans, strict=True):
        corrected = dict(record)
        for column, change in plan.items():
            corrected[column] = change["to"]
        corrected_records.append(corrected)
    return corrected_records


def _format_corrections(auto_corrected: Mapping[str, Mapping[str, str]]) -> str:
    return "; ".join(
        f"{column}: {change['from']} -> {change['to']}" for column, change in auto_corrected.items()
    )


def build_validation_report_df(findings: Sequence[ValidationFinding]) -> pd.DataFrame:
    """Flatten findings into the exception-report sheet layout."""
    rows = [
        {
            "Row Index": finding.row_index,
            "Identifier": finding.identifier,
            "Is Valid": finding.is_valid,
            "Errors": "; ".join(finding.errors),
            "Warnings": "; ".join(finding.warnings),
            "Auto Corrected": _format_corrections(finding.auto_corrected),
        }
        for finding in findings
    ]
    return pd.DataFrame(rows, columns=list(VALIDATION_REPORT_COLUMNS))
