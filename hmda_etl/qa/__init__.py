"""Validation, quality-assurance metrics, output comparison and verification utilities."""

from hmda_etl.qa.compare import ComparisonResult, compare_outputs
from hmda_etl.qa.loan_id import find_duplicate_ids, normalize_loan_id
from hmda_etl.qa.metrics import compute_qa, value_distribution
from hmda_etl.qa.validation import (
    apply_auto_corrections,
    build_validation_report_df,
    plan_auto_corrections,
    validate_record,
    validate_records,
)
from hmda_etl.qa.verification import (
    VerificationCheck,
    VerificationResult,
    format_verification_report,
    validate_column_order,
    verify_hmda_output,
    verify_work_item_output,
)

__all__ = [
    "ComparisonResult",
    "VerificationCheck",
    "VerificationResult",
    "apply_auto_corrections",
    "build_validation_report_df",
    "compare_outputs",
    "compute_qa",
    "find_duplicate_ids",
    "format_verification_report",
    "normalize_loan_id",
    "plan_auto_corrections",
    "validate_column_order",
    "validate_record",
    "validate_records",
    "value_distribution",
    "verify_hmda_output",
    "verify_work_item_output",
]
