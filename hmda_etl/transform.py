from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging

from hmda_etl.branches import (
    OfficerBranchLookup,
    branch_from_uli,
    lookup_branch_name,
    no_officer_lookup,
)
from hmda_etl.derivers import (
    RATE_TYPE_VARIABLE,
    derive_rate_type,
    derive_variable_term,
    format_census_tract,
    format_hmda_date,
    loan_term_months,
    loan_term_years,
    map_aus_result,
    map_aus_system,
    map_non_amortizing_features,
    parse_number,
    rate_type_from_text,
    split_borrower_name,
    strip_nmls_prefix,
)
from hmda_etl.fields import resolve_text
from hmda_etl.models import (
    AUS_RESULT_COLUMNS,
    AUS_SYSTEM_COLUMNS,
    BLANK_BY_DESIGN_COLUMNS,
    DATE_COLUMNS,
    HMDA_COLUMN_ORDER,
    NO_CO_APPLICANT_DEFAULTS,
    NO_CO_APPLICANT_NUMERIC_COLUMNS,
    NO_CO_APPLICANT_SENTINEL,
    NOT_APPLICABLE_DEFAULTS,
    SOURCE_ENCOMPASS,
    SOURCE_KEY,
    SOURCE_LASERPRO,
    TransformResult,
    empty_canonical_record,
    is_blank,
    to_text,
)

logger = logging.getLogger(__name__)


def record_source(raw: Mapping[str, object]) -> str:
    """Lower-cased provenance tag; untagged records count as the primary export."""
    value = raw.get(SOURCE_KEY)
    if is_blank(value):
        return SOURCE_ENCOMPASS
    return to_text(value).lower()


def _base_record(raw: Mapping[str, object]) -> dict[str, str]:
    record = empty_canonical_record()
    for column in HMDA_COLUMN_ORDER:
        record[column] = resolve_text(raw, column)
    return record


def _fill_borrower_name(record: dict[str, str], raw: Mapping[str, object]) -> None:
    if record["FirstName"] and record["LastName"]:
        return
    full_name = resolve_text(raw, "BorrowerFullName")
    if not full_name:
        return
    name = split_borrower_name(full_name)
    if not record["FirstName"]:
        record["FirstName"] = name.first_name
    if not record["LastName"]:
        record["LastName"] = name.last_name


def _resolve_branch(
    record: dict[str, str],
    raw: Mapping[str, object],
    *,
    row_index: int,
    officer_lookup: OfficerBranchLookup,
) -> str | None:
    branch = record["Branch"]
    if not branch and record_source(raw) != SOURCE_LASERPRO:
        branch = branch_from_uli(record["ULI"])
        if branch:
            logger.debug("Row %s: branch %s taken from ULI", row_index, branch)

    lender = record["Lender"]
    if not branch and lender:
        branch = officer_lookup(lender) or ""
        if branch:
            logger.debug("Row %s: branch %s derived from lender %r", row_index, branch, lender)
    record["Branch"] = branch

    if not record["Branch_Name"] and branch:
        record["Branch_Name"] = lookup_branch_name(branch)
    if record["Branch_Name"]:
        return None

    if branch:
        return f'Row {row_index}: could not determine branch name for branch "{branch}"'
    if lender:
        return f'Row {row_index}: could not determine branch for lender "{lender}"'
    return f"Row {row_index}: could not determine branch (no branch number or lender)"


def _apply_defaults(record: dict[str, str]) -> None:
    for column in BLANK_BY_DESIGN_COLUMNS:
        record[column] = ""

    for column in NO_CO_APPLICANT_NUMERIC_COLUMNS:
        if not record[column]:
            record[column] = NO_CO_APPLICANT_SENTINEL
    for column, code in NO_CO_APPLICANT_DEFAULTS:
        if not record[column]:
            record[column] = code
    for column, code in NOT_APPLICABLE_DEFAULTS:
        if not record[column]:
            record[column] = code

    record["NMLSRID"] = strip_nmls_prefix(record["NMLSRID"])


def _apply_derivers(record: dict[str, str], raw: Mapping[str, object]) -> dict[str, str]:
    for column in DATE_COLUMNS:
        record[column] = format_hmda_date(record[column])

    record["Tract_11"] = format_census_tract(record["Tract_11"])

    for column in AUS_SYSTEM_COLUMNS:
        record[column] = map_aus_system(record[column])
    for column in AUS_RESULT_COLUMNS:
        record[column] = map_aus_result(record[column])

    record["NonAmortz"] = map_non_amortizing_features(
        record["NonAmortz"],
        record["BalloonPMT"],
        record["IOPMT"],
        record["NegAM"],
    )

    months = loan_term_months(record["Loan_Term_Months"] or record["Loan_Term"])
    record["Loan_Term_Months"] = months
    record["Loan_Term"] = loan_term_years(months) if months else ""

    intro_rate_period = record["IntroRatePeriod"]
    rate_type = rate_type_from_text(resolve_text(raw, "RateType")) or derive_rate_type(intro_rate_period)
    variable_term = derive_variable_term(intro_rate_period) if rate_type == RATE_TYPE_VARIABLE else ""
    return {"ULI": record["ULI"], "RateType": rate_type, "Var_Term": variable_term}


def _record_warnings(record: Mapping[str, str], row_index: int) -> list[str]:
    warnings: list[str] = []
    if not record["ULI"] and not record["LEI"]:
        warnings.append(f"Row {row_index}: Missing ULI and LEI")
    loan_amount = parse_number(record["LoanAmountInDollars"])
    if loan_amount is None or loan_amount == 0:
        warnings.append(f"Row {row_index}: Missing or zero LoanAmountInDollars")
    return warnings


def transform_record(
    raw: Mapping[str, object],
    *,
    row_index: int = 0,
    officer_lookup: OfficerBranchLookup | None = None,
) -> tuple[dict[str, str], dict[str, str], list[str]]:
    """Build one canonical 126-column row from a raw or merged source record.

    Returns the canonical row, its derived rate terms and any row warnings.
    """
    record = _base_record(raw)
    _fill_borrower_name(record, raw)

    warnings: list[str] = []
    branch_warning = _resolve_branch(
        record,
        raw,
        row_index=row_index,
        officer_lookup=officer_lookup or no_officer_lookup,
    )
    if branch_warning is not None:
        warnings.append(branch_warning)

    _apply_defaults(record)
    rate_terms = _apply_derivers(record, raw)
    warnings.extend(_record_warnings(record, row_index))
    return record, rate_terms, warnings


def transform_records(
    records: Iterable[Mapping[str, object]],
    *,
    officer_lookup: OfficerBranchLookup | None = None,
) -> TransformResult:
    canonical_records: list[dict[str, str]] = []
    rate_terms: list[dict[str, str]] = []
    warnings: list[str] = []
    for row_index, raw in enumerate(records):
        record, row_rate_terms, row_warnings = transform_record(
            raw,
            row_index=row_index,
            officer_lookup=officer_lookup,
        )
        canonical_records.append(record)
        rate_terms.append(row_rate_terms)
        warnings.extend(row_warnings)

    if warnings:
        logger.info("Transformed %s rows with %s warnings", len(canonical_records), len(warnings))
    return TransformResult(records=canonical_records, rate_terms=rate_terms, warnings=warnings)
