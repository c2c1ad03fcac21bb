"""Internal data model contracts for canonical HMDA pipeline structures."""

from hmda_etl.models.canonical import (
    AUS_RESULT_COLUMNS,
    AUS_SYSTEM_COLUMNS,
    BLANK_BY_DESIGN_COLUMNS,
    DATE_COLUMNS,
    HMDA_COLUMN_COUNT,
    HMDA_COLUMN_ORDER,
    MERGED_FLAG_KEY,
    NO_CO_APPLICANT_DEFAULTS,
    NO_CO_APPLICANT_NUMERIC_COLUMNS,
    NO_CO_APPLICANT_SENTINEL,
    NOT_APPLICABLE_DEFAULTS,
    RATE_TERM_COLUMNS,
    SOURCE_ENCOMPASS,
    SOURCE_KEY,
    SOURCE_LASERPRO,
    SOURCE_SUPPLEMENTAL,
    build_canonical_df,
    empty_canonical_record,
    is_blank,
    records_from_frame,
    to_text,
)
from hmda_etl.models.results import (
    DeduplicationResult,
    MergeResult,
    TransformResult,
    ValidationFinding,
)

__all__ = [
    "AUS_RESULT_COLUMNS",
    "AUS_SYSTEM_COLUMNS",
    "BLANK_BY_DESIGN_COLUMNS",
    "DATE_COLUMNS",
    "DeduplicationResult",
    "HMDA_COLUMN_COUNT",
    "HMDA_COLUMN_ORDER",
    "MERGED_FLAG_KEY",
    "MergeResult",
    "NOT_APPLICABLE_DEFAULTS",
    "NO_CO_APPLICANT_DEFAULTS",
    "NO_CO_APPLICANT_NUMERIC_COLUMNS",
    "NO_CO_APPLICANT_SENTINEL",
    "RATE_TERM_COLUMNS",
    "SOURCE_ENCOMPASS",
    "SOURCE_KEY",
    "SOURCE_LASERPRO",
    "SOURCE_SUPPLEMENTAL",
    "TransformResult",
    "ValidationFinding",
    "build_canonical_df",
    "empty_canonical_record",
    "is_blank",
    "records_from_frame",
    "to_text",
]
