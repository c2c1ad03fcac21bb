"""Pure value derivations used when building canonical HMDA rows.

Every deriver is total: bad input comes back unchanged or blank, never raised.
"""

from hmda_etl.derivers.codes import (
    PLACEHOLDER_CODE,
    is_true_flag,
    map_aus_result,
    map_aus_system,
    map_non_amortizing_features,
    strip_nmls_prefix,
)
from hmda_etl.derivers.dates import format_hmda_date
from hmda_etl.derivers.geography import (
    abbreviate_state,
    clean_zip_code,
    format_census_tract,
    pad_county_code,
)
from hmda_etl.derivers.names import BorrowerName, split_borrower_name
from hmda_etl.derivers.terms import (
    RATE_TYPE_FIXED,
    RATE_TYPE_VARIABLE,
    derive_rate_type,
    derive_variable_term,
    loan_term_months,
    loan_term_years,
    parse_number,
    rate_type_from_text,
)

__all__ = [
    "BorrowerName",
    "PLACEHOLDER_CODE",
    "RATE_TYPE_FIXED",
    "RATE_TYPE_VARIABLE",
    "abbreviate_state",
    "clean_zip_code",
    "derive_rate_type",
    "derive_variable_term",
    "format_census_tract",
    "format_hmda_date",
    "is_true_flag",
    "loan_term_months",
    "loan_term_years",
    "map_aus_result",
    "map_aus_system",
    "map_non_amortizing_features",
    "pad_county_code",
    "parse_number",
    "rate_type_from_text",
    "split_borrower_name",
    "strip_nmls_prefix",
]
