from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
import math
import numbers

import pandas as pd

# Output layout consumed by the CRA Wiz import; header order is a compatibility contract.
HMDA_COLUMN_ORDER: tuple[str, ...] = (
    "Branch_Name",
    "Branch",
    "LEI",
    "ULI",
    "LastName",
    "FirstName",
    "Coa_LastName",
    "Coa_FirstName",
    "Lender",
    "AA_Processor",
    "LDP_PostCloser",
    "ErrorMadeBy",
    "ApplDate",
    "LoanType",
    "Purpose",
    "ConstructionMethod",
    "OccupancyType",
    "LoanAmountInDollars",
    "Preapproval",
    "Action",
    "ActionDate",
    "Address",
    "City",
    "State_abrv",
    "Zip",
    "County_5",
    "Tract_11",
    "Ethnicity_1",
    "Ethnicity_2",
    "Ethnicity_3",
    "Ethnicity_4",
    "Ethnicity_5",
    "EthnicityOther",
    "Coa_Ethnicity_1",
    "Coa_Ethnicity_2",
    "Coa_Ethnicity_3",
    "Coa_Ethnicity_4",
    "Coa_Ethnicity_5",
    "Coa_EthnicityOther",
    "Ethnicity_Determinant",
    "Coa_Ethnicity_Determinant",
    "Race_1",
    "Race_2",
    "Race_3",
    "Race_4",
    "Race_5",
    "Race1_Other",
    "Race27_Other",
    "Race44_Other",
    "CoaRace_1",
    "CoaRace_2",
    "CoaRace_3",
    "CoaRace_4",
    "CoaRace_5",
    "CoaRace1_Other",
    "CoaRace27_Other",
    "CoaRace44_Other",
    "Race_Determinant",
    "CoaRace_Determinant",
    "Sex",
    "CoaSex",
    "Sex_Determinant",
    "CoaSex_Determinant",
    "Age",
    "Coa_Age",
    "Income",
    "Purchaser",
    "Rate_Spread",
    "HOEPA_Status",
    "Lien_Status",
    "CreditScore",
    "Coa_CreditScore",
    "CreditModel",
    "CreditModelOther",
    "Coa_CreditModel",
    "Coa_CreditModelOther",
    "Denial1",
    "Denial2",
    "Denial3",
    "Denial4",
    "DenialOther",
    "TotalLoanCosts",
    "TotalPtsAndFees",
    "OrigFees",
    "DiscountPts",
    "LenderCredts",
    "InterestRate",
    "APR",
    "Rate_Lock_Date",
    "PPPTerm",
    "DTIRatio",
    "DSC",
    "CLTV",
    "Loan_Term",
    "Loan_Term_Months",
    "IntroRatePeriod",
    "BalloonPMT",
    "IOPMT",
    "NegAM",
    "NonAmortz",
    "PropertyValue",
    "MHSecPropType",
    "MHLandPropInt",
    "TotalUnits",
    "MFAHU",
    "APPMethod",
    "PayableInst",
    "NMLSRID",
    "AUSystem1",
    "AUSystem2",
    "AUSystem3",
    "AUSystem4",
    "AUSystem5",
    "AUSystemOther",
    "AUSResult1",
    "AUSResult2",
    "AUSResult3",
    "AUSResult4",
    "AUSResult5",
    "AUSResultOther",
    "REVMTG",
    "OpenLOC",
    "BUSCML",
    "EditStatus",
    "EditCkComments",
    "Comments",
)

HMDA_COLUMN_COUNT = 126

BLANK_BY_DESIGN_COLUMNS: tuple[str, ...] = (
    "ErrorMadeBy",
    "DSC",
    "EditStatus",
    "EditCkComments",
    "Comments",
)

NO_CO_APPLICANT_SENTINEL = "9999"
NO_CO_APPLICANT_NUMERIC_COLUMNS: tuple[str, ...] = ("Coa_Age", "Coa_CreditScore")

# HMDA "no co-applicant" codes, applied only when the source leaves the slot blank.
NO_CO_APPLICANT_DEFAULTS: tuple[tuple[str, str], ...] = (
    ("Coa_Ethnicity_1", "5"),
    ("Coa_Ethnicity_Determinant", "4"),
    ("CoaRace_1", "8"),
    ("CoaRace_Determinant", "4"),
    ("CoaSex", "5"),
    ("CoaSex_Determinant", "4"),
)

NOT_APPLICABLE_DEFAULTS: tuple[tuple[str, str], ...] = (
    ("DTIRatio", "NA"),
    ("CreditModel", "9"),
    ("Coa_CreditModel", "9"),
    ("ConstructionMethod", "1"),
)

DATE_COLUMNS: tuple[str, ...] = ("ApplDate", "ActionDate", "Rate_Lock_Date")
AUS_SYSTEM_COLUMNS: tuple[str, ...] = tuple(f"AUSystem{slot}" for slot in range(1, 6))
AUS_RESULT_COLUMNS: tuple[str, ...] = tuple(f"AUSResult{slot}" for slot in range(1, 6))

RATE_TERM_COLUMNS: tuple[str, ...] = ("ULI", "RateType", "Var_Term")

SOURCE_KEY = "_source"
MERGED_FLAG_KEY = "_merged"
SOURCE_ENCOMPASS = "encompass"
SOURCE_LASERPRO = "laserpro"
SOURCE_SUPPLEMENTAL = "supplemental"


def _verify_column_order(columns: tuple[str, ...]) -> None:
    if len(columns) != HMDA_COLUMN_COUNT:
        raise ValueError(
            f"HMDA column order must contain exactly {HMDA_COLUMN_COUNT} columns, got {len(columns)}"
        )
    duplicates = sorted({column for column in columns if columns.count(column) > 1})
    if duplicates:
        raise ValueError(f"HMDA column order contains duplicate column(s): {', '.join(duplicates)}")


_verify_column_order(HMDA_COLUMN_ORDER)


def is_blank(value: object) -> bool:
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float) and value != value:
        return True
    return False


def to_text(value: object) -> str:
    """Render one loosely-typed cell as canonical output text.

    Zero stays "0"; integral floats lose their ".0"; dates render as M/D/YY.
    """
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (datetime, date)):
        return f"{value.month}/{value.day}/{value:%y}"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isnan(number) or math.isinf(number):
            return ""
        if number.is_integer():
            return str(int(number))
        return str(number)
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def empty_canonical_record() -> dict[str, str]:
    """Return one output row with every canonical column present and blank."""
    return {column: "" for column in HMDA_COLUMN_ORDER}


def build_canonical_df(records: Iterable[Mapping[str, str]]) -> pd.DataFrame:
    """Build the output frame from canonical records in fixed header order."""
    rows = [[record.get(column, "") for column in HMDA_COLUMN_ORDER] for record in records]
    return pd.DataFrame(rows, columns=list(HMDA_COLUMN_ORDER), dtype=object)


def records_from_frame(
    df: pd.DataFrame,
    *,
    source: str | None = None,
) -> list[dict[str, object]]:
    """Convert an extracted frame into raw records, omitting empty (NaN) cells."""
    records: list[dict[str, object]] = []
    columns = [str(column).strip() for column in df.columns]
    for row_values in df.itertuples(index=False, name=None):
        record: dict[str, object] = {}
        for column, value in zip(columns, row_values, strict=True):
            if not column or value is None:
                continue
            if isinstance(value, float) and value != value:
                continue
            if value is pd.NaT:
                continue
            if hasattr(value, "item") and not isinstance(value, (str, datetime, date)):
                value = value.item()
            record[column] = value
        if not record:
            continue
        if source is not None and is_blank(record.get(SOURCE_KEY)):
            record[SOURCE_KEY] = source
        records.append(record)
    return records
