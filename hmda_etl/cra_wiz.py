from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
import logging

import pandas as pd

from hmda_etl.branches import BRANCH_DIRECTORY, normalize_branch_number
from hmda_etl.derivers import format_hmda_date
from hmda_etl.models import NO_CO_APPLICANT_SENTINEL, is_blank, to_text

logger = logging.getLogger(__name__)

# Work-item layout built from the CRA Wiz export; header order is a compatibility contract.
WORK_ITEM_COLUMNS: tuple[str, ...] = (
    "BRANCHNAME",
    "BRANCHNUMB",
    "LEI",
    "ULI",
    "LASTNAME",
    "FIRSTNAME",
    "CLASTNAME",
    "CFIRSTNAME",
    "LENDER",
    "AA_LOANPROCESSOR",
    "LDP_POSTCLOSER",
    "ErrorMadeBy",
    "APPLDATE",
    "LOANTYPE",
    "PURPOSE",
    "CONSTRUCTIONMETHOD",
    "OCCUPANCYTYPE",
    "LOANAMOUNTINDOLLARS",
    "PREAPPROVAL",
    "ACTION",
    "ACTIONDATE",
    "ADDRESS",
    "CITY",
    "STATE_ABRV",
    "ZIP",
    "COUNTY_5",
    "TRACT_11",
    "ETHNICITY_1",
    "ETHNICITY_2",
    "ETHNICITY_3",
    "ETHNICITY_4",
    "ETHNICITY_5",
    "ETHNICITYOTHER",
    "COA_ETHNICITY_1",
    "COA_ETHNICITY_2",
    "COA_ETHNICITY_3",
    "COA_ETHNICITY_4",
    "COA_ETHNICITY_5",
    "COA_ETHNICITYOTHER",
    "ETHNICITY_DETERMINANT",
    "COA_ETHNICITY_DETERMINANT",
    "RACE_1",
    "RACE_2",
    "RACE_3",
    "RACE_4",
    "RACE_5",
    "RACE1_OTHER",
    "RACE27_OTHER",
    "RACE44_OTHER",
    "COARACE_1",
    "COARACE_2",
    "COARACE_3",
    "COARACE_4",
    "COARACE_5",
    "COARACE1_OTHER",
    "COARACE27_OTHER",
    "COARACE44_OTHER",
    "RACE_DETERMINANT",
    "COARACE_DETERMINANT",
    "SEX",
    "COASEX",
    "SEX_DETERMINANT",
    "COASEX_DETERMINANT",
    "AGE",
    "COA_AGE",
    "INCOME",
    "PURCHASER",
    "RATE_SPREAD",
    "HOEPA_STATUS",
    "LIEN_STATUS",
    "CREDITSCORE",
    "COA_CREDITSCORE",
    "CREDITMODEL",
    "CREDITMODELOTHER",
    "COA_CREDITMODEL",
    "COA_CREDITMODELOTHER",
    "DENIAL1",
    "DENIAL2",
    "DENIAL3",
    "DENIAL4",
    "DENIALOTHER",
    "TOTALLOANCOSTS",
    "TOTALPTSANDFEES",
    "ORIGFEES",
    "DISCOUNTPTS",
    "LENDERCREDTS",
    "INTERESTRATE",
    "APR",
    "RATE_LOCK_DATE",
    "PPPTERM",
    "DTIRATIO",
    "DSC",
    "CLTV",
    "LOAN_TERM",
    "LOAN_TERM_MONTHS",
    "INTRORATEPERIOD",
    "BALLOONPMT",
    "IOPMT",
    "NEGAM",
    "NONAMORTZ",
    "PROPERTYVALUE",
    "MHSECPROPTYPE",
    "MHLANDPROPINT",
    "TOTALUNITS",
    "MFAHU",
    "APPMETHOD",
    "PAYABLEINST",
    "NMLSRID",
    "AUSYSTEM1",
    "AUSYSTEM2",
    "AUSYSTEM3",
    "AUSYSTEM4",
    "AUSYSTEM5",
    "AUSYSTEMOTHER",
    "AUSRESULT1",
    "AUSRESULT2",
    "AUSRESULT3",
    "AUSRESULT4",
    "AUSRESULT5",
    "AUSRESULTOTHER",
    "REVMTG",
    "OPENLOC",
    "BUSCML",
    "RATETYPE",
    "VAR_TERM",
)
WORK_ITEM_COLUMN_COUNT = 125

# Review columns the work-item layout adds; always written blank.
WORK_ITEM_REVIEW_COLUMNS: tuple[str, ...] = ("ErrorMadeBy", "DSC")
WORK_ITEM_DATE_COLUMNS: tuple[str, ...] = ("APPLDATE", "ACTIONDATE", "RATE_LOCK_DATE")
WORK_ITEM_SENTINEL_COLUMNS: tuple[str, ...] = ("COA_AGE", "COA_CREDITSCORE")

if len(WORK_ITEM_COLUMNS) != WORK_ITEM_COLUMN_COUNT or len(set(WORK_ITEM_COLUMNS)) != WORK_ITEM_COLUMN_COUNT:
    raise ValueError(f"Work-item layout must list {WORK_ITEM_COLUMN_COUNT} distinct columns")


@dataclass(frozen=True)
class WorkItemTransformResult:
    records: list[dict[str, str]] = field(repr=False)
    input_columns: int
    branch_matches: int
    branch_misses: int

    @property
    def output_columns(self) -> int:
        return WORK_ITEM_COLUMN_COUNT

    @property
    def row_count(self) -> int:
        return len(self.records)

    def to_frame(self) -> pd.DataFrame:
        rows = [[record[column] for column in WORK_ITEM_COLUMNS] for record in self.records]
        return pd.DataFrame(rows, columns=list(WORK_ITEM_COLUMNS), dtype=object)


def _cell(row: Mapping[str, object], column: str) -> object:
    value = row.get(column)
    if value is None:
        upper = column.upper()
        for key, candidate in row.items():
            if isinstance(key, str) and key.strip().upper() == upper:
                return candidate
    return value


def _branch_name(row: Mapping[str, object], branch_directory: Mapping[str, str]) -> str:
    name = to_text(_cell(row, "BRANCHNAME"))
    if name:
        return name
    branch_number = _cell(row, "BRANCHNUMB")
    if is_blank(branch_number):
        return ""
    return branch_directory.get(normalize_branch_number(branch_number), "")


def transform_cra_wiz_export(
    rows: Sequence[Mapping[str, object]],
    *,
    branch_directory: Mapping[str, str] | None = None,
) -> WorkItemTransformResult:
    """Reshape CRA Wiz export rows into the 125-column work-item layout.

    A branch name already on the export wins over the directory lookup. Review
    columns are blanked, dates become M/D/YY and an empty co-applicant age or
    credit score becomes the no-co-applicant sentinel. Every other column is
    copied by name and export columns outside the layout are dropped.
    """
    directory = BRANCH_DIRECTORY if branch_directory is None else branch_directory
    records: list[dict[str, str]] = []
    branch_matches = 0

    for row in rows:
        record: dict[str, str] = {}
        for column in WORK_ITEM_COLUMNS:
            if column in WORK_ITEM_REVIEW_COLUMNS:
                record[column] = ""
            elif column in WORK_ITEM_DATE_COLUMNS:
                record[column] = format_hmda_date(_cell(row, column))
            else:
                record[column] = to_text(_cell(row, column))

        for column in WORK_ITEM_SENTINEL_COLUMNS:
            if not record[column]:
                record[column] = NO_CO_APPLICANT_SENTINEL

        record["BRANCHNAME"] = _branch_name(row, directory)
        if record["BRANCHNAME"]:
            branch_matches += 1
        records.append(record)

    input_columns = len({key for row in rows for key in row})
    branch_misses = len(records) - branch_matches
    if branch_misses:
        logger.warning("%s of %s work items have no branch name", branch_misses, len(records))
    logger.info("Transformed %s CRA Wiz rows from %s to %s columns", len(records), input_columns, WORK_ITEM_COLUMN_COUNT)
    return WorkItemTransformResult(
        records=records,
        input_columns=input_columns,
        branch_matches=branch_matches,
        branch_misses=branch_misses,
    )


def build_transform_summary_df(
    result: WorkItemTransformResult,
    *,
    generated_at: datetime | None = None,
) -> pd.DataFrame:
    """Metric/value summary of one work-item transformation."""
    stamp = generated_at or datetime.now()
    # Review columns are new, so they do not count as carried over from the export.
    removed = max(result.input_columns - result.output_columns + len(WORK_ITEM_REVIEW_COLUMNS), 0)
    rows = [
        ("Transformation Date", stamp.strftime("%Y-%m-%d %H:%M:%S")),
        ("Input Columns", result.input_columns),
        ("Output Columns", result.output_columns),
        ("Total Rows", result.row_count),
        ("Branch Matches", result.branch_matches),
        ("Branch Misses", result.branch_misses),
        ("New Columns Added", ", ".join(WORK_ITEM_REVIEW_COLUMNS)),
        ("Columns Removed", removed),
    ]
    return pd.DataFrame([{"Metric": metric, "Value": value} for metric, value in rows], columns=["Metric", "Value"])


def build_branch_reference_df(branch_directory: Mapping[str, str] | None = None) -> pd.DataFrame:
    directory = BRANCH_DIRECTORY if branch_directory is None else branch_directory
    rows = [{"Branch Number": number, "Branch Name": name} for number, name in directory.items()]
    return pd.DataFrame(rows, columns=["Branch Number", "Branch Name"])
