from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from hmda_etl.models import SOURCE_ENCOMPASS, SOURCE_KEY, is_blank, to_text

logger = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 10
MIN_HEADER_MATCHES = 2

# Substrings that mark a row as the real column header row.
HEADER_INDICATORS: tuple[str, ...] = (
    "LEI",
    "ULI",
    "Loan",
    "Applicant",
    "Property",
    "Legal Entity",
    "Universal Loan",
    "Application Date",
    "Action",
    "Census",
)

# Substrings of the institution banner rows that precede the header.
METADATA_INDICATORS: tuple[str, ...] = (
    "Financial Institution",
    "Calendar Year",
    "Calendar Quarter",
    "Contact Person",
    "Colony Bank",
    "Phone Number",
    "Email",
)


def _row_text(row: pd.Series) -> str:
    return " ".join(to_text(value) for value in row.tolist())


def locate_header_row(raw_df: pd.DataFrame) -> int:
    """Return the index of the header row among the first rows of a sheet.

    Banner rows are skipped; the first row with at least two header
    indicators wins. Falls back to row 0.
    """
    for index in range(min(HEADER_SCAN_ROWS, len(raw_df))):
        text = _row_text(raw_df.iloc[index])
        if any(indicator in text for indicator in METADATA_INDICATORS):
            logger.debug("Row %s is institution metadata, skipping", index)
            continue
        matches = [indicator for indicator in HEADER_INDICATORS if indicator in text]
        if len(matches) >= MIN_HEADER_MATCHES:
            logger.debug("Header row found at index %s (matches: %s)", index, ", ".join(matches))
            return index
    return 0


def _unique_headers(values: list[object]) -> list[str]:
    headers: list[str] = []
    seen: dict[str, int] = {}
    for position, value in enumerate(values):
        header = to_text(value) or f"Unnamed_{position}"
        count = seen.get(header, 0)
        seen[header] = count + 1
        headers.append(header if count == 0 else f"{header}.{count}")
    return headers


def frame_from_sheet(raw_df: pd.DataFrame, *, source: str) -> pd.DataFrame:
    """Promote the detected header row and keep the data rows beneath it."""
    if raw_df.empty:
        return pd.DataFrame({SOURCE_KEY: pd.Series(dtype=object)})

    header_index = locate_header_row(raw_df)
    headers = _unique_headers(raw_df.iloc[header_index].tolist())
    data_df = raw_df.iloc[header_index + 1 :].copy()
    data_df.columns = headers

    if len(data_df):
        blank_rows = data_df.apply(lambda row: all(is_blank(value) for value in row.tolist()), axis=1)
        data_df = data_df.loc[~blank_rows]
    data_df = data_df.loc[:, [column for column in headers if not column.startswith("Unnamed_")]]
    data_df[SOURCE_KEY] = source
    return data_df.reset_index(drop=True)


def extract_encompass_export(path: str | Path) -> pd.DataFrame:
    """Extract an Encompass HMDA export, skipping banner rows above the header."""
    path = Path(path)
    raw_df = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
    extracted = frame_from_sheet(raw_df, source=SOURCE_ENCOMPASS)
    logger.info("Parsed %s Encompass rows from %s", len(extracted), path.name)
    return extracted
