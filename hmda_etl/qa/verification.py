from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import re

import pandas as pd

from hmda_etl.cra_wiz import WORK_ITEM_COLUMNS, WORK_ITEM_DATE_COLUMNS, WORK_ITEM_SENTINEL_COLUMNS
from hmda_etl.models import DATE_COLUMNS, HMDA_COLUMN_ORDER, to_text

# Header cells of the LAR transmittal banner; seeing one means the banner was read as data.
LAR_BANNER_HEADERS: frozenset[str] = frozenset(
    {"Financial Institution Name", "Calendar Year", "Calendar Quarter", "Contact Person"}
)
BRANCH_NAME_MIN_FILL_RATE = 0.9

_DELIMITED_CELL_PARTS = 3
_SERIAL_DATE = re.compile(r"^\d{5}(\.\d+)?$")
_SERIAL_DATE_RANGE = (40000, 50000)

VERIFICATION_COLUMNS: tuple[str, ...] = ("Check", "Status", "Expected", "Actual")


@dataclass(frozen=True)
class VerificationCheck:
    name: str
    passed: bool
    actual: str
    expected: str


@dataclass(frozen=True)
class VerificationResult:
    title: str
    checks: tuple[VerificationCheck, ...]

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def failed_checks(self) -> list[VerificationCheck]:
        return [check for check in self.checks if not check.passed]

    @property
    def summary(self) -> str:
        if self.passed:
            return f"All {self.title} verification checks passed"
        return f"{len(self.failed_checks)} of {len(self.checks)} {self.title} check(s) failed"

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                "Check": check.name,
                "Status": "PASS" if check.passed else "FAIL",
                "Expected": check.expected,
                "Actual": check.actual,
            }
            for check in self.checks
        ]
        return pd.DataFrame(rows, columns=list(VERIFICATION_COLUMNS))


def validate_column_order(headers: Sequence[object], expected: Sequence[str]) -> list[str]:
    """List every header position that differs from ``expected``, plus any count mismatch."""
    actual = [to_text(header) for header in headers]
    mismatches = [
        f'Column {position}: expected "{name}", got "{actual[position - 1] if position <= len(actual) else "(missing)"}"'
        for position, name in enumerate(expected, start=1)
        if position > len(actual) or actual[position - 1] != name
    ]
    if len(actual) != len(expected):
        mismatches.append(f"Column count: expected {len(expected)}, got {len(actual)}")
    return mismatches


def _header_check(headers: list[str], position: int, expected: str) -> VerificationCheck:
    actual = headers[position] if position < len(headers) else ""
    letter = chr(ord("A") + position)
    return VerificationCheck(f"Column {letter} = {expected}", actual == expected, actual, expected)


def _count_check(headers: list[str], expected: int) -> VerificationCheck:
    return VerificationCheck(f"Column count = {expected}", len(headers) == expected, str(len(headers)), str(expected))


def _looks_like_serial_date(value: object) -> bool:
    text = to_text(value)
    if not _SERIAL_DATE.match(text):
        return False
    low, high = _SERIAL_DATE_RANGE
    return low < float(text) < high


def _date_check(df: pd.DataFrame, columns: Sequence[str]) -> VerificationCheck:
    present = [column for column in columns if column in df.columns]
    offenders = [
        f"{column} row {row_offset + 2}"
        for column in present
        for row_offset, value in enumerate(df[column].tolist())
        if _looks_like_serial_date(value)
    ]
    actual = f"Excel serial numbers at {', '.join(offenders[:3])}" if offenders else "Proper format"
    return VerificationCheck("Dates in M/D/YY format", not offenders, actual, "M/D/YY format")


def _delimiter_check(df: pd.DataFrame) -> VerificationCheck:
    for row_offset, row_values in enumerate(df.itertuples(index=False, name=None)):
        for col_offset, value in enumerate(row_values):
            text = to_text(value)
            if len(text.split("~")) > _DELIMITED_CELL_PARTS or len(text.split("|")) > _DELIMITED_CELL_PARTS:
                location = f"Delimiter at row {row_offset + 2}, column {col_offset + 1}"
                return VerificationCheck("No delimiters in cells", False, location, "No delimiters")
    return VerificationCheck("No delimiters in cells", True, "Clean", "No delimiters")


def _column_position_check(headers: list[str], column: str, expected_position: int) -> VerificationCheck:
    actual = f"Column {headers.index(column) + 1}" if column in headers else "Not found"
    expected = f"Column {expected_position}"
    return VerificationCheck(f"{column} column present", actual == expected, actual, expected)


def verify_hmda_output(df: pd.DataFrame) -> VerificationResult:
    """Check a produced HMDA frame against the layout CRA Wiz imports."""
    headers = [to_text(column) for column in df.columns]
    banner = sorted(LAR_BANNER_HEADERS.intersection(headers))
    order_mismatches = validate_column_order(headers, HMDA_COLUMN_ORDER)
    checks = (
        _header_check(headers, 0, HMDA_COLUMN_ORDER[0]),
        _header_check(headers, 1, HMDA_COLUMN_ORDER[1]),
        _count_check(headers, len(HMDA_COLUMN_ORDER)),
        VerificationCheck(
            "No LAR format headers",
            not banner,
            f"Found {', '.join(banner)}" if banner else "Clean",
            "No LAR headers",
        ),
        _delimiter_check(df),
        VerificationCheck("Data rows present", len(df) > 0, str(len(df)), "> 0"),
        VerificationCheck(
            "Column order matches layout",
            not order_mismatches,
            order_mismatches[0] if order_mismatches else "Matches",
            "Exact column order",
        ),
        _date_check(df, DATE_COLUMNS),
    )
    return VerificationResult("HMDA", checks)


def verify_work_item_output(df: pd.DataFrame) -> VerificationResult:
    """Check a work-item frame: layout anchors, dates, branch fill and co-applicant sentinels."""
    headers = [to_text(column) for column in df.columns]

    if "BRANCHNAME" in df.columns and len(df):
        filled = sum(1 for value in df["BRANCHNAME"].tolist() if to_text(value))
        fill_rate = filled / len(df)
    else:
        fill_rate = 0.0

    blank_sentinels = [
        column
        for column in WORK_ITEM_SENTINEL_COLUMNS
        if column in df.columns and any(not to_text(value) for value in df[column].tolist())
    ]

    checks = (
        _header_check(headers, 0, WORK_ITEM_COLUMNS[0]),
        _header_check(headers, 1, WORK_ITEM_COLUMNS[1]),
        _count_check(headers, len(WORK_ITEM_COLUMNS)),
        _column_position_check(headers, "ErrorMadeBy", WORK_ITEM_COLUMNS.index("ErrorMadeBy") + 1),
        _column_position_check(headers, "DSC", WORK_ITEM_COLUMNS.index("DSC") + 1),
        _date_check(df, WORK_ITEM_DATE_COLUMNS),
        VerificationCheck(
            "BRANCHNAME populated",
            fill_rate > BRANCH_NAME_MIN_FILL_RATE,
            f"{fill_rate:.1%}",
            f"> {BRANCH_NAME_MIN_FILL_RATE:.0%}",
        ),
        VerificationCheck(
            "Co-applicant defaults (9999)",
            not blank_sentinels,
            f"Blank {', '.join(blank_sentinels)}" if blank_sentinels else "Correct",
            "9999 when no co-applicant",
        ),
    )
    return VerificationResult("work item", checks)


def format_verification_report(results: Sequence[VerificationResult]) -> str:
    """Plain-text PASS/FAIL report for one or more verification results."""
    lines: list[str] = []
    for result in results:
        lines.append(f"Verification: {result.title}")
        for check in result.checks:
            lines.append(f"{'PASS' if check.passed else 'FAIL'} | {check.name}")
            if not check.passed:
                lines.append(f"    Expected: {check.expected}")
                lines.append(f"    Actual:   {check.actual}")
        lines.append(result.summary)
    overall = all(result.passed for result in results)
    lines.append("ALL VERIFICATIONS PASSED" if overall else "SOME VERIFICATIONS FAILED")
    return "\n".join(lines)
