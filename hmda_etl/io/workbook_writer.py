from __future__ import annotations

from copy import copy
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from hmda_etl.cra_wiz import WORK_ITEM_COLUMNS
from hmda_etl.models import HMDA_COLUMN_ORDER, RATE_TERM_COLUMNS, is_blank
from hmda_etl.qa.validation import VALIDATION_REPORT_COLUMNS
from hmda_etl.qa.verification import VERIFICATION_COLUMNS
from hmda_etl.trace import TRACE_COLUMNS

HMDA_SHEET = "HMDA"
QA_SHEET = "QA Summary"
EXCEPTIONS_SHEET = "Exceptions"
RATE_TERMS_SHEET = "Rate Terms"
TRACE_SHEET = "ETL Trace"
VERIFICATION_SHEET = "Verification"
WORK_ITEMS_SHEET = "Work Items"
TRANSFORM_SUMMARY_SHEET = "Summary"
BRANCH_REFERENCE_SHEET = "Branch Reference"

_HEADER_ROW = 1
_DATA_START_ROW = 2


def _to_excel_value(value: Any) -> Any:
    # Blank canonical fields become empty cells so CRA Wiz does not import "".
    if is_blank(value):
        return None
    try:
        return None if pd.isna(value) else value
    except (TypeError, ValueError):
        return value


def _styled_anchor_row(sheet: Worksheet) -> int | None:
    """First data row of a template when it carries formatting worth repeating."""
    cells = sheet.iter_cols(
        min_row=_DATA_START_ROW, max_row=_DATA_START_ROW, max_col=len(HMDA_COLUMN_ORDER)
    )
    if any(column[0].has_style for column in cells):
        return _DATA_START_ROW
    return None


def _copy_row_style(sheet: Worksheet, source_row: int, target_row: int) -> None:
    for col_idx in range(1, len(HMDA_COLUMN_ORDER) + 1):
        sheet.cell(row=target_row, column=col_idx)._style = copy(sheet.cell(row=source_row, column=col_idx)._style)

    height = sheet.row_dimensions[source_row].height
    if height is not None:
        sheet.row_dimensions[target_row].height = height


def _blank_out_data_rows(sheet: Worksheet) -> None:
    for row in sheet.iter_rows(min_row=_DATA_START_ROW, max_row=sheet.max_row, max_col=len(HMDA_COLUMN_ORDER)):
        for cell in row:
            cell.value = None


def _write_dataframe(
    sheet: Worksheet,
    df: pd.DataFrame,
    start_row: int = 1,
    default_headers: tuple[str, ...] | None = None,
) -> None:
    row_idx = start_row
    columns = list(df.columns)
    if not columns and default_headers:
        columns = list(default_headers)

    for col_offset, header in enumerate(columns):
        sheet.cell(row=row_idx, column=1 + col_offset, value=header)
    row_idx += 1

    for row_values in df.itertuples(index=False, name=None):
        for col_offset, value in enumerate(row_values):
            sheet.cell(row=row_idx, column=1 + col_offset, value=_to_excel_value(value))
        row_idx += 1


def _replace_sheet(workbook: Workbook, title: str) -> Worksheet:
    if title in workbook.sheetnames:
        existing = workbook[title]
        sheet_index = workbook.index(existing)
        workbook.remove(existing)
        return workbook.create_sheet(title=title, index=sheet_index)
    return workbook.create_sheet(title=title)


def _write_report_rows(sheet: Worksheet, report_df: pd.DataFrame) -> None:
    """Write the header and data rows, reusing any styling already on the sheet."""
    style_anchor_row = _styled_anchor_row(sheet)
    _blank_out_data_rows(sheet)

    # Header cells keep their template style; only the text is rewritten.
    for col_idx, header in enumerate(HMDA_COLUMN_ORDER, start=1):
        sheet.cell(row=_HEADER_ROW, column=col_idx).value = header

    for target_row, row_values in enumerate(report_df.itertuples(index=False, name=None), start=_DATA_START_ROW):
        if style_anchor_row is not None and target_row != style_anchor_row:
            _copy_row_style(sheet, style_anchor_row, target_row)
        for col_idx, value in enumerate(row_values, start=1):
            sheet.cell(row=target_row, column=col_idx, value=_to_excel_value(value))


def _open_workbook(template_path: str | Path | None) -> tuple[Workbook, Worksheet]:
    if template_path is None:
        workbook = Workbook()
        report_sheet = workbook.active
        report_sheet.title = HMDA_SHEET
        return workbook, report_sheet

    workbook = load_workbook(Path(template_path))
    if HMDA_SHEET in workbook.sheetnames:
        return workbook, workbook[HMDA_SHEET]
    report_sheet = workbook.worksheets[0]
    report_sheet.title = HMDA_SHEET
    return workbook, report_sheet


def write_hmda_workbook(
    output_path: str | Path,
    report_df: pd.DataFrame,
    *,
    qa_df: pd.DataFrame | None = None,
    validation_df: pd.DataFrame | None = None,
    trace_df: pd.DataFrame | None = None,
    rate_terms_df: pd.DataFrame | None = None,
    verification_df: pd.DataFrame | None = None,
    template_path: str | Path | None = None,
) -> Path:
    """Write the HMDA report workbook, optionally on top of a styled template.

    The ``HMDA`` sheet always carries the canonical header in canonical order.
    QA, exception, rate-term, trace and verification sheets are replaced on
    every write.
    """
    if list(report_df.columns) != list(HMDA_COLUMN_ORDER):
        raise ValueError(
            f"Report frame must have the {len(HMDA_COLUMN_ORDER)} canonical HMDA columns in order"
        )

    output = Path(output_path)
    workbook, report_sheet = _open_workbook(template_path)
    _write_report_rows(report_sheet, report_df)

    extra_sheets: tuple[tuple[str, pd.DataFrame | None, tuple[str, ...] | None], ...] = (
        (QA_SHEET, qa_df, ("Metric", "Value")),
        (EXCEPTIONS_SHEET, validation_df, VALIDATION_REPORT_COLUMNS),
        (RATE_TERMS_SHEET, rate_terms_df, RATE_TERM_COLUMNS),
        (TRACE_SHEET, trace_df, TRACE_COLUMNS),
        (VERIFICATION_SHEET, verification_df, VERIFICATION_COLUMNS),
    )
    for title, frame, default_headers in extra_sheets:
        sheet = _replace_sheet(workbook, title)
        _write_dataframe(sheet, frame if frame is not None else pd.DataFrame(), default_headers=default_headers)

    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output


def write_work_item_workbook(
    output_path: str | Path,
    work_item_df: pd.DataFrame,
    *,
    summary_df: pd.DataFrame | None = None,
    branch_reference_df: pd.DataFrame | None = None,
    verification_df: pd.DataFrame | None = None,
) -> Path:
    """Write the post-CRA Wiz work-item workbook with its summary sheets."""
    if list(work_item_df.columns) != list(WORK_ITEM_COLUMNS):
        raise ValueError(f"Work-item frame must have the {len(WORK_ITEM_COLUMNS)} work-item columns in order")

    output = Path(output_path)
    workbook = Workbook()
    work_item_sheet = workbook.active
    work_item_sheet.title = WORK_ITEMS_SHEET
    _write_dataframe(work_item_sheet, work_item_df)

    for title, frame, default_headers in (
        (TRANSFORM_SUMMARY_SHEET, summary_df, ("Metric", "Value")),
        (BRANCH_REFERENCE_SHEET, branch_reference_df, ("Branch Number", "Branch Name")),
        (VERIFICATION_SHEET, verification_df, VERIFICATION_COLUMNS),
    ):
        sheet = _replace_sheet(workbook, title)
        _write_dataframe(sheet, frame if frame is not None else pd.DataFrame(), default_headers=default_headers)

    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output
