from __future__ import annotations

from datetime import datetime
from pathlib import Path

from openpyxl import Workbook

from hmda_etl.cra_wiz import (
    WORK_ITEM_COLUMNS,
    build_branch_reference_df,
    build_transform_summary_df,
    transform_cra_wiz_export,
)
from hmda_etl.extractors.cra_wiz import extract_cra_wiz_export

_TEST_TMP_DIR = Path("data/_test_tmp")


def _write_sheet_fixture(filename: str, rows: list[list[object]]) -> Path:
    _TEST_TMP_DIR.mkdir(parents=True, exist_ok=True)
    fixture_path = _TEST_TMP_DIR / filename
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    workbook.save(fixture_path)
    return fixture_path


def test_work_item_layout_has_review_columns_at_fixed_positions() -> None:
    assert len(WORK_ITEM_COLUMNS) == 125
    assert WORK_ITEM_COLUMNS[:2] == ("BRANCHNAME", "BRANCHNUMB")
    assert WORK_ITEM_COLUMNS.index("ErrorMadeBy") + 1 == 12
    assert WORK_ITEM_COLUMNS.index("DSC") + 1 == 92
    assert WORK_ITEM_COLUMNS[-1] == "VAR_TERM"


def test_transform_prefers_export_branch_name_then_directory_lookup() -> None:
    result = transform_cra_wiz_export(
        [
            {"BRANCHNAME": "Main Office", "BRANCHNUMB": "101", "ULI": "A"},
            {"BRANCHNUMB": 101, "ULI": "B"},
            {"BRANCHNUMB": "999", "ULI": "C"},
            {"ULI": "D"},
        ]
    )

    assert [record["BRANCHNAME"] for record in result.records] == ["Main Office", "Columbus", "", ""]
    assert result.records[1]["BRANCHNUMB"] == "101"
    assert result.branch_matches == 2
    assert result.branch_misses == 2
    assert result.row_count == 4


def test_transform_uses_an_injected_branch_directory() -> None:
    result = transform_cra_wiz_export([{"BRANCHNUMB": "042"}], branch_directory={"042": "Test Branch"})

    assert result.records[0]["BRANCHNAME"] == "Test Branch"
    assert result.branch_misses == 0


def test_transform_blanks_review_columns_and_formats_dates() -> None:
    result = transform_cra_wiz_export(
        [
            {
                "BRANCHNAME": "Columbus",
                "ErrorMadeBy": "stale reviewer",
                "DSC": "stale",
                "APPLDATE": 45292,
                "ACTIONDATE": "20240215",
                "RATE_LOCK_DATE": "3/1/24",
            }
        ]
    )

    [record] = result.records
    assert record["ErrorMadeBy"] == ""
    assert record["DSC"] == ""
    assert record["APPLDATE"] == "1/1/24"
    assert record["ACTIONDATE"] == "2/15/24"
    assert record["RATE_LOCK_DATE"] == "3/1/24"


def test_transform_defaults_missing_co_applicant_values_to_sentinel() -> None:
    result = transform_cra_wiz_export(
        [
            {"BRANCHNAME": "Columbus", "COA_AGE": "", "CREDITSCORE": 720},
            {"BRANCHNAME": "Columbus", "COA_AGE": 41, "COA_CREDITSCORE": "698"},
        ]
    )

    first, second = result.records
    assert first["COA_AGE"] == "9999"
    assert first["COA_CREDITSCORE"] == "9999"
    assert first["CREDITSCORE"] == "720"
    assert second["COA_AGE"] == "41"
    assert second["COA_CREDITSCORE"] == "698"


def test_transform_matches_headers_case_insensitively_and_drops_unknown_columns() -> None:
    result = transform_cra_wiz_export(
        [{"branchname": "Columbus", " uli ": "ULI-1", "LoanAmountInDollars": "250000", "Internal Notes": "drop me"}]
    )

    frame = result.to_frame()
    assert list(frame.columns) == list(WORK_ITEM_COLUMNS)
    assert "Internal Notes" not in frame.columns
    assert frame.loc[0, "BRANCHNAME"] == "Columbus"
    assert frame.loc[0, "ULI"] == "ULI-1"
    assert frame.loc[0, "LOANAMOUNTINDOLLARS"] == "250000"
    assert result.input_columns == 4
    assert result.output_columns == 125


def test_transform_summary_reports_counts_and_added_columns() -> None:
    result = transform_cra_wiz_export(
        [{"BRANCHNAME": "Columbus", "ULI": "A"}, {"BRANCHNUMB": "999", "ULI": "B"}]
    )

    summary = build_transform_summary_df(result, generated_at=datetime(2024, 4, 2, 9, 30, 0))

    values = dict(zip(summary["Metric"], summary["Value"], strict=True))
    assert list(summary.columns) == ["Metric", "Value"]
    assert values["Transformation Date"] == "2024-04-02 09:30:00"
    assert values["Input Columns"] == 3
    assert values["Output Columns"] == 125
    assert values["Total Rows"] == 2
    assert values["Branch Matches"] == 1
    assert values["Branch Misses"] == 1
    assert values["New Columns Added"] == "ErrorMadeBy, DSC"
    assert values["Columns Removed"] == 0


def test_branch_reference_lists_every_directory_entry() -> None:
    reference = build_branch_reference_df({"101": "Columbus", "103": "Leesburg"})

    assert list(reference.columns) == ["Branch Number", "Branch Name"]
    assert reference.to_dict(orient="records") == [
        {"Branch Number": "101", "Branch Name": "Columbus"},
        {"Branch Number": "103", "Branch Name": "Leesburg"},
    ]


def test_cra_wiz_extractor_reads_first_sheet_and_skips_unnamed_columns() -> None:
    fixture_path = _write_sheet_fixture(
        "cra_wiz.export.synthetic.xlsx",
        [
            ["BRANCHNAME", "BRANCHNUMB", "ULI", "APPLDATE", None],
            [None, 101, "ULI-1", 45292, "stray"],
            ["Leesburg", 103, "ULI-2", None, None],
        ],
    )

    rows = extract_cra_wiz_export(fixture_path)

    assert len(rows) == 2
    assert all(not key.startswith("Unnamed:") for row in rows for key in row)
    assert "BRANCHNAME" not in rows[0]
    result = transform_cra_wiz_export(rows)
    assert [record["BRANCHNAME"] for record in result.records] == ["Columbus", "Leesburg"]
    assert result.records[0]["APPLDATE"] == "1/1/24"
    assert result.records[1]["APPLDATE"] == ""
