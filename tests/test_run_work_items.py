from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from openpyxl import Workbook, load_workbook
import pytest

from hmda_etl.cra_wiz import WORK_ITEM_COLUMNS
from hmda_etl.run_work_items import main

_TEST_TMP_DIR = Path("data/_test_tmp")


def _write_sheet(filename: str, rows: list[list[object]]) -> Path:
    _TEST_TMP_DIR.mkdir(parents=True, exist_ok=True)
    path = _TEST_TMP_DIR / filename
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    workbook.save(path)
    return path


def test_work_item_cli_writes_workbook_and_prints_verification(capsys: pytest.CaptureFixture[str]) -> None:
    export_path = _write_sheet(
        "run_work_items.export.synthetic.xlsx",
        [
            ["BRANCHNUMB", "ULI", "LASTNAME", "APPLDATE", "COA_AGE", "Legacy Column"],
            [101, "ULI-1", "Smith", 45292, None, "x"],
            [103, "ULI-2", "Jones", "20240215", 52, "y"],
        ],
    )
    output_path = _TEST_TMP_DIR / f"run_work_items.output.{uuid4().hex}.xlsx"

    exit_code = main(["--cra-wiz-export", str(export_path), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert f"Output written to: {output_path}" in captured.out
    assert "- Rows: 2" in captured.out
    assert "- Columns: 6 -> 125" in captured.out
    assert "- Branch Matches: 2" in captured.out
    assert "- Branch Misses: 0" in captured.out
    assert "All work item verification checks passed" in captured.out
    assert "ALL VERIFICATIONS PASSED" in captured.out

    workbook = load_workbook(output_path)
    assert workbook.sheetnames == ["Work Items", "Summary", "Branch Reference", "Verification"]
    sheet = workbook["Work Items"]
    assert [cell.value for cell in sheet[1]] == list(WORK_ITEM_COLUMNS)
    first_row = {column: cell.value for column, cell in zip(WORK_ITEM_COLUMNS, sheet[2], strict=True)}
    assert first_row["BRANCHNAME"] == "Columbus"
    assert first_row["APPLDATE"] == "1/1/24"
    assert first_row["COA_AGE"] == "9999"
    assert sheet.cell(row=3, column=WORK_ITEM_COLUMNS.index("ACTIONDATE") + 1).value is None
    assert sheet.cell(row=3, column=WORK_ITEM_COLUMNS.index("APPLDATE") + 1).value == "2/15/24"


def test_work_item_cli_reports_failed_checks(capsys: pytest.CaptureFixture[str]) -> None:
    export_path = _write_sheet(
        "run_work_items.unmatched.synthetic.xlsx",
        [["BRANCHNUMB", "ULI"], ["999", "ULI-1"]],
    )
    output_path = _TEST_TMP_DIR / f"run_work_items.unmatched.{uuid4().hex}.xlsx"

    exit_code = main(["--cra-wiz-export", str(export_path), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "- Branch Misses: 1" in captured.out
    assert "FAIL | BRANCHNAME populated" in captured.out
    assert "SOME VERIFICATIONS FAILED" in captured.out
    assert load_workbook(output_path)["Verification"]["A1"].value == "Check"


def test_work_item_cli_errors_when_export_is_missing(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--cra-wiz-export", str(_TEST_TMP_DIR / "missing.cra_wiz.xlsx")])

    captured = capsys.readouterr()
    assert exc_info.value.code == 2
    assert "CRA Wiz export not found" in captured.err


def test_work_item_cli_requires_an_export_path(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2
    assert "--cra-wiz-export" in capsys.readouterr().err
