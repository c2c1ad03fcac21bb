from __future__ import annotations

import json
from pathlib import Path
from uuid import uuid4

from openpyxl import Workbook, load_workbook
import pytest

from hmda_etl.models import HMDA_COLUMN_ORDER
from hmda_etl.run import main

_TEST_TMP_DIR = Path("data/_test_tmp")
_LEI = "5493001KJTIIGC8Y1R12"


def _write_config(filename: str, payload: dict[str, object]) -> Path:
    _TEST_TMP_DIR.mkdir(parents=True, exist_ok=True)
    config_path = _TEST_TMP_DIR / filename
    config_path.write_text(json.dumps(payload), encoding="utf-8")
    return config_path


def _write_sheet(filename: str, rows: list[list[object]]) -> Path:
    _TEST_TMP_DIR.mkdir(parents=True, exist_ok=True)
    path = _TEST_TMP_DIR / filename
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    workbook.save(path)
    return path


def _write_encompass_fixture(filename: str) -> Path:
    return _write_sheet(
        filename,
        [
            ["Financial Institution Name: Colony Bank"],
            [
                "Legal Entity Identifier (LEI)",
                "Universal Loan Identifier (ULI)",
                "Loan Number",
                "Loan Amount",
                "Loan Type",
                "Action Taken",
                "Property Address",
                "Property City",
                "State",
                "Income",
            ],
            [_LEI, f"{_LEI}1011234567890", "1011234567", 250000, 1, 1, "1 Main St", "Columbus", "Georgia", 85],
            [_LEI, f"{_LEI}1091234567890", "1091234567", 120000, 2, 3, "9 Oak Ave", "Macon", "GA", None],
        ],
    )


def _write_supplemental_fixture(filename: str) -> Path:
    return _write_sheet(
        filename,
        [
            ["Loan Number", "Borrower First Name", "Borrower Last Name", "Loan Officer"],
            ["1011234567", "John", "Smith", "Jane Doe"],
        ],
    )


def test_cli_runs_end_to_end_and_prints_qa_summary(capsys: pytest.CaptureFixture[str]) -> None:
    encompass_path = _write_encompass_fixture("run_cli.encompass.synthetic.xlsx")
    supplemental_path = _write_supplemental_fixture("run_cli.additional.synthetic.xlsx")
    output_path = _TEST_TMP_DIR / f"run_cli.output.{uuid4().hex}.xlsx"
    config_path = _write_config(
        "run_cli.config.json",
        {
            "sources": [{"name": "q1", "type": "encompass", "path": str(encompass_path)}],
            "supplemental_path": str(supplemental_path),
            "output_path": str(output_path),
        },
    )

    exit_code = main(["--config", str(config_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Input path validation: OK" in captured.out
    assert f"Output written to: {output_path}" in captured.out
    assert "QA Summary" in captured.out
    assert "- Output Rows: 2" in captured.out
    assert "- Match Rate: 50.00%" in captured.out
    assert "Verification: " in captured.out

    workbook = load_workbook(output_path)
    assert workbook.sheetnames == ["HMDA", "QA Summary", "Exceptions", "Rate Terms", "ETL Trace", "Verification"]
    header = [cell.value for cell in workbook["HMDA"][1]]
    assert header == list(HMDA_COLUMN_ORDER)
    first_row = {column: cell.value for column, cell in zip(HMDA_COLUMN_ORDER, workbook["HMDA"][2], strict=True)}
    assert first_row["FirstName"] == "John"
    assert first_row["State_abrv"] == "GA"
    assert first_row["Branch_Name"] == "Columbus"
    assert workbook["HMDA"].max_row == 3


def test_cli_overrides_sources_and_disables_auto_correct(capsys: pytest.CaptureFixture[str]) -> None:
    encompass_path = _write_encompass_fixture("run_cli.override.synthetic.xlsx")
    output_path = _TEST_TMP_DIR / f"run_cli.override.{uuid4().hex}.xlsx"
    config_path = _write_config(
        "run_cli.override.config.json",
        {"sources": [{"name": "missing", "type": "encompass", "path": "data/_test_tmp/does_not_exist.xlsx"}]},
    )

    exit_code = main(
        [
            "--config",
            str(config_path),
            "--source",
            str(encompass_path),
            "--out",
            str(output_path),
            "--no-auto-correct",
        ]
    )

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "No supplemental records supplied" in captured.out
    workbook = load_workbook(output_path)
    state_column = HMDA_COLUMN_ORDER.index("State_abrv") + 1
    assert workbook["HMDA"].cell(row=2, column=state_column).value == "Georgia"


def test_cli_errors_when_config_is_missing(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(_TEST_TMP_DIR / "missing.config.json")])

    captured = capsys.readouterr()
    assert exc_info.value.code == 2
    assert "Config file not found" in captured.err


def test_cli_errors_when_source_path_does_not_exist(capsys: pytest.CaptureFixture[str]) -> None:
    config_path = _write_config(
        "run_cli.missing_source.json",
        {"sources": [{"name": "q1", "type": "encompass", "path": "data/_test_tmp/absent.xlsx"}]},
    )

    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_path)])

    captured = capsys.readouterr()
    assert exc_info.value.code == 2
    assert "do not exist" in captured.err


def test_cli_errors_for_unknown_source_type(capsys: pytest.CaptureFixture[str]) -> None:
    encompass_path = _write_encompass_fixture("run_cli.unknown_type.synthetic.xlsx")
    config_path = _write_config(
        "run_cli.unknown_type.json",
        {"sources": [{"name": "q1", "type": "calyx", "path": str(encompass_path)}]},
    )

    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_path)])

    captured = capsys.readouterr()
    assert exc_info.value.code == 2
    assert "Unknown source extractor 'calyx'" in captured.err


def test_cli_errors_for_invalid_config(capsys: pytest.CaptureFixture[str]) -> None:
    config_path = _write_config("run_cli.invalid.json", {"sources": [], "low_match_threshold": 7})

    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_path)])

    captured = capsys.readouterr()
    assert exc_info.value.code == 2
    assert "Failed to load config" in captured.err
