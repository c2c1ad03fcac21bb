from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from hmda_etl.cra_wiz import build_branch_reference_df, build_transform_summary_df, transform_cra_wiz_export
from hmda_etl.extractors.cra_wiz import extract_cra_wiz_export
from hmda_etl.io import write_work_item_workbook
from hmda_etl.qa import format_verification_report, verify_work_item_output

DEFAULT_WORK_ITEM_OUTPUT = Path("data/hmda_work_items.xlsx")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn a CRA Wiz export into the HMDA work-item workbook")
    parser.add_argument("--cra-wiz-export", required=True, help="Path to the CRA Wiz export workbook")
    parser.add_argument(
        "--out",
        default=str(DEFAULT_WORK_ITEM_OUTPUT),
        help=f"Output workbook path (default: {DEFAULT_WORK_ITEM_OUTPUT})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level for diagnostics (default: WARNING)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    export_path = Path(args.cra_wiz_export)
    if not export_path.exists():
        parser.error(f"CRA Wiz export not found: {export_path}")

    try:
        rows = extract_cra_wiz_export(export_path)
    except (OSError, ValueError) as exc:
        parser.error(f"Failed to read CRA Wiz export: {exc}")

    result = transform_cra_wiz_export(rows)
    work_item_df = result.to_frame()
    verification = verify_work_item_output(work_item_df)

    destination = Path(args.out)
    try:
        output_path = write_work_item_workbook(
            destination,
            work_item_df,
            summary_df=build_transform_summary_df(result),
            branch_reference_df=build_branch_reference_df(),
            verification_df=verification.to_frame(),
        )
    except PermissionError:
        parser.error(
            f"Cannot write work-item workbook '{destination}': permission denied. "
            "Close the file if it is open in Excel or pass --out."
        )
    except OSError as exc:
        parser.error(f"Cannot write work-item workbook '{destination}': {exc}")

    print(f"Output written to: {output_path}")
    print(f"- Rows: {result.row_count}")
    print(f"- Columns: {result.input_columns} -> {result.output_columns}")
    print(f"- Branch Matches: {result.branch_matches}")
    print(f"- Branch Misses: {result.branch_misses}")
    print(format_verification_report([verification]))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
