"""Workbook output helpers."""

from hmda_etl.io.workbook_writer import write_hmda_workbook, write_work_item_workbook

__all__ = ["write_hmda_workbook", "write_work_item_workbook"]
