from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from hmda_etl.extractors.encompass import frame_from_sheet
from hmda_etl.models import SOURCE_SUPPLEMENTAL

logger = logging.getLogger(__name__)


def extract_supplemental_fields(path: str | Path) -> pd.DataFrame:
    """Extract the Encompass additional-fields workbook (names, staff, branch, APR)."""
    path = Path(path)
    raw_df = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
    extracted = frame_from_sheet(raw_df, source=SOURCE_SUPPLEMENTAL)
    logger.info("Parsed %s supplemental rows from %s", len(extracted), path.name)
    return extracted
