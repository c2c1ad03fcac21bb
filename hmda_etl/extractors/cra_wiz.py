from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from hmda_etl.models import records_from_frame

logger = logging.getLogger(__name__)


def extract_cra_wiz_export(path: str | Path) -> list[dict[str, object]]:
    """Read the first sheet of a CRA Wiz export as one record per loan.

    The export carries a clean header row, so column names are kept verbatim.
    """
    path = Path(path)
    df = pd.read_excel(path, sheet_name=0, dtype=object)
    df = df.loc[:, [not str(column).startswith("Unnamed:") for column in df.columns]]
    records = records_from_frame(df)
    logger.info("Parsed %s CRA Wiz rows with %s columns from %s", len(records), len(df.columns), path.name)
    return records
