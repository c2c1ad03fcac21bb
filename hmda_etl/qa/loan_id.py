from __future__ import annotations

import re
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from hmda_etl.models import is_blank, to_text

_INTERNAL_SPACE = re.compile(r"\s+")
_EXCEL_FLOAT_SUFFIX = re.compile(r"\.0$")
NORMALIZED_ID_COLUMN = "normalized_loan_id"


def normalize_loan_id(value: Any) -> str | None:
    """Canonical form of a ULI or loan number, or ``None`` when there is no identifier.

    Spreadsheet exports turn numeric loan numbers into floats and LOS screens
    pad ULIs with spaces, so both are folded away before comparison.
    """
    if is_blank(value):
        return None
    text = _INTERNAL_SPACE.sub("", _EXCEL_FLOAT_SUFFIX.sub("", to_text(value)))
    return text.upper() or None


def _duplicate_keys(keys: Sequence[str | None]) -> set[str]:
    counts = Counter(key for key in keys if key is not None)
    return {key for key, count in counts.items() if count > 1}


def find_duplicate_ids(
    rows: pd.DataFrame | Sequence[Mapping[str, Any]],
    id_col: str = "ULI",
) -> pd.DataFrame | list[dict[str, Any]]:
    """Return every row whose identifier collides with another row.

    Frames come back as a filtered frame, record lists as a list of dicts;
    either way each row gains a ``normalized_loan_id`` value.
    """
    if isinstance(rows, pd.DataFrame):
        if id_col not in rows.columns:
            raise KeyError(f"Column '{id_col}' not found in DataFrame")
        keys = rows[id_col].map(normalize_loan_id)
        repeated = _duplicate_keys(keys.tolist())
        flagged = rows.loc[keys.isin(repeated)].copy()
        flagged[NORMALIZED_ID_COLUMN] = keys.loc[flagged.index]
        return flagged

    keys_list = [normalize_loan_id(row.get(id_col)) for row in rows]
    repeated = _duplicate_keys(keys_list)
    return [
        {**row, NORMALIZED_ID_COLUMN: key}
        for row, key in zip(rows, keys_list)
        if key in repeated
    ]
