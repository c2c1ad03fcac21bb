from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from hmda_etl.fields import LAR_POSITION_FIELD_MAP
from hmda_etl.fields.aliases import LAR_DATA_RECORD_TYPE, LAR_HEADER_RECORD_TYPE
from hmda_etl.models import SOURCE_KEY, SOURCE_LASERPRO

logger = logging.getLogger(__name__)

CANDIDATE_DELIMITERS: tuple[str, ...] = ("|", "~", "\t", ";")
DEFAULT_DELIMITER = "|"
DELIMITER_SAMPLE_LINES = 10
MIN_LAR_FIELDS = 10
MIN_UNTYPED_DATA_FIELDS = 50
INSTITUTION_BANNER = "Colony Bank"


def detect_delimiter(content: str) -> str:
    """Pick the delimiter that splits the first lines into many, consistent fields.

    Each candidate scores ``mean / (1 + variance)`` of the per-line field
    counts, or zero when the mean is below the minimum LAR width. Ties keep
    candidate order, so a file that matches nothing falls back to ``|``.
    """
    lines = [line for line in content.splitlines() if line.strip()][:DELIMITER_SAMPLE_LINES]
    if not lines:
        return DEFAULT_DELIMITER

    best_delimiter = DEFAULT_DELIMITER
    best_score = 0.0
    for delimiter in CANDIDATE_DELIMITERS:
        counts = [len(line.split(delimiter)) for line in lines]
        mean = sum(counts) / len(counts)
        variance = sum((count - mean) ** 2 for count in counts) / len(counts)
        score = mean / (1 + variance) if mean >= MIN_LAR_FIELDS else 0.0
        if score > best_score:
            best_delimiter, best_score = delimiter, score
    return best_delimiter


def _is_data_row(values: list[str]) -> bool:
    return values[0] == LAR_DATA_RECORD_TYPE or len(values) >= MIN_UNTYPED_DATA_FIELDS


def parse_lar_lines(content: str, *, delimiter: str | None = None) -> list[dict[str, str]]:
    """Map delimited LAR data lines onto canonical field names by position.

    Values at unmapped positions are kept as ``Field_<n>``.
    """
    delimiter = delimiter or detect_delimiter(content)
    rows: list[dict[str, str]] = []
    for line_number, raw_line in enumerate(content.splitlines()):
        line = raw_line.strip()
        if not line:
            continue
        values = line.split(delimiter)
        if values[0] == LAR_HEADER_RECORD_TYPE or (line_number == 0 and INSTITUTION_BANNER in line):
            logger.debug("Skipping LAR header row at line %s", line_number)
            continue
        if not _is_data_row(values):
            logger.debug(
                "Skipping non-data row at line %s: first field %r, %s fields",
                line_number,
                values[0],
                len(values),
            )
            continue

        row: dict[str, str] = {}
        for position, value in enumerate(values):
            value = value.strip()
            if not value:
                continue
            field_name = LAR_POSITION_FIELD_MAP.get(position)
            row[field_name if field_name is not None else f"Field_{position}"] = value
        row[SOURCE_KEY] = SOURCE_LASERPRO
        rows.append(row)
    return rows


def extract_laserpro_export(path: str | Path) -> pd.DataFrame:
    """Extract a delimited Compliance Reporter / LaserPro LAR export."""
    path = Path(path)
    content = path.read_text(encoding="utf-8-sig", errors="replace")
    delimiter = detect_delimiter(content)
    rows = parse_lar_lines(content, delimiter=delimiter)
    logger.info("Parsed %s LaserPro rows from %s (delimiter %r)", len(rows), path.name, delimiter)
    if not rows:
        return pd.DataFrame({SOURCE_KEY: pd.Series(dtype=object)})
    return pd.DataFrame(rows, dtype=object)
