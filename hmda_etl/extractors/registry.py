from __future__ import annotations

from pathlib import Path

import pandas as pd

from hmda_etl.extractors.base import SourceExtractorFn
from hmda_etl.extractors.encompass import extract_encompass_export
from hmda_etl.extractors.laserpro import extract_laserpro_export
from hmda_etl.extractors.supplemental import extract_supplemental_fields
from hmda_etl.models import SOURCE_ENCOMPASS, SOURCE_LASERPRO, SOURCE_SUPPLEMENTAL, records_from_frame

_EXTRACTOR_REGISTRY: dict[str, SourceExtractorFn] = {
    SOURCE_ENCOMPASS: extract_encompass_export,
    SOURCE_LASERPRO: extract_laserpro_export,
    SOURCE_SUPPLEMENTAL: extract_supplemental_fields,
}

_SPREADSHEET_SUFFIXES = (".xlsx", ".xlsm", ".xls")
_DELIMITED_SUFFIXES = (".txt", ".csv", ".dat")
_SUPPLEMENTAL_NAME_HINTS = ("additional", "supplemental")


def _normalize_source_type(source_type: str) -> str:
    normalized = source_type.strip().lower()
    if not normalized:
        raise ValueError("Source extractor name must be a non-empty string")
    return normalized


def list_source_extractors() -> tuple[str, ...]:
    """Return all known source extractor names."""
    return tuple(sorted(_EXTRACTOR_REGISTRY))


def register_source_extractor(source_type: str, extractor: SourceExtractorFn) -> None:
    """Register or replace a source extractor implementation by name."""
    normalized_type = _normalize_source_type(source_type)
    _EXTRACTOR_REGISTRY[normalized_type] = extractor


def get_source_extractor(source_type: str) -> SourceExtractorFn:
    normalized_type = _normalize_source_type(source_type)
    extractor = _EXTRACTOR_REGISTRY.get(normalized_type)
    if extractor is None:
        available = ", ".join(list_source_extractors()) or "<none>"
        raise KeyError(
            f"Unknown source extractor '{source_type}'. Available extractors: {available}"
        )
    return extractor


def detect_source_type(path: str | Path) -> str:
    """Guess the extractor for a file from its name.

    Spreadsheets are Encompass exports unless the name mentions additional or
    supplemental fields; delimited text files are LaserPro exports.
    """
    name = Path(path).name.lower()
    if name.endswith(_SPREADSHEET_SUFFIXES):
        if any(hint in name for hint in _SUPPLEMENTAL_NAME_HINTS):
            return SOURCE_SUPPLEMENTAL
        return SOURCE_ENCOMPASS
    if name.endswith(_DELIMITED_SUFFIXES):
        return SOURCE_LASERPRO
    raise ValueError(f"Cannot infer source type from file name: {path}")


def extract_source_file(source_type: str, path: str | Path) -> list[dict[str, object]]:
    """Run a registered extractor and return its rows as raw records tagged with their source."""
    normalized_type = _normalize_source_type(source_type)
    extractor = get_source_extractor(normalized_type)
    extracted_df = extractor(path)
    if not isinstance(extracted_df, pd.DataFrame):
        raise TypeError(
            f"Source extractor '{normalized_type}' returned {type(extracted_df).__name__}, "
            "expected pandas.DataFrame"
        )
    return records_from_frame(extracted_df, source=normalized_type)
