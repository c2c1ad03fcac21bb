"""Source-file extractors.

Each export format gets its own module file in this package.
"""

from hmda_etl.extractors.encompass import extract_encompass_export, locate_header_row
from hmda_etl.extractors.laserpro import detect_delimiter, extract_laserpro_export, parse_lar_lines
from hmda_etl.extractors.registry import (
    detect_source_type,
    extract_source_file,
    get_source_extractor,
    list_source_extractors,
    register_source_extractor,
)
from hmda_etl.extractors.supplemental import extract_supplemental_fields

__all__ = [
    "detect_delimiter",
    "detect_source_type",
    "extract_encompass_export",
    "extract_laserpro_export",
    "extract_source_file",
    "extract_supplemental_fields",
    "get_source_extractor",
    "list_source_extractors",
    "locate_header_row",
    "parse_lar_lines",
    "register_source_extractor",
]
