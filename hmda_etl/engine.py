from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import logging
import re

from hmda_etl.fields import resolve_text
from hmda_etl.models import (
    MERGED_FLAG_KEY,
    SOURCE_ENCOMPASS,
    SOURCE_LASERPRO,
    DeduplicationResult,
    MergeResult,
)
from hmda_etl.transform import record_source

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

DEFAULT_SOURCE_PRIORITY: tuple[str, ...] = (SOURCE_ENCOMPASS, SOURCE_LASERPRO)

# Fields a supplemental record may fill on a matched primary record.
MERGE_FIELDS: tuple[str, ...] = (
    "FirstName",
    "LastName",
    "BorrowerFullName",
    "Coa_FirstName",
    "Coa_LastName",
    "Lender",
    "AA_Processor",
    "LDP_PostCloser",
    "APR",
    "Rate_Lock_Date",
    "LoanProgram",
    "RateType",
    "Branch",
    "Branch_Name",
    "Coa_Age",
    "Coa_CreditScore",
    "CoaSex",
    "Coa_CreditModel",
    "Coa_Ethnicity_1",
    "Coa_Ethnicity_2",
    "Coa_Ethnicity_3",
    "Coa_Ethnicity_4",
    "Coa_Ethnicity_5",
    "CoaRace_1",
    "CoaRace_2",
    "CoaRace_3",
    "CoaRace_4",
    "CoaRace_5",
    "Address",
    "City",
    "State_abrv",
)

NO_MATCH_WARNING = "No records matched - check if files have matching addresses"
NO_SUPPLEMENTAL_WARNING = "No supplemental records supplied; primary records returned unchanged"


def _normalize_source_key(name: str) -> str:
    normalized = _NON_ALNUM.sub("", name.strip().lower())
    return normalized


def _build_priority_rank(priority: Sequence[str]) -> dict[str, int]:
    priority_rank: dict[str, int] = {}
    for index, name in enumerate(priority):
        normalized = _normalize_source_key(name)
        if normalized and normalized not in priority_rank:
            priority_rank[normalized] = index
    return priority_rank


def uli_key(record: Mapping[str, object]) -> str:
    return resolve_text(record, "ULI").upper()


def loan_number_key(record: Mapping[str, object]) -> str:
    return resolve_text(record, "ApplNumb")


def address_key(record: Mapping[str, object]) -> str:
    """Return ``address|city`` lower-cased, or "" unless both parts are present."""
    address = resolve_text(record, "Address").lower()
    city = resolve_text(record, "City").lower()
    if not address or not city:
        return ""
    return f"{address}|{city}"


def dedupe_records(
    records: Sequence[Mapping[str, object]],
    *,
    source_priority: Sequence[str] = DEFAULT_SOURCE_PRIORITY,
) -> DeduplicationResult:
    """Collapse records that share a ULI, or an address and city when the ULI is missing.

    The first record for a key holds the slot. A later record from a
    higher-priority source replaces it in place, otherwise the later record is
    skipped. Records with neither key are always kept.
    """
    priority_rank = _build_priority_rank(source_priority)
    fallback_rank = len(priority_rank)

    def _rank(source: str) -> int:
        return priority_rank.get(_normalize_source_key(source), fallback_rank)

    kept: list[dict[str, object]] = []
    slots_by_uli: dict[str, int] = {}
    slots_by_address: dict[str, int] = {}
    decisions: list[str] = []

    def _settle_duplicate(label: str, slot: int, record: Mapping[str, object], uli: str, address: str) -> None:
        existing = kept[slot]
        existing_source = record_source(existing)
        source = record_source(record)
        if _rank(source) < _rank(existing_source):
            kept[slot] = dict(record)
            if uli:
                slots_by_uli[uli] = slot
            if address:
                slots_by_address[address] = slot
            decision = f"{label} ({existing_source} replaced by {source})"
        else:
            decision = f"{label} (kept {existing_source}, skipped {source})"
        decisions.append(decision)
        logger.debug("Duplicate %s", decision)

    for record in records:
        uli = uli_key(record)
        address = address_key(record)

        if uli and uli in slots_by_uli:
            _settle_duplicate(f"ULI:{uli}", slots_by_uli[uli], record, uli, address)
            continue
        if not uli and address and address in slots_by_address:
            _settle_duplicate(f"Address:{address}", slots_by_address[address], record, uli, address)
            continue

        slot = len(kept)
        kept.append(dict(record))
        if uli:
            slots_by_uli[uli] = slot
        if address:
            slots_by_address[address] = slot

    if decisions:
        logger.info("Removed %s duplicate records from %s", len(decisions), len(records))
    return DeduplicationResult(kept=kept, removed_count=len(decisions), keys=decisions)


def _build_index(
    records: Sequence[Mapping[str, object]],
    key_fn: Callable[[Mapping[str, object]], str],
) -> dict[str, Mapping[str, object]]:
    index: dict[str, Mapping[str, object]] = {}
    for record in records:
        key = key_fn(record)
        if not key:
            continue
        if key in index:
            logger.debug("Supplemental key %r repeats; keeping the first record", key)
            continue
        index[key] = record
    return index


def _fill_from_supplemental(
    primary: Mapping[str, object],
    supplemental: Mapping[str, object],
) -> dict[str, object]:
    merged = dict(primary)
    for field_name in MERGE_FIELDS:
        if resolve_text(primary, field_name):
            continue
        value = resolve_text(supplemental, field_name)
        if value:
            merged[field_name] = value
    merged[MERGED_FLAG_KEY] = True
    return merged


def merge_supplemental(
    primary: Sequence[Mapping[str, object]],
    supplemental: Sequence[Mapping[str, object]] | None,
    *,
    low_match_threshold: float = 0.5,
) -> MergeResult:
    """Fill gaps in primary records from matching supplemental records.

    Matches on ULI, then loan number, then address and city. Populated
    primary values are never overwritten.
    """
    if not supplemental:
        logger.info("No supplemental records to merge")
        return MergeResult(
            records=[dict(record) for record in primary],
            matched_count=0,
            match_rate=0.0,
            index_sizes={"uli": 0, "loan_number": 0, "address": 0},
            warnings=[NO_SUPPLEMENTAL_WARNING],
        )

    by_uli = _build_index(supplemental, uli_key)
    by_loan_number = _build_index(supplemental, loan_number_key)
    by_address = _build_index(supplemental, address_key)
    index_sizes = {"uli": len(by_uli), "loan_number": len(by_loan_number), "address": len(by_address)}

    merged_records: list[dict[str, object]] = []
    matched_count = 0
    for record in primary:
        match = None
        for index, key_fn in ((by_uli, uli_key), (by_loan_number, loan_number_key), (by_address, address_key)):
            key = key_fn(record)
            if key and key in index:
                match = index[key]
                break

        if match is None:
            merged_records.append(dict(record))
            continue
        matched_count += 1
        merged_records.append(_fill_from_supplemental(record, match))

    total = len(primary)
    match_rate = float(matched_count / total) if total else 0.0
    warnings: list[str] = []
    if total and matched_count == 0:
        warnings.append(NO_MATCH_WARNING)
    elif total and match_rate < low_match_threshold:
        warnings.append(f"Low match rate: only {matched_count}/{total} records matched")

    for warning in warnings:
        logger.warning(warning)
    logger.info("Merged supplemental data: matched %s of %s rows", matched_count, total)
    return MergeResult(
        records=merged_records,
        matched_count=matched_count,
        match_rate=match_rate,
        index_sizes=index_sizes,
        warnings=warnings,
    )
