from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import logging
import time
from typing import Any

import pandas as pd

from hmda_etl.branches import OfficerBranchLookup
from hmda_etl.engine import DEFAULT_SOURCE_PRIORITY, dedupe_records, merge_supplemental
from hmda_etl.fields import normalize_record_keys
from hmda_etl.models import (
    HMDA_COLUMN_COUNT,
    RATE_TERM_COLUMNS,
    DeduplicationResult,
    MergeResult,
    ValidationFinding,
    build_canonical_df,
)
from hmda_etl.qa import (
    apply_auto_corrections,
    build_validation_report_df,
    compute_qa,
    plan_auto_corrections,
    validate_records,
)
from hmda_etl.trace import StepTrace, TraceCollector
from hmda_etl.transform import transform_records

logger = logging.getLogger(__name__)

_SAMPLE_SIZE = 5


@dataclass(frozen=True)
class PipelineOptions:
    source_priority: tuple[str, ...] = DEFAULT_SOURCE_PRIORITY
    low_match_threshold: float = 0.5
    auto_correct: bool = True
    officer_lookup: OfficerBranchLookup | None = None


@dataclass(frozen=True)
class PipelineResult:
    records: list[dict[str, str]]
    canonical_df: pd.DataFrame = field(repr=False)
    findings: list[ValidationFinding]
    rate_terms: list[dict[str, str]]
    deduplication: DeduplicationResult
    merge: MergeResult
    traces: list[StepTrace]
    qa_df: pd.DataFrame = field(repr=False)
    qa: dict[str, int | float]

    def validation_report_df(self) -> pd.DataFrame:
        return build_validation_report_df(self.findings)

    def rate_terms_df(self) -> pd.DataFrame:
        return pd.DataFrame(self.rate_terms, columns=list(RATE_TERM_COLUMNS))


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _normalize_all(records: Sequence[Mapping[str, object]]) -> list[dict[str, object]]:
    return [normalize_record_keys(record) for record in records]


def run_pipeline(
    primary_records: Sequence[Mapping[str, object]],
    supplemental_records: Sequence[Mapping[str, object]] | None = None,
    *,
    options: PipelineOptions | None = None,
    collector: TraceCollector | None = None,
) -> PipelineResult:
    """Run one batch through normalize, dedupe, merge, transform, correct and validate.

    Data problems never raise; they surface as warnings and validation findings.
    """
    options = options or PipelineOptions()
    collector = collector or TraceCollector()

    started = time.perf_counter()
    normalized = _normalize_all(primary_records)
    normalized_supplemental = _normalize_all(supplemental_records or [])
    collector.record(
        "Normalize",
        input_count=len(primary_records) + len(supplemental_records or []),
        output_count=len(normalized) + len(normalized_supplemental),
        duration_ms=_elapsed_ms(started),
    )

    started = time.perf_counter()
    deduplication = dedupe_records(normalized, source_priority=options.source_priority)
    collector.record(
        "Deduplicate",
        input_count=len(normalized),
        output_count=len(deduplication.kept),
        duration_ms=_elapsed_ms(started),
        sample={"duplicatesRemoved": deduplication.removed_count, "keys": deduplication.keys[:_SAMPLE_SIZE]},
    )

    started = time.perf_counter()
    merge = merge_supplemental(
        deduplication.kept,
        normalized_supplemental,
        low_match_threshold=options.low_match_threshold,
    )
    collector.record(
        "MergeSupplemental",
        input_count=len(deduplication.kept),
        output_count=len(merge.records),
        duration_ms=_elapsed_ms(started),
        warnings=merge.warnings,
        sample={
            "matchCount": merge.matched_count,
            "matchRate": f"{merge.match_rate:.1%}",
            "lookupMaps": dict(merge.index_sizes),
        },
    )

    started = time.perf_counter()
    transformed = transform_records(merge.records, officer_lookup=options.officer_lookup)
    transform_sample: dict[str, Any] | None = None
    if transformed.records:
        first_row = transformed.records[0]
        transform_sample = {
            "outputColumns": len(first_row),
            "expectedColumns": HMDA_COLUMN_COUNT,
            "sampleRow": dict(list(first_row.items())[:10]),
        }
    collector.record(
        "Transform",
        input_count=len(merge.records),
        output_count=len(transformed.records),
        duration_ms=_elapsed_ms(started),
        warnings=transformed.warnings,
        sample=transform_sample,
    )

    records = transformed.records
    corrections: list[dict[str, dict[str, str]]] | None = None
    if options.auto_correct:
        started = time.perf_counter()
        corrections = [plan_auto_corrections(record) for record in records]
        records = apply_auto_corrections(records, corrections)
        collector.record(
            "AutoCorrect",
            input_count=len(transformed.records),
            output_count=len(records),
            duration_ms=_elapsed_ms(started),
            sample={"correctedRows": sum(1 for plan in corrections if plan)},
        )

    started = time.perf_counter()
    findings = validate_records(records, corrections=corrections, report_uncorrected=not options.auto_correct)
    if len(findings) != len(merge.records):
        raise RuntimeError(
            f"Validation produced {len(findings)} findings for {len(merge.records)} transformed rows"
        )
    collector.record(
        "Validate",
        input_count=len(records),
        output_count=len(findings),
        duration_ms=_elapsed_ms(started),
        errors=[f"Row {finding.row_index}: {error}" for finding in findings for error in finding.errors],
        warnings=[f"Row {finding.row_index}: {warning}" for finding in findings for warning in finding.warnings],
    )

    canonical_df = build_canonical_df(records)
    qa_df, qa = compute_qa(
        canonical_df=canonical_df,
        findings=findings,
        input_rows=len(primary_records),
        supplemental_rows=len(normalized_supplemental),
        duplicates_removed=deduplication.removed_count,
        merge_matched=merge.matched_count,
    )
    logger.info(
        "Pipeline complete: %s input rows, %s output rows, %s invalid",
        len(primary_records),
        len(records),
        qa["invalid_rows"],
    )
    return PipelineResult(
        records=records,
        canonical_df=canonical_df,
        findings=findings,
        rate_terms=transformed.rate_terms,
        deduplication=deduplication,
        merge=merge,
        traces=collector.traces,
        qa_df=qa_df,
        qa=qa,
    )
