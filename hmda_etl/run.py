from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Sequence

from hmda_etl.branches import build_officer_lookup
from hmda_etl.config import InputConfig, SourceInputConfig, load_config, validate_paths
from hmda_etl.extractors import detect_source_type, extract_source_file, get_source_extractor
from hmda_etl.io import write_hmda_workbook
from hmda_etl.models import SOURCE_SUPPLEMENTAL
from hmda_etl.pipeline import PipelineOptions, PipelineResult, run_pipeline
from hmda_etl.qa import VerificationResult, verify_hmda_output
from hmda_etl.trace import TraceCollector

_QA_PRINT_ORDER: tuple[tuple[str, str], ...] = (
    ("input_rows", "Input Rows"),
    ("supplemental_rows", "Supplemental Rows"),
    ("duplicates_removed", "Duplicates Removed"),
    ("output_rows", "Output Rows"),
    ("merge_matched", "Supplemental Matches"),
    ("match_rate", "Match Rate"),
    ("valid_rows", "Valid Rows"),
    ("invalid_rows", "Invalid Rows"),
    ("rows_with_warnings", "Rows With Warnings"),
    ("total_loan_amount", "Total Loan Amount"),
)
_MAX_PRINTED_WARNINGS = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build the quarterly HMDA LAR workbook")
    parser.add_argument("--config", required=True, help="Path to local JSON config")
    parser.add_argument(
        "--source",
        action="append",
        dest="source_paths",
        help="Override primary source file(s) from config; the type is inferred from the file name. "
        "Repeat this flag to pass multiple files.",
    )
    parser.add_argument("--supplemental", help="Override the supplemental additional-fields workbook")
    parser.add_argument("--template-path", help="Override template workbook path from config")
    parser.add_argument("--out", help="Override output workbook path from config")
    parser.add_argument(
        "--no-auto-correct",
        action="store_true",
        help="Report state/ZIP/county formatting problems instead of correcting them",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level for pipeline diagnostics (default: WARNING)",
    )
    return parser


def _build_override_sources(args: argparse.Namespace, config: InputConfig) -> list[SourceInputConfig]:
    if args.source_paths:
        primary = [
            SourceInputConfig(name=Path(path).stem, type=detect_source_type(path), path=Path(path))
            for path in args.source_paths
        ]
    else:
        primary = list(config.primary_sources)

    if args.supplemental:
        supplemental = [
            SourceInputConfig(name=SOURCE_SUPPLEMENTAL, type=SOURCE_SUPPLEMENTAL, path=Path(args.supplemental))
        ]
    else:
        supplemental = list(config.supplemental_sources)
    return [*primary, *supplemental]


def _build_effective_config(config: InputConfig, args: argparse.Namespace) -> InputConfig:
    return InputConfig(
        sources=_build_override_sources(args, config),
        output_path=Path(args.out) if args.out else config.output_path,
        template_path=Path(args.template_path) if args.template_path else config.template_path,
        source_priority=list(config.source_priority),
        branch_officers=dict(config.branch_officers),
        auto_correct=config.auto_correct and not args.no_auto_correct,
        low_match_threshold=config.low_match_threshold,
    )


_QA_VALUE_FORMATS: dict[str, str] = {
    "match_rate": "{:.2%}",
    "total_loan_amount": "${:,.0f}",
}


def _describe_metric(metric_key: str, metric_value: Any) -> str:
    template = _QA_VALUE_FORMATS.get(metric_key)
    if template is None or isinstance(metric_value, str):
        return str(metric_value)
    return template.format(float(metric_value))


def _print_qa_summary(qa_dict: dict[str, int | float]) -> None:
    print("QA Summary")
    for metric_key, label in _QA_PRINT_ORDER:
        print(f"- {label}: {_describe_metric(metric_key, qa_dict.get(metric_key, ''))}")


def _print_trace_warnings(result: PipelineResult) -> None:
    warnings = [warning for trace in result.traces if trace.step != "Validate" for warning in trace.warnings]
    if not warnings:
        return
    print(f"Warnings ({len(warnings)})")
    for warning in warnings[:_MAX_PRINTED_WARNINGS]:
        print(f"- {warning}")
    if len(warnings) > _MAX_PRINTED_WARNINGS:
        print(f"- ... {len(warnings) - _MAX_PRINTED_WARNINGS} more (see the ETL Trace sheet)")


def _print_verification(verification: VerificationResult) -> None:
    print(f"Verification: {verification.summary}")
    for check in verification.failed_checks:
        print(f"- FAIL {check.name}: expected {check.expected}, got {check.actual}")


def _extract_records(sources: list[SourceInputConfig]) -> list[dict[str, object]]:
    records: list[dict[str, object]] = []
    for source in sources:
        records.extend(extract_source_file(source.type, source.path))
    return records


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    config_path = Path(args.config)
    if not config_path.exists():
        parser.error(f"Config file not found: {config_path}")

    try:
        config = load_config(config_path)
    except (OSError, ValueError) as exc:
        parser.error(f"Failed to load config: {exc}")

    try:
        effective_config = _build_effective_config(config, args)
        validate_paths(effective_config)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    try:
        for source in effective_config.sources:
            get_source_extractor(source.type)
    except (KeyError, ValueError) as exc:
        parser.error(str(exc))

    print("Input path validation: OK")

    try:
        primary_records = _extract_records(effective_config.primary_sources)
        supplemental_records = _extract_records(effective_config.supplemental_sources)
    except (OSError, TypeError, ValueError, KeyError) as exc:
        parser.error(f"Source extraction failed: {exc}")

    collector = TraceCollector()
    options = PipelineOptions(
        source_priority=tuple(effective_config.source_priority),
        low_match_threshold=effective_config.low_match_threshold,
        auto_correct=effective_config.auto_correct,
        officer_lookup=build_officer_lookup(effective_config.branch_officers),
    )
    result = run_pipeline(
        primary_records,
        supplemental_records,
        options=options,
        collector=collector,
    )

    verification = verify_hmda_output(result.canonical_df)
    destination = effective_config.output_path
    try:
        output_path = write_hmda_workbook(
            destination,
            result.canonical_df,
            qa_df=result.qa_df,
            validation_df=result.validation_report_df(),
            trace_df=collector.to_frame(),
            rate_terms_df=result.rate_terms_df(),
            verification_df=verification.to_frame(),
            template_path=effective_config.template_path,
        )
    except PermissionError:
        parser.error(
            f"Cannot write HMDA workbook '{destination}': permission denied. "
            "The LAR workbook may still be open in Excel; close it or pass --out."
        )
    except OSError as exc:
        parser.error(f"Cannot write HMDA workbook '{destination}': {exc}")

    print(f"Output written to: {output_path}")
    _print_qa_summary(result.qa)
    _print_trace_warnings(result)
    _print_verification(verification)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
