from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import json
import logging
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

TRACE_COLUMNS: tuple[str, ...] = (
    "Step",
    "Input Count",
    "Output Count",
    "Duration (ms)",
    "Errors",
    "Warnings",
    "Sample",
)


@dataclass(frozen=True)
class StepTrace:
    step: str
    input_count: int
    output_count: int
    duration_ms: int
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    sample: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "step": self.step,
            "inputCount": self.input_count,
            "outputCount": self.output_count,
            "durationMs": self.duration_ms,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
        if self.sample is not None:
            payload["sample"] = dict(self.sample)
        return payload


class TraceCollector:
    """Append-only sink for per-stage pipeline traces."""

    def __init__(self) -> None:
        self._traces: list[StepTrace] = []

    @property
    def traces(self) -> list[StepTrace]:
        return list(self._traces)

    def record(
        self,
        step: str,
        *,
        input_count: int,
        output_count: int,
        duration_ms: int,
        errors: Sequence[str] = (),
        warnings: Sequence[str] = (),
        sample: Mapping[str, Any] | None = None,
    ) -> StepTrace:
        trace = StepTrace(
            step=step,
            input_count=int(input_count),
            output_count=int(output_count),
            duration_ms=int(duration_ms),
            errors=list(errors),
            warnings=list(warnings),
            sample=dict(sample) if sample is not None else None,
        )
        self._traces.append(trace)

        if trace.errors:
            logger.error("[%s] %s -> %s rows with %s errors", step, input_count, output_count, len(trace.errors))
        elif trace.warnings:
            logger.warning(
                "[%s] %s -> %s rows with %s warnings", step, input_count, output_count, len(trace.warnings)
            )
        else:
            logger.info("[%s] %s -> %s rows in %sms", step, input_count, output_count, duration_ms)
        return trace

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                "Step": trace.step,
                "Input Count": trace.input_count,
                "Output Count": trace.output_count,
                "Duration (ms)": trace.duration_ms,
                "Errors": "; ".join(trace.errors),
                "Warnings": "; ".join(trace.warnings),
                "Sample": json.dumps(trace.sample, default=str) if trace.sample is not None else "",
            }
            for trace in self._traces
        ]
        return pd.DataFrame(rows, columns=list(TRACE_COLUMNS))
