from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationFinding:
    """Outcome of validating one canonical row."""

    row_index: int
    identifier: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    auto_corrected: dict[str, dict[str, str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "rowIndex": self.row_index,
            "identifier": self.identifier,
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "autoCorrected": {
                column: dict(change) for column, change in self.auto_corrected.items()
            },
        }


@dataclass(frozen=True)
class DeduplicationResult:
    kept: list[dict[str, object]]
    removed_count: int
    keys: list[str]


@dataclass(frozen=True)
class MergeResult:
    records: list[dict[str, object]]
    matched_count: int
    match_rate: float
    index_sizes: dict[str, int]
    warnings: list[str]


@dataclass(frozen=True)
class TransformResult:
    records: list[dict[str, str]]
    rate_terms: list[dict[str, str]]
    warnings: list[str]
