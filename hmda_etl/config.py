from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hmda_etl.engine import DEFAULT_SOURCE_PRIORITY
from hmda_etl.extractors import detect_source_type
from hmda_etl.models import SOURCE_SUPPLEMENTAL


@dataclass
class SourceInputConfig:
    name: str
    type: str
    path: Path

    @property
    def is_supplemental(self) -> bool:
        return self.type == SOURCE_SUPPLEMENTAL


@dataclass
class InputConfig:
    sources: list[SourceInputConfig] = field(default_factory=list)
    output_path: Path = Path("data/hmda_output.xlsx")
    template_path: Path | None = None
    source_priority: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_PRIORITY))
    branch_officers: dict[str, str] = field(default_factory=dict)
    auto_correct: bool = True
    low_match_threshold: float = 0.5

    @property
    def primary_sources(self) -> list[SourceInputConfig]:
        return [source for source in self.sources if not source.is_supplemental]

    @property
    def supplemental_sources(self) -> list[SourceInputConfig]:
        return [source for source in self.sources if source.is_supplemental]


def _require_str_value(value: object, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"'{label}' must be a non-empty string")
    return value.strip()


def _optional_path(raw: dict[str, Any], key: str) -> Path | None:
    value = raw.get(key)
    if value is None:
        return None
    return Path(_require_str_value(value, key))


def _parse_sources(raw: dict[str, Any]) -> list[SourceInputConfig]:
    source_entries = raw.get("sources", [])
    if not isinstance(source_entries, list):
        raise ValueError("'sources' must be a list of source config objects")

    sources: list[SourceInputConfig] = []
    seen_names: set[str] = set()
    for index, source_raw in enumerate(source_entries):
        if not isinstance(source_raw, dict):
            raise ValueError(f"'sources[{index}]' must be an object")

        path_value = _require_str_value(source_raw.get("path"), f"sources[{index}].path")
        raw_type = source_raw.get("type")
        if raw_type is None:
            source_type = detect_source_type(path_value)
        else:
            source_type = _require_str_value(raw_type, f"sources[{index}].type").lower()
        name = _require_str_value(source_raw.get("name", Path(path_value).stem), f"sources[{index}].name")

        normalized_name = name.lower()
        if normalized_name in seen_names:
            raise ValueError(f"Source names must be unique (duplicate: '{name}')")
        seen_names.add(normalized_name)
        sources.append(SourceInputConfig(name=name, type=source_type, path=Path(path_value)))

    supplemental_path = _optional_path(raw, "supplemental_path")
    if supplemental_path is not None:
        sources.append(
            SourceInputConfig(name=SOURCE_SUPPLEMENTAL, type=SOURCE_SUPPLEMENTAL, path=supplemental_path)
        )
    return sources


def _parse_source_priority(raw_priority: object) -> list[str]:
    if raw_priority is None:
        return list(DEFAULT_SOURCE_PRIORITY)
    if not isinstance(raw_priority, list) or not all(isinstance(item, str) for item in raw_priority):
        raise ValueError("'source_priority' must be a list of strings")

    resolved: list[str] = []
    for raw_name in raw_priority:
        normalized = raw_name.strip().lower()
        if not normalized:
            raise ValueError("'source_priority' entries must be non-empty strings")
        if normalized in resolved:
            raise ValueError(f"'source_priority' contains duplicate source '{raw_name}'")
        resolved.append(normalized)
    return resolved


def _parse_branch_officers(raw_officers: object) -> dict[str, str]:
    if raw_officers is None:
        return {}
    if not isinstance(raw_officers, dict):
        raise ValueError("'branch_officers' must be an object mapping officer name to branch number")

    officers: dict[str, str] = {}
    for officer, branch in raw_officers.items():
        officer_name = _require_str_value(officer, "branch_officers key")
        if isinstance(branch, bool) or not isinstance(branch, (str, int)):
            raise ValueError(f"'branch_officers.{officer_name}' must be a branch number")
        officers[officer_name] = _require_str_value(str(branch), f"branch_officers.{officer_name}")
    return officers


def _parse_threshold(raw_threshold: object) -> float:
    if raw_threshold is None:
        return 0.5
    if isinstance(raw_threshold, bool) or not isinstance(raw_threshold, (int, float)):
        raise ValueError("'low_match_threshold' must be a number between 0 and 1")
    threshold = float(raw_threshold)
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"'low_match_threshold' must be between 0 and 1. Got: {raw_threshold}")
    return threshold


def load_config(path: Path) -> InputConfig:
    with path.open("r", encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, dict):
        raise ValueError("Config file must contain a JSON object")

    auto_correct = raw.get("auto_correct", True)
    if not isinstance(auto_correct, bool):
        raise ValueError("'auto_correct' must be true or false")

    return InputConfig(
        sources=_parse_sources(raw),
        output_path=Path(raw.get("output_path", "data/hmda_output.xlsx")),
        template_path=_optional_path(raw, "template_path"),
        source_priority=_parse_source_priority(raw.get("source_priority")),
        branch_officers=_parse_branch_officers(raw.get("branch_officers")),
        auto_correct=auto_correct,
        low_match_threshold=_parse_threshold(raw.get("low_match_threshold")),
    )


def validate_paths(config: InputConfig) -> None:
    if not config.primary_sources:
        raise ValueError("At least one primary (encompass or laserpro) source is required")

    required_files = [source.path for source in config.sources]
    if config.template_path is not None:
        required_files.append(config.template_path)
    missing = [str(file_path) for file_path in required_files if not file_path.exists()]
    if missing:
        raise FileNotFoundError(
            "The following configured input path(s) do not exist: " + ", ".join(missing)
        )
