from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import VersionParseError
from .version import MODERN_SCHEMA_VERSION, HostVersion, parse_host_version


@dataclass(frozen=True)
class ExtractionConfig:
    modern_schema_version: HostVersion = MODERN_SCHEMA_VERSION
    include_smart_filters: bool = True
    # Zero-pad blobs whose length is not a multiple of 4 instead of rejecting them.
    pad_partial_words: bool = False
    threshold_not_found: int = -1


DEFAULT_CONFIG = ExtractionConfig()

VALID_KEYS = {
    "modern_schema_version",
    "include_smart_filters",
    "pad_partial_words",
    "threshold_not_found",
}


def _require_dict(value: object, *, where: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be an object")
    return value


def _require_bool(value: object, *, where: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{where} must be a boolean")
    return value


def _int_in_range(value: object, *, where: str, low: int, high: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{where} must be an integer")
    if not (low <= value <= high):
        raise ValueError(f"{where} must be in [{low}, {high}]")
    return value


def parse_config(data: object) -> ExtractionConfig:
    obj = _require_dict(data, where="config")
    unknown = sorted(set(obj) - VALID_KEYS)
    if unknown:
        raise ValueError(f"config has unknown keys: {', '.join(unknown)}")

    version = DEFAULT_CONFIG.modern_schema_version
    if "modern_schema_version" in obj:
        raw = obj["modern_schema_version"]
        if not isinstance(raw, str):
            raise ValueError("config.modern_schema_version must be a string like '24.6'")
        try:
            version = parse_host_version(raw)
        except VersionParseError as exc:
            raise ValueError(f"config.modern_schema_version: {exc}") from exc

    include_smart = DEFAULT_CONFIG.include_smart_filters
    if "include_smart_filters" in obj:
        include_smart = _require_bool(
            obj["include_smart_filters"], where="config.include_smart_filters"
        )

    pad = DEFAULT_CONFIG.pad_partial_words
    if "pad_partial_words" in obj:
        pad = _require_bool(obj["pad_partial_words"], where="config.pad_partial_words")

    not_found = DEFAULT_CONFIG.threshold_not_found
    if "threshold_not_found" in obj:
        not_found = _int_in_range(
            obj["threshold_not_found"],
            where="config.threshold_not_found",
            low=-(2**31),
            high=2**31 - 1,
        )

    return ExtractionConfig(
        modern_schema_version=version,
        include_smart_filters=include_smart,
        pad_partial_words=pad,
        threshold_not_found=not_found,
    )


def load_config(path: Path) -> ExtractionConfig:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_config(data)
