"""
datamesh/config.py

Environment-driven configuration for parsing and analysis heuristics.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    stripped = raw_value.strip()
    return stripped if stripped else default


def _clamp_ratio(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Tunable heuristics for parsing, validation, and structure analysis.
    """

    sample_size: int = 5
    date_ratio_threshold: float = 0.8
    key_confidence: float = 0.8
    temporal_confidence: float = 0.9
    similarity_threshold: float = 0.7
    containment_similarity: float = 0.8
    low_completeness_threshold: float = 0.8
    small_dataset_rows: int = 10
    parallel_parse_threshold: int = 8
    max_workers: int = 4
    log_level: str = "INFO"
    parallel_parse_enabled: bool = True


def _get_log_level_env(name: str, default: str) -> str:
    level = _get_str_env(name, default).upper()
    return level if level in _ALLOWED_LOG_LEVELS else default


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached analysis settings from environment variables.
    """

    return AnalysisSettings(
        sample_size=max(0, _get_int_env("DATAMESH_SAMPLE_SIZE", 5)),
        date_ratio_threshold=_clamp_ratio(_get_float_env("DATAMESH_DATE_RATIO_THRESHOLD", 0.8)),
        key_confidence=_clamp_ratio(_get_float_env("DATAMESH_KEY_CONFIDENCE", 0.8)),
        temporal_confidence=_clamp_ratio(_get_float_env("DATAMESH_TEMPORAL_CONFIDENCE", 0.9)),
        similarity_threshold=_clamp_ratio(_get_float_env("DATAMESH_SIMILARITY_THRESHOLD", 0.7)),
        containment_similarity=_clamp_ratio(_get_float_env("DATAMESH_CONTAINMENT_SIMILARITY", 0.8)),
        low_completeness_threshold=_clamp_ratio(
            _get_float_env("DATAMESH_LOW_COMPLETENESS_THRESHOLD", 0.8)
        ),
        small_dataset_rows=max(0, _get_int_env("DATAMESH_SMALL_DATASET_ROWS", 10)),
        parallel_parse_threshold=max(1, _get_int_env("DATAMESH_PARALLEL_PARSE_THRESHOLD", 8)),
        max_workers=max(1, _get_int_env("DATAMESH_MAX_WORKERS", 4)),
        log_level=_get_log_level_env("DATAMESH_LOG_LEVEL", "INFO"),
        parallel_parse_enabled=_get_bool_env("DATAMESH_PARALLEL_PARSE", True),
    )
