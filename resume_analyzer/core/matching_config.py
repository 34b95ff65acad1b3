from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

MATCHING_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "matching.yaml"


class SearchTunables(BaseModel):
    default_query: str = "software developer"
    max_query_skills: int = Field(default=3, ge=1)


class ScoringTunables(BaseModel):
    neutral_score: int = Field(default=50, ge=0, le=100)


class MatchingConfig(BaseModel):
    """Static job-matching tunables shipped as ``config/matching.yaml``.

    ``salary`` stays a plain mapping because ``RegionalSalaryFormatter``
    accepts hand-built configs in the same shape.
    """

    search: SearchTunables = Field(default_factory=SearchTunables)
    scoring: ScoringTunables = Field(default_factory=ScoringTunables)
    salary: dict[str, Any] = Field(default_factory=dict)
    mock_jobs: list[dict[str, Any]] = Field(default_factory=list)


def load_matching_config(path: Path = MATCHING_CONFIG_PATH) -> MatchingConfig:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read matching config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in matching config '{path}': {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid matching config '{path}': expected a top-level mapping.")

    try:
        return MatchingConfig.model_validate(parsed)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid matching config '{path}': {exc}") from exc


@lru_cache(maxsize=1)
def get_matching_config() -> MatchingConfig:
    config = load_matching_config()
    logger.info("matching_config_loaded mock_jobs=%s", len(config.mock_jobs))
    return config
