from __future__ import annotations

import json
import logging
import math
from typing import Any

from resume_analyzer.core.errors import MalformedResponse
from resume_analyzer.schemas.analysis import (
    DEFAULT_TIP_CATEGORY,
    DEFAULT_TIP_PRIORITY,
    TIP_CATEGORIES,
    TIP_PRIORITIES,
    ActionableTip,
    AnalysisResult,
    KeywordBuckets,
)

from .utils import clamp, excerpt, round_half_up

logger = logging.getLogger(__name__)

MALFORMED_EXCERPT_CHARS = 500


def parse_analysis_payload(raw_text: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw_text)
    except (TypeError, ValueError) as exc:
        snippet = excerpt(raw_text, MALFORMED_EXCERPT_CHARS)
        logger.error("ai_response_invalid_json excerpt=%r", snippet)
        raise MalformedResponse(
            f"AI returned invalid JSON response: {snippet}", excerpt=snippet
        ) from exc

    if not isinstance(parsed, dict):
        snippet = excerpt(raw_text, MALFORMED_EXCERPT_CHARS)
        logger.error("ai_response_not_object type=%s", type(parsed).__name__)
        raise MalformedResponse(
            f"AI response is not a JSON object: {snippet}", excerpt=snippet
        )
    return parsed


def _coerce_score(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    # JSON integers are unbounded; clamp before any float conversion.
    if isinstance(value, int):
        return clamp(value)
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return clamp(round_half_up(value))


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def _buckets(value: Any) -> KeywordBuckets:
    if not isinstance(value, dict):
        return KeywordBuckets()
    return KeywordBuckets(
        hard_skills=_string_list(value.get("hardSkills")),
        soft_skills=_string_list(value.get("softSkills")),
        certifications=_string_list(value.get("certifications")),
    )


def normalize_tip(raw: dict[str, Any]) -> ActionableTip:
    category = raw.get("category")
    priority = raw.get("priority")
    suggestion = raw.get("suggestion")
    return ActionableTip(
        category=category if category in TIP_CATEGORIES else DEFAULT_TIP_CATEGORY,
        priority=priority if priority in TIP_PRIORITIES else DEFAULT_TIP_PRIORITY,
        suggestion=suggestion if isinstance(suggestion, str) else ("" if suggestion is None else str(suggestion)),
    )


def normalize_analysis(payload: dict[str, Any]) -> AnalysisResult:
    raw_tips = payload.get("actionableTips")
    tips = [normalize_tip(tip) for tip in raw_tips if isinstance(tip, dict)] if isinstance(raw_tips, list) else []
    summary = payload.get("summary")

    return AnalysisResult(
        match_score=_coerce_score(payload.get("matchScore")),
        missing_keywords=_buckets(payload.get("missingKeywords")),
        found_keywords=_buckets(payload.get("foundKeywords")),
        actionable_tips=tips,
        summary=summary if isinstance(summary, str) else "",
    )
