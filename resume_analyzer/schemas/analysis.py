from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

TipCategory = Literal["formatting", "content", "keywords", "impact", "structure"]
TipPriority = Literal["high", "medium", "low"]

TIP_CATEGORIES: tuple[str, ...] = ("formatting", "content", "keywords", "impact", "structure")
TIP_PRIORITIES: tuple[str, ...] = ("high", "medium", "low")
DEFAULT_TIP_CATEGORY: TipCategory = "content"
DEFAULT_TIP_PRIORITY: TipPriority = "medium"


class KeywordBuckets(BaseModel):
    hard_skills: list[str] = Field(default_factory=list)
    soft_skills: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)


class ActionableTip(BaseModel):
    category: TipCategory = DEFAULT_TIP_CATEGORY
    suggestion: str = ""
    priority: TipPriority = DEFAULT_TIP_PRIORITY


class AnalysisResult(BaseModel):
    match_score: int = Field(default=0, ge=0, le=100)
    missing_keywords: KeywordBuckets = Field(default_factory=KeywordBuckets)
    found_keywords: KeywordBuckets = Field(default_factory=KeywordBuckets)
    actionable_tips: list[ActionableTip] = Field(default_factory=list)
    summary: str = ""
