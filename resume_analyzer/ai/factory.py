from __future__ import annotations

from functools import lru_cache

from resume_analyzer.ai.client import AnalysisClient
from resume_analyzer.ai.config import default_tiers
from resume_analyzer.ai.providers.gemini_provider import GeminiProvider
from resume_analyzer.ai.tiers import TieredStrategy
from resume_analyzer.ai.types import TextGenerator
from resume_analyzer.core.config import settings


def get_text_generator() -> TextGenerator:
    return GeminiProvider(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        timeout_s=settings.ai_timeout_s,
        max_retries=settings.ai_max_retries,
    )


@lru_cache(maxsize=1)
def get_analysis_client() -> AnalysisClient:
    return AnalysisClient(
        generator=get_text_generator(),
        strategy=TieredStrategy(default_tiers(settings)),
    )
