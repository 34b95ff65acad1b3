from __future__ import annotations

from resume_analyzer.ai.types import ModelTier
from resume_analyzer.core.config import Settings, settings


def default_tiers(cfg: Settings | None = None) -> tuple[ModelTier, ...]:
    cfg = cfg or settings
    primary = ModelTier(
        name="primary",
        model=cfg.ai_primary_model,
        json_mode=True,
        strip_fences=False,
        temperature=cfg.ai_temperature,
        max_output_tokens=cfg.ai_max_output_tokens,
    )
    # The fallback model has no native JSON mode and may wrap replies in fences.
    fallback = ModelTier(
        name="fallback",
        model=cfg.ai_fallback_model,
        json_mode=False,
        strip_fences=True,
        temperature=cfg.ai_temperature,
        max_output_tokens=cfg.ai_max_output_tokens,
    )
    return (primary, fallback)
