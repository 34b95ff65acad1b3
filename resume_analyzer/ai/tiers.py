from __future__ import annotations

import logging
from typing import Callable, Sequence

from resume_analyzer.ai.errors import is_quota_error
from resume_analyzer.ai.prompt import PROBE_PROMPT
from resume_analyzer.ai.types import ModelTier, TextGenerator

logger = logging.getLogger(__name__)


class TieredStrategy:
    """Ordered backend tiers, tried in turn on a narrowly matched retryable error.

    Every tier except the last is proven live with a trivial round trip before
    the real request; the last tier is used as-is. Any non-retryable error on a
    probe is re-raised unchanged. Selection is recomputed on every call because
    quota windows recover over time.
    """

    def __init__(
        self,
        tiers: Sequence[ModelTier],
        *,
        is_retryable: Callable[[BaseException], bool] = is_quota_error,
        probe_prompt: str = PROBE_PROMPT,
    ):
        if not tiers:
            raise ValueError("TieredStrategy requires at least one model tier.")
        self._tiers = tuple(tiers)
        self._is_retryable = is_retryable
        self._probe_prompt = probe_prompt

    @property
    def tiers(self) -> tuple[ModelTier, ...]:
        return self._tiers

    def select(self, generator: TextGenerator) -> ModelTier:
        for tier, next_tier in zip(self._tiers, self._tiers[1:]):
            try:
                generator.invoke(tier, self._probe_prompt)
                return tier
            except Exception as exc:
                if not self._is_retryable(exc):
                    raise
                logger.warning(
                    "ai_tier_fallback from=%s to=%s model=%s: %s",
                    tier.name,
                    next_tier.name,
                    next_tier.model,
                    exc,
                )
        return self._tiers[-1]
