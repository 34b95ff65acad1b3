from __future__ import annotations

import logging
import time

from resume_analyzer.ai.errors import classify_backend_error
from resume_analyzer.ai.prompt import build_analysis_prompt
from resume_analyzer.ai.tiers import TieredStrategy
from resume_analyzer.ai.types import TextGenerator
from resume_analyzer.core.errors import AnalysisError
from resume_analyzer.normalize.normalize_analysis import normalize_analysis, parse_analysis_payload
from resume_analyzer.normalize.utils import strip_code_fences
from resume_analyzer.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisClient:
    def __init__(self, generator: TextGenerator, strategy: TieredStrategy):
        self._generator = generator
        self._strategy = strategy

    def analyze(self, resume_text: str, job_description: str | None = None) -> AnalysisResult:
        """Run one structured analysis.

        Raises exactly one of ``AuthFailure``, ``QuotaExceeded``,
        ``MalformedResponse`` or ``UnknownBackendError``.
        """
        started = time.perf_counter()
        try:
            tier = self._strategy.select(self._generator)
            prompt = build_analysis_prompt(resume_text, job_description)
            raw_text = self._generator.invoke(tier, prompt)
            if tier.strip_fences:
                raw_text = strip_code_fences(raw_text)
            result = normalize_analysis(parse_analysis_payload(raw_text))
        except AnalysisError as exc:
            logger.warning("ai_analysis_failed code=%s: %s", exc.code, exc)
            raise
        except Exception as exc:
            classified = classify_backend_error(exc)
            logger.warning("ai_analysis_failed code=%s: %s", classified.code, exc)
            raise classified from exc

        logger.info(
            "ai_analysis_done tier=%s model=%s score=%s latency_ms=%s",
            tier.name,
            tier.model,
            result.match_score,
            int((time.perf_counter() - started) * 1000),
        )
        return result
