from __future__ import annotations

import logging
from typing import Any, Optional

from openai import OpenAI

from resume_analyzer.ai.types import ModelTier
from resume_analyzer.core.errors import AuthFailure

logger = logging.getLogger(__name__)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("your-") or lower in {"changeme", "todo"}


class GeminiProvider:
    """Gemini models through Google's OpenAI-compatible endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout_s: float = 60.0,
        max_retries: int = 0,
        client: Any = None,
    ):
        self._api_key = (api_key or "").strip()
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is not None:
            return self._client
        if not self._api_key or _looks_like_placeholder(self._api_key):
            raise AuthFailure("Invalid or missing Gemini API key. Check your .env file.")
        self._client = OpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout_s,
            max_retries=self._max_retries,
        )
        return self._client

    def invoke(self, tier: ModelTier, prompt: str) -> str:
        create_kwargs: dict[str, Any] = {
            "model": tier.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": tier.temperature,
            "max_tokens": tier.max_output_tokens,
        }
        if tier.json_mode:
            create_kwargs["response_format"] = {"type": "json_object"}

        response = self._get_client().chat.completions.create(**create_kwargs)
        content = response.choices[0].message.content if response.choices else ""
        logger.debug("ai_invoke_done tier=%s model=%s chars=%s", tier.name, tier.model, len(content or ""))
        return str(content or "")
