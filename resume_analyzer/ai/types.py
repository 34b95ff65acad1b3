from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ModelTier:
    name: str
    model: str
    json_mode: bool = True
    strip_fences: bool = False
    temperature: float = 0.7
    max_output_tokens: int = 8192


class TextGenerator(Protocol):
    def invoke(self, tier: ModelTier, prompt: str) -> str: ...
