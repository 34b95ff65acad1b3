from __future__ import annotations

import math
import re

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: int, lower: int = 0, upper: int = 100) -> int:
    return max(lower, min(upper, value))


def strip_code_fences(text: str) -> str:
    match = _FENCE_RE.search(text or "")
    if match:
        return match.group(1).strip()
    return text


def excerpt(text: str, max_chars: int = 500) -> str:
    value = text or ""
    if len(value) <= max_chars:
        return value
    return value[:max_chars] + "..."
