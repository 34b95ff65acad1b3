from __future__ import annotations

import re
from typing import Any, Protocol

from resume_analyzer.core.config import settings
from resume_analyzer.core.matching_config import get_matching_config
from resume_analyzer.normalize.utils import round_half_up


class SalaryFormatter(Protocol):
    @property
    def not_specified(self) -> str: ...

    def format_range(
        self, min_salary: float | None, max_salary: float | None, location: str
    ) -> str | None: ...

    def estimate(self, title: str, location: str) -> str | None: ...


def group_indian(value: int) -> str:
    """Indian digit grouping: 1234567 -> 12,34,567."""
    digits = str(abs(value))
    sign = "-" if value < 0 else ""
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join([*pairs, tail])


def _title_has_word(title: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}\b", title) is not None


def estimate_salary_band(title: str, bands: list[dict[str, Any]], default_band: dict[str, Any]) -> dict[str, Any]:
    lowered = (title or "").lower()
    for band in bands:
        if any(_title_has_word(lowered, str(k).lower()) for k in band.get("keywords", [])):
            return band
    return default_band


class RegionalSalaryFormatter:
    """Region-keyed currency formatting plus a title-seniority estimate.

    Estimates are heuristics, not listing data, and always carry the
    configured suffix so callers can tell them apart.
    """

    def __init__(self, config: dict[str, Any] | None = None, estimate_region: str | None = None):
        self._config = config if config is not None else get_matching_config().salary
        self._estimate_region = (estimate_region or settings.salary_region).lower()

    def _region(self, location: str) -> dict[str, Any]:
        regions = self._config.get("regions", {})
        return regions.get((location or "").lower()) or regions.get("default") or {"symbol": "$", "grouping": "thousands"}

    def format_range(
        self, min_salary: float | None, max_salary: float | None, location: str
    ) -> str | None:
        if not min_salary and not max_salary:
            return None
        low = round_half_up(min_salary or max_salary or 0)
        high = round_half_up(max_salary or min_salary or 0)

        region = self._region(location)
        symbol = region.get("symbol", "$")
        if region.get("grouping") == "lakh":
            if low >= int(region.get("lakh_threshold", 100000)):
                return f"{symbol}{low / 100000:.1f} - {symbol}{high / 100000:.1f} LPA"
            return f"{symbol}{group_indian(low)} - {symbol}{group_indian(high)}"
        return f"{symbol}{low:,} - {symbol}{high:,}"

    def estimate(self, title: str, location: str) -> str | None:
        region_key = (location or "").lower()
        if region_key != self._estimate_region:
            return None
        estimates = self._config.get("estimates", {}).get(region_key)
        if not estimates:
            return None
        band = estimate_salary_band(title, estimates.get("bands", []), estimates.get("default_band", {}))
        symbol = self._region(location).get("symbol", "")
        suffix = self._config.get("estimate_suffix", "(Est.)")
        return f"{symbol}{float(band['min_lpa']):.1f} - {symbol}{float(band['max_lpa']):.1f} LPA {suffix}"

    @property
    def not_specified(self) -> str:
        return self._config.get("not_specified", "Not specified")
