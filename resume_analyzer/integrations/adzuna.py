from __future__ import annotations

import logging
import re
from typing import Any, Protocol

import httpx

from resume_analyzer.core.config import Settings, settings
from resume_analyzer.core.errors import JobSearchUnavailable
from resume_analyzer.schemas.jobs import RawListing

logger = logging.getLogger(__name__)

_LOCATION_RE = re.compile(r"^[a-z]{2}$")


class JobSearchClient(Protocol):
    @property
    def enabled(self) -> bool: ...

    def search(self, query: str, location: str, page: int) -> list[RawListing]: ...


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _display_name(value: Any) -> str | None:
    if isinstance(value, dict):
        name = value.get("display_name") or value.get("label")
        return str(name).strip() if name else None
    return None


def parse_adzuna_result(item: dict[str, Any]) -> RawListing:
    return RawListing(
        id=str(item["id"]) if item.get("id") is not None else None,
        title=str(item.get("title") or "").strip(),
        company=_display_name(item.get("company")),
        location=_display_name(item.get("location")),
        description=str(item.get("description") or "").strip(),
        url=str(item.get("redirect_url") or ""),
        salary_min=_as_number(item.get("salary_min")),
        salary_max=_as_number(item.get("salary_max")),
        posted_date=str(item["created"]) if item.get("created") else None,
        category=_display_name(item.get("category")),
    )


class AdzunaClient:
    def __init__(
        self,
        app_id: str | None,
        app_key: str | None,
        base_url: str = "https://api.adzuna.com/v1/api",
        timeout_s: float = 10.0,
        results_per_page: int = 10,
        transport: httpx.BaseTransport | None = None,
    ):
        self._app_id = (app_id or "").strip()
        self._app_key = (app_key or "").strip()
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._results_per_page = results_per_page
        self._transport = transport

    @classmethod
    def from_settings(cls, cfg: Settings | None = None) -> "AdzunaClient":
        cfg = cfg or settings
        return cls(
            app_id=cfg.adzuna_app_id,
            app_key=cfg.adzuna_api_key,
            base_url=cfg.adzuna_base_url,
            timeout_s=cfg.job_search_timeout_s,
            results_per_page=cfg.job_search_results_per_page,
        )

    @property
    def enabled(self) -> bool:
        if not self._app_id or not self._app_key:
            return False
        return not (_looks_like_placeholder(self._app_id) or _looks_like_placeholder(self._app_key))

    def search(self, query: str, location: str, page: int) -> list[RawListing]:
        if not self.enabled:
            raise JobSearchUnavailable("Adzuna API credentials are not configured.")
        country = (location or "").strip().lower()
        if not _LOCATION_RE.match(country):
            raise JobSearchUnavailable(f"Unsupported job search location '{location}'.")

        url = f"{self._base_url}/jobs/{country}/search/{max(1, int(page))}"
        params = {
            "app_id": self._app_id,
            "app_key": self._app_key,
            "what": query,
            "results_per_page": self._results_per_page,
            "sort_by": "relevance",
            "salary_include_unknown": 1,
        }
        logger.info("job_search_request location=%s page=%s query=%r", country, page, query)
        try:
            with httpx.Client(timeout=self._timeout_s, transport=self._transport) as client:
                response = client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise JobSearchUnavailable(
                f"Adzuna returned HTTP {exc.response.status_code}."
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise JobSearchUnavailable(f"Adzuna request failed: {exc}") from exc

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise JobSearchUnavailable("Adzuna response did not contain a results list.")
        try:
            return [parse_adzuna_result(item) for item in results if isinstance(item, dict)]
        except ValueError as exc:
            raise JobSearchUnavailable(f"Adzuna returned an unexpected listing shape: {exc}") from exc
