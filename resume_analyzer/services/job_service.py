from __future__ import annotations

import logging

from resume_analyzer.core.config import settings
from resume_analyzer.core.errors import AnalysisIncomplete, JobSearchUnavailable
from resume_analyzer.core.matching_config import get_matching_config
from resume_analyzer.features.salary import RegionalSalaryFormatter, SalaryFormatter
from resume_analyzer.features.skill_pipeline import SkillSet, extract_skills
from resume_analyzer.integrations.adzuna import JobSearchClient
from resume_analyzer.normalize.utils import clamp, round_half_up
from resume_analyzer.schemas.jobs import JobListing, RawListing
from resume_analyzer.schemas.resume import ResumeRecord

logger = logging.getLogger(__name__)


def build_search_query(skills: SkillSet) -> str:
    search = get_matching_config().search
    top_skills = skills.hard_skills[: search.max_query_skills]
    if not top_skills:
        return search.default_query
    return " ".join(top_skills)


def _listing_text(listing: JobListing) -> str:
    return f"{listing.title} {listing.description}".lower()


def find_matched_skills(listing: JobListing, skills: SkillSet) -> list[str]:
    text = _listing_text(listing)
    return [skill for skill in skills.all_skills if skill.lower() in text]


def calculate_match_score(listing: JobListing, skills: SkillSet) -> int:
    """Percentage of résumé skills mentioned in the listing title or description.

    With no skills there is no signal either way, so every listing gets the
    neutral score rather than zero.
    """
    total = len(skills.all_skills)
    if total == 0:
        return get_matching_config().scoring.neutral_score
    matched = len(find_matched_skills(listing, skills))
    return clamp(round_half_up(100 * matched / total))


def score_listing(listing: JobListing, skills: SkillSet) -> JobListing:
    matched = find_matched_skills(listing, skills)
    return listing.model_copy(
        update={
            "match_score": calculate_match_score(listing, skills),
            "matched_skills": matched,
            "missing_skills": [skill for skill in skills.hard_skills if skill not in matched],
        }
    )


def rank_listings(listings: list[JobListing]) -> list[JobListing]:
    # sorted() is stable, so equal scores keep the upstream order.
    return sorted(listings, key=lambda listing: listing.match_score or 0, reverse=True)


def get_mock_jobs() -> list[JobListing]:
    entries = get_matching_config().mock_jobs
    return [JobListing(**{**entry, "source": "Mock"}) for entry in entries]


class JobMatcher:
    def __init__(
        self,
        search_client: JobSearchClient,
        salary_formatter: SalaryFormatter | None = None,
        default_location: str | None = None,
    ):
        self._search_client = search_client
        self._salary_formatter = salary_formatter or RegionalSalaryFormatter()
        self._default_location = (default_location or settings.default_job_location).lower()

    def _to_listing(self, raw: RawListing, location: str) -> JobListing:
        salary = self._salary_formatter.format_range(raw.salary_min, raw.salary_max, location)
        estimated = False
        if salary is None:
            salary = self._salary_formatter.estimate(raw.title, location)
            estimated = salary is not None
        return JobListing(
            id=raw.id,
            title=raw.title,
            company=raw.company or "Company not listed",
            location=raw.location or location,
            description=raw.description,
            url=raw.url,
            salary=salary or self._salary_formatter.not_specified,
            salary_estimated=estimated,
            posted_date=raw.posted_date,
            category=raw.category or "General",
            source="Adzuna",
        )

    def fetch_listings(self, query: str, location: str, page: int) -> list[JobListing]:
        if not self._search_client.enabled:
            logger.warning("job_search_disabled reason=missing_credentials using=mock")
            return get_mock_jobs()
        try:
            raw_listings = self._search_client.search(query, location, page)
        except JobSearchUnavailable as exc:
            logger.warning("job_search_unavailable using=mock: %s", exc)
            return get_mock_jobs()
        except Exception as exc:  # noqa: BLE001 - mock catalog fallback is expected
            logger.error("job_search_failed using=mock: %s", exc)
            return get_mock_jobs()
        if not raw_listings:
            logger.info("job_search_empty query=%r using=mock", query)
            return get_mock_jobs()
        return [self._to_listing(raw, location) for raw in raw_listings]

    def match(self, record: ResumeRecord, location: str | None = None, page: int = 1) -> list[JobListing]:
        skills = extract_skills(record)
        query = build_search_query(skills)
        target = (location or self._default_location).strip().lower()
        logger.info(
            "job_match_started resume=%s skills=%s query=%r location=%s",
            record.id,
            len(skills.all_skills),
            query,
            target,
        )

        listings = self.fetch_listings(query, target, max(1, page))
        ranked = rank_listings([score_listing(listing, skills) for listing in listings])
        logger.info("job_match_done resume=%s listings=%s", record.id, len(ranked))
        return ranked


def require_analysis(record: ResumeRecord) -> ResumeRecord:
    if record.status != "completed" or record.analysis is None:
        raise AnalysisIncomplete("Resume analysis not complete. Please wait for analysis to finish.")
    return record
