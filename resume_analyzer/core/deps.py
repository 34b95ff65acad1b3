from __future__ import annotations

from functools import lru_cache

from fastapi import Header, HTTPException, status

from resume_analyzer.ai.factory import get_analysis_client
from resume_analyzer.core.config import settings
from resume_analyzer.core.record_store import ResumeStore, SQLiteResumeStore
from resume_analyzer.integrations.adzuna import AdzunaClient
from resume_analyzer.services.job_service import JobMatcher
from resume_analyzer.services.resume_service import ResumeService


@lru_cache(maxsize=1)
def get_resume_store() -> ResumeStore:
    return SQLiteResumeStore(settings.resume_db_path)


def get_resume_service() -> ResumeService:
    return ResumeService(store=get_resume_store(), analyzer=get_analysis_client())


def get_job_matcher() -> JobMatcher:
    return JobMatcher(search_client=AdzunaClient.from_settings(settings))


def get_owner_id(x_owner_id: str | None = Header(default=None)) -> str:
    # Identity is resolved by the auth layer in front of this service.
    owner_id = (x_owner_id or "").strip()
    if not owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Owner-Id header.",
        )
    return owner_id
