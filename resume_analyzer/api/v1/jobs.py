from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from resume_analyzer.api.v1.resumes import raise_http_error
from resume_analyzer.core.deps import get_job_matcher, get_owner_id, get_resume_service
from resume_analyzer.core.errors import ResumeAnalyzerError
from resume_analyzer.schemas.jobs import JobMatchResponse, ResumeUsed
from resume_analyzer.schemas.resume import ResumeRecord
from resume_analyzer.services.job_service import JobMatcher, require_analysis
from resume_analyzer.services.resume_service import ResumeService

router = APIRouter()


async def _match_response(
    record: ResumeRecord, matcher: JobMatcher, location: str | None, page: int
) -> JobMatchResponse:
    require_analysis(record)
    listings = await run_in_threadpool(matcher.match, record, location, page)
    return JobMatchResponse(
        count=len(listings),
        data=listings,
        resume_used=ResumeUsed(
            id=record.id,
            file_name=record.original_filename,
            upload_date=record.created_at,
        ),
    )


@router.get("/jobs/match", response_model=JobMatchResponse)
async def match_jobs_for_latest(
    location: str | None = Query(default=None, min_length=2, max_length=2),
    page: int = Query(default=1, ge=1, le=100),
    owner_id: str = Depends(get_owner_id),
    service: ResumeService = Depends(get_resume_service),
    matcher: JobMatcher = Depends(get_job_matcher),
):
    try:
        record = service.latest_for_owner(owner_id)
        return await _match_response(record, matcher, location, page)
    except ResumeAnalyzerError as exc:
        raise_http_error(exc)


@router.get("/jobs/match/{resume_id}", response_model=JobMatchResponse)
async def match_jobs_for_resume(
    resume_id: str,
    location: str | None = Query(default=None, min_length=2, max_length=2),
    page: int = Query(default=1, ge=1, le=100),
    owner_id: str = Depends(get_owner_id),
    service: ResumeService = Depends(get_resume_service),
    matcher: JobMatcher = Depends(get_job_matcher),
):
    try:
        record = service.get_for_owner(resume_id, owner_id)
        return await _match_response(record, matcher, location, page)
    except ResumeAnalyzerError as exc:
        raise_http_error(exc)
