from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from resume_analyzer.core.config import settings
from resume_analyzer.core.deps import get_owner_id, get_resume_service
from resume_analyzer.core.errors import ResumeAnalyzerError
from resume_analyzer.schemas.resume import (
    ResumeDeleteResponse,
    ResumeListResponse,
    ResumeRecord,
    ResumeSummary,
)
from resume_analyzer.services.resume_service import AnalysisFailed, ResumeService

router = APIRouter()

_READ_CHUNK_BYTES = 1024 * 64


def raise_http_error(exc: ResumeAnalyzerError) -> NoReturn:
    if isinstance(exc, AnalysisFailed):
        raise HTTPException(
            status_code=exc.status_code,
            detail={
                "message": "AI analysis failed. Please try again.",
                "error": str(exc.cause),
                "code": exc.code,
                "resume_id": exc.record.id,
            },
        ) from exc
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


async def _read_upload(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/resumes", response_model=ResumeRecord, status_code=status.HTTP_201_CREATED)
async def upload_resume(
    file: UploadFile = File(...),
    job_description: str | None = Form(default=None),
    owner_id: str = Depends(get_owner_id),
    service: ResumeService = Depends(get_resume_service),
):
    filename = file.filename or "uploaded-file"
    content = await _read_upload(file)
    try:
        path = service.save_upload(content=content, original_filename=filename, owner_id=owner_id)
        return await run_in_threadpool(
            lambda: service.upload(
                owner_id=owner_id,
                original_filename=filename,
                file_path=path,
                job_description=job_description,
            )
        )
    except ResumeAnalyzerError as exc:
        raise_http_error(exc)


@router.get("/resumes", response_model=ResumeListResponse)
async def list_resumes(
    owner_id: str = Depends(get_owner_id),
    service: ResumeService = Depends(get_resume_service),
):
    records = service.list_for_owner(owner_id)
    return ResumeListResponse(
        count=len(records),
        data=[ResumeSummary.from_record(record) for record in records],
    )


@router.get("/resumes/{resume_id}", response_model=ResumeRecord)
async def get_resume(
    resume_id: str,
    owner_id: str = Depends(get_owner_id),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        return service.get_for_owner(resume_id, owner_id)
    except ResumeAnalyzerError as exc:
        raise_http_error(exc)


@router.delete("/resumes/{resume_id}", response_model=ResumeDeleteResponse)
async def delete_resume(
    resume_id: str,
    owner_id: str = Depends(get_owner_id),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        deleted = service.delete_for_owner(resume_id, owner_id)
    except ResumeAnalyzerError as exc:
        raise_http_error(exc)
    return ResumeDeleteResponse(deleted=deleted, id=resume_id)
