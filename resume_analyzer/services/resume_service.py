from __future__ import annotations

import logging
import os
import re
import uuid
from pathlib import Path
from typing import Callable, Protocol

from resume_analyzer.core.config import settings
from resume_analyzer.core.errors import (
    AnalysisError,
    ResumeAnalyzerError,
    ResumeNotFound,
    ResumeNotOwned,
    UnknownBackendError,
    UnsupportedFormat,
    UploadRejected,
)
from resume_analyzer.core.record_store import ResumeStore
from resume_analyzer.parsing.parse import SUPPORTED_EXTENSIONS, extract_text, resolve_extension
from resume_analyzer.schemas.analysis import AnalysisResult
from resume_analyzer.schemas.resume import ResumeRecord

logger = logging.getLogger(__name__)

_OWNER_SAFE_RE = re.compile(r"[^A-Za-z0-9_-]+")


class Analyzer(Protocol):
    def analyze(self, resume_text: str, job_description: str | None = None) -> AnalysisResult: ...


class AnalysisFailed(ResumeAnalyzerError):
    """The record exists and is now ``failed``; ``cause`` holds the original error."""

    def __init__(self, record: ResumeRecord, cause: AnalysisError):
        super().__init__(str(cause), code=cause.code)
        self.record = record
        self.cause = cause
        self.status_code = cause.status_code


def remove_temp_file(file_path: str | Path | None) -> None:
    if not file_path:
        return
    try:
        os.unlink(file_path)
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning("temp_file_cleanup_failed path=%s: %s", file_path, exc)


class ResumeService:
    def __init__(
        self,
        store: ResumeStore,
        analyzer: Analyzer,
        extractor: Callable[[str | Path, str | None], str] = extract_text,
        upload_dir: str | None = None,
        max_upload_bytes: int | None = None,
    ):
        self._store = store
        self._analyzer = analyzer
        self._extractor = extractor
        self._upload_dir = Path(upload_dir or settings.upload_dir)
        self._max_upload_bytes = max_upload_bytes or settings.max_upload_bytes

    def save_upload(self, *, content: bytes, original_filename: str, owner_id: str) -> Path:
        extension = resolve_extension(original_filename)
        if extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormat(
                f"Unsupported file format '{extension or 'unknown'}'. Only PDF and DOCX are allowed."
            )
        if not content:
            raise UploadRejected("Please upload a resume file.")
        if len(content) > self._max_upload_bytes:
            raise UploadRejected(
                f"File too large. Maximum allowed size is {self._max_upload_bytes // (1024 * 1024)} MB."
            )

        self._upload_dir.mkdir(parents=True, exist_ok=True)
        owner_token = _OWNER_SAFE_RE.sub("", owner_id)[:40] or "anon"
        path = self._upload_dir / f"{owner_token}_{uuid.uuid4().hex}{extension}"
        path.write_bytes(content)
        return path

    def upload(
        self,
        *,
        owner_id: str,
        original_filename: str,
        file_path: str | Path,
        job_description: str | None = None,
    ) -> ResumeRecord:
        """Extract, record and analyze one upload.

        Extraction errors propagate before any record exists. Analysis errors
        leave a ``failed`` record behind and surface as ``AnalysisFailed``.
        The backing file is removed on every path.
        """
        jd = (job_description or "").strip() or None
        try:
            logger.info("resume_upload_parsing file=%s", original_filename)
            text = self._extractor(file_path, resolve_extension(original_filename) or None)
            record = self._store.create(owner_id, original_filename, text, jd)
            return self._analyze(record)
        finally:
            remove_temp_file(file_path)

    def _analyze(self, record: ResumeRecord) -> ResumeRecord:
        logger.info("resume_analysis_started id=%s chars=%s", record.id, len(record.extracted_text))
        try:
            analysis = self._analyzer.analyze(record.extracted_text, record.job_description)
        except AnalysisError as exc:
            failed = self._mark_failed(record, exc)
            raise AnalysisFailed(failed, exc) from exc
        except Exception as exc:
            cause = UnknownBackendError(f"AI analysis failed: {exc}")
            self._mark_failed(record, cause)
            raise

        completed = record.complete(analysis)
        try:
            self._store.update(completed)
        except Exception as exc:
            logger.error("resume_analysis_persist_failed id=%s: %s", record.id, exc)
            try:
                self._mark_failed(record, UnknownBackendError(f"Failed to save analysis: {exc}"))
            except Exception as mark_exc:  # noqa: BLE001 - original store error is re-raised below
                logger.error("resume_mark_failed_error id=%s: %s", record.id, mark_exc)
            raise
        logger.info("resume_analysis_completed id=%s score=%s", completed.id, analysis.match_score)
        return completed

    def _mark_failed(self, record: ResumeRecord, exc: AnalysisError) -> ResumeRecord:
        failed = record.fail(error_code=exc.code, error_message=str(exc))
        self._store.update(failed)
        logger.warning("resume_analysis_failed id=%s code=%s", record.id, exc.code)
        return failed

    def get_for_owner(self, record_id: str, owner_id: str) -> ResumeRecord:
        record = self._store.find_by_id(record_id)
        if record is None:
            raise ResumeNotFound("Resume not found.")
        if record.owner_id != owner_id:
            raise ResumeNotOwned("Not authorized to access this resume.")
        return record

    def list_for_owner(self, owner_id: str) -> list[ResumeRecord]:
        return self._store.list_by_owner(owner_id)

    def latest_for_owner(self, owner_id: str) -> ResumeRecord:
        record = self._store.find_latest_by_owner(owner_id)
        if record is None:
            raise ResumeNotFound("No resume found. Please upload a resume first.")
        return record

    def delete_for_owner(self, record_id: str, owner_id: str) -> bool:
        record = self.get_for_owner(record_id, owner_id)
        deleted = self._store.delete(record.id)
        if deleted:
            logger.info("resume_deleted id=%s", record.id)
        return deleted
