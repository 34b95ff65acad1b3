from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from resume_analyzer.core.errors import InvalidTransition

from .analysis import AnalysisResult

MIN_EXTRACTED_TEXT_LENGTH = 50

ResumeStatus = Literal["processing", "completed", "failed"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProcessingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["processing"] = "processing"


class CompletedState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["completed"] = "completed"
    analysis: AnalysisResult


class FailedState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    error_code: str
    error_message: str
    stale_analysis: AnalysisResult | None = None


ResumeState = Annotated[
    Union[ProcessingState, CompletedState, FailedState],
    Field(discriminator="status"),
]


class ResumeRecord(BaseModel):
    """One analysis attempt.

    ``state`` is the only place the lifecycle lives: a completed record always
    carries its analysis, and only ``processing`` records may transition.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    original_filename: str
    extracted_text: str = Field(min_length=MIN_EXTRACTED_TEXT_LENGTH)
    job_description: str | None = None
    state: ResumeState = Field(default_factory=ProcessingState)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status(self) -> ResumeStatus:
        return self.state.status

    @property
    def analysis(self) -> AnalysisResult | None:
        if isinstance(self.state, CompletedState):
            return self.state.analysis
        if isinstance(self.state, FailedState):
            return self.state.stale_analysis
        return None

    @property
    def is_terminal(self) -> bool:
        return self.status != "processing"

    def _require_processing(self, target: str) -> None:
        if self.is_terminal:
            raise InvalidTransition(
                f"Resume '{self.id}' is already {self.status}; cannot move to {target}."
            )

    def complete(self, analysis: AnalysisResult) -> "ResumeRecord":
        self._require_processing("completed")
        return self.model_copy(
            update={"state": CompletedState(analysis=analysis), "updated_at": utc_now()}
        )

    def fail(self, *, error_code: str, error_message: str) -> "ResumeRecord":
        self._require_processing("failed")
        return self.model_copy(
            update={
                "state": FailedState(
                    error_code=error_code,
                    error_message=error_message,
                    stale_analysis=self.analysis,
                ),
                "updated_at": utc_now(),
            }
        )


class ResumeSummary(BaseModel):
    id: str
    original_filename: str
    job_description: str | None = None
    status: ResumeStatus
    match_score: int | None = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: ResumeRecord) -> "ResumeSummary":
        analysis = record.analysis
        return cls(
            id=record.id,
            original_filename=record.original_filename,
            job_description=record.job_description,
            status=record.status,
            match_score=analysis.match_score if analysis else None,
            created_at=record.created_at,
        )


class ResumeListResponse(BaseModel):
    count: int
    data: list[ResumeSummary] = Field(default_factory=list)


class ResumeDeleteResponse(BaseModel):
    deleted: bool
    id: str
