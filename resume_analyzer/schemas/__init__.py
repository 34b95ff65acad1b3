from .analysis import ActionableTip, AnalysisResult, KeywordBuckets
from .jobs import JobListing, JobMatchResponse, RawListing, ResumeUsed
from .resume import (
    CompletedState,
    FailedState,
    ProcessingState,
    ResumeListResponse,
    ResumeRecord,
    ResumeState,
    ResumeSummary,
)

__all__ = [
    "ActionableTip",
    "AnalysisResult",
    "KeywordBuckets",
    "JobListing",
    "JobMatchResponse",
    "RawListing",
    "ResumeUsed",
    "CompletedState",
    "FailedState",
    "ProcessingState",
    "ResumeListResponse",
    "ResumeRecord",
    "ResumeState",
    "ResumeSummary",
]
