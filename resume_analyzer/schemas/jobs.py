from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class RawListing(BaseModel):
    """Source-neutral listing as returned by a job-search backend, before scoring."""

    id: str | None = None
    title: str = ""
    company: str | None = None
    location: str | None = None
    description: str = ""
    url: str = ""
    salary_min: float | None = None
    salary_max: float | None = None
    posted_date: str | None = None
    category: str | None = None


class JobListing(BaseModel):
    id: str | None = None
    title: str
    company: str
    location: str
    description: str = ""
    url: str = ""
    salary: str | None = None
    salary_estimated: bool = False
    posted_date: str | None = None
    category: str = "General"
    source: str
    match_score: int | None = Field(default=None, ge=0, le=100)
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)


class ResumeUsed(BaseModel):
    id: str
    file_name: str
    upload_date: datetime


class JobMatchResponse(BaseModel):
    count: int
    data: list[JobListing] = Field(default_factory=list)
    resume_used: ResumeUsed
