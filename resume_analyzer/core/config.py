from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    gemini_api_key: str | None
    gemini_base_url: str
    ai_primary_model: str
    ai_fallback_model: str
    ai_temperature: float
    ai_max_output_tokens: int
    ai_timeout_s: float
    ai_max_retries: int
    adzuna_app_id: str | None
    adzuna_api_key: str | None
    adzuna_base_url: str
    job_search_timeout_s: float
    job_search_results_per_page: int
    default_job_location: str
    salary_region: str
    resume_db_path: str
    upload_dir: str
    max_upload_bytes: int


def load_settings() -> Settings:
    return Settings(
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        gemini_api_key=_get_env("GEMINI_API_KEY"),
        gemini_base_url=_get_env("GEMINI_BASE_URL", GEMINI_OPENAI_BASE_URL) or GEMINI_OPENAI_BASE_URL,
        ai_primary_model=(_get_env("AI_PRIMARY_MODEL", "gemini-2.0-flash") or "gemini-2.0-flash").strip(),
        ai_fallback_model=(_get_env("AI_FALLBACK_MODEL", "gemma-3-27b-it") or "gemma-3-27b-it").strip(),
        ai_temperature=_get_env_float("AI_TEMPERATURE", 0.7),
        ai_max_output_tokens=_get_env_int("AI_MAX_OUTPUT_TOKENS", 8192),
        ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 60.0),
        # The tier switch is the only retry; the SDK must not add its own.
        ai_max_retries=_get_env_int("AI_MAX_RETRIES", 0),
        adzuna_app_id=_get_env("ADZUNA_APP_ID"),
        adzuna_api_key=_get_env("ADZUNA_API_KEY"),
        adzuna_base_url=_get_env("ADZUNA_BASE_URL", "https://api.adzuna.com/v1/api") or "https://api.adzuna.com/v1/api",
        job_search_timeout_s=_get_env_float("JOB_SEARCH_TIMEOUT_S", 10.0),
        job_search_results_per_page=_get_env_int("JOB_SEARCH_RESULTS_PER_PAGE", 10),
        default_job_location=(_get_env("DEFAULT_JOB_LOCATION", "us") or "us").strip().lower(),
        salary_region=(_get_env("SALARY_REGION", "in") or "in").strip().lower(),
        resume_db_path=_get_env("RESUME_DB_PATH", "data/resumes.db") or "data/resumes.db",
        upload_dir=_get_env("UPLOAD_DIR", "uploads") or "uploads",
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
    )


settings = load_settings()

if settings.ai_max_output_tokens <= 0:
    raise RuntimeError("AI_MAX_OUTPUT_TOKENS must be a positive integer.")
