from __future__ import annotations

from resume_analyzer.core.errors import AnalysisError, AuthFailure, QuotaExceeded, UnknownBackendError

# A structured status code is authoritative; substring matching only runs
# for backends that expose none.
_AUTH_MARKERS = ("API key", "API_KEY_INVALID", "api_key", "PERMISSION_DENIED")
_QUOTA_MARKERS = ("quota", "RESOURCE_EXHAUSTED", "429", "rate limit", "Rate limit")
_AUTH_STATUS_CODES = {401, 403}
_QUOTA_STATUS_CODES = {429}


def _status_code(exc: BaseException) -> int | None:
    value = getattr(exc, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def is_auth_error(exc: BaseException) -> bool:
    if isinstance(exc, AuthFailure):
        return True
    status = _status_code(exc)
    if status is not None:
        return status in _AUTH_STATUS_CODES
    message = str(exc)
    return any(marker in message for marker in _AUTH_MARKERS)


def is_quota_error(exc: BaseException) -> bool:
    if isinstance(exc, QuotaExceeded):
        return True
    status = _status_code(exc)
    if status is not None:
        return status in _QUOTA_STATUS_CODES
    message = str(exc)
    return any(marker in message for marker in _QUOTA_MARKERS)


def classify_backend_error(exc: BaseException) -> AnalysisError:
    if isinstance(exc, AnalysisError):
        return exc
    if is_auth_error(exc):
        return AuthFailure("Invalid or missing Gemini API key. Check your .env file.")
    if is_quota_error(exc):
        return QuotaExceeded("Gemini API quota exceeded. Please try again later.")
    return UnknownBackendError(f"AI analysis failed: {exc}")
