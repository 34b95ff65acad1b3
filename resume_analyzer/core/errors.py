from __future__ import annotations


class ResumeAnalyzerError(RuntimeError):
    code = "resume_analyzer_error"
    status_code = 500

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ExtractionError(ResumeAnalyzerError):
    """Raised before any record exists; nothing is persisted."""

    status_code = 400


class UnsupportedFormat(ExtractionError):
    code = "unsupported_format"


class ExtractionFailure(ExtractionError):
    code = "extraction_failed"


class TextTooShort(ExtractionError):
    code = "text_too_short"


class AnalysisError(ResumeAnalyzerError):
    """Raised by the generative backend stage; always one of the four kinds below."""

    status_code = 502


class AuthFailure(AnalysisError):
    code = "ai_auth_failed"


class QuotaExceeded(AnalysisError):
    code = "ai_quota_exceeded"
    status_code = 503


class MalformedResponse(AnalysisError):
    code = "ai_malformed_response"

    def __init__(self, message: str, *, excerpt: str = ""):
        super().__init__(message)
        self.excerpt = excerpt


class UnknownBackendError(AnalysisError):
    code = "ai_backend_error"


class JobSearchUnavailable(ResumeAnalyzerError):
    code = "job_search_unavailable"
    status_code = 503


class ResumeNotFound(ResumeAnalyzerError):
    code = "resume_not_found"
    status_code = 404


class ResumeNotOwned(ResumeAnalyzerError):
    code = "resume_not_owned"
    status_code = 403


class AnalysisIncomplete(ResumeAnalyzerError):
    code = "analysis_incomplete"
    status_code = 400


class InvalidTransition(ResumeAnalyzerError):
    code = "invalid_transition"
    status_code = 409


class UploadRejected(ResumeAnalyzerError):
    code = "upload_rejected"
    status_code = 400
