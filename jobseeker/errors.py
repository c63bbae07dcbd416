"""
Typed errors for the JobSeeker backend.

Every failure the API can report is a ServiceError subclass carrying a stable
error code, an HTTP status and a retryable flag. Lower layers raise these and
let them propagate; the API turns them into the error envelope.
"""

from typing import Any


class ServiceError(Exception):
    """Base exception for all JobSeeker errors."""

    code = "INTERNAL_ERROR"
    status_code = 500
    retryable = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        retryable: bool | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if retryable is not None:
            self.retryable = retryable
        if status_code is not None:
            self.status_code = status_code

    @property
    def http_status(self) -> int:
        """503 for anything the caller may retry, otherwise the error's own status."""
        return 503 if self.retryable else self.status_code

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "retryable": self.retryable}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


# =============================================================================
# Input validation
# =============================================================================


class NoFile(ServiceError):
    code = "NO_FILE"
    status_code = 400


class FileTooLarge(ServiceError):
    """Upload exceeds the size ceiling."""

    code = "FILE_TOO_LARGE"
    status_code = 413

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(f"File size ({size} bytes) exceeds {max_size // (1024 * 1024)}MB limit")
        self.size = size
        self.max_size = max_size


class UnsupportedFileType(ServiceError):
    code = "UNSUPPORTED_FILE_TYPE"
    status_code = 415

    def __init__(self, mime_type: str | None) -> None:
        super().__init__(f"Invalid file type '{mime_type}'. Allowed: PDF, DOC, DOCX, TXT")
        self.mime_type = mime_type


# =============================================================================
# Lookup and authorization
# =============================================================================


class NotFound(ServiceError):
    code = "NOT_FOUND"
    status_code = 404


class Forbidden(ServiceError):
    code = "FORBIDDEN"
    status_code = 403


class Unauthorized(ServiceError):
    code = "UNAUTHORIZED"
    status_code = 401


class AuthError(ServiceError):
    """Registration, verification and login failures."""

    status_code = 400

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        super().__init__(message, code=code, status_code=status_code)


# =============================================================================
# Extraction and analysis
# =============================================================================


class UnsupportedType(ServiceError):
    """Extractor has no strategy for this MIME type."""

    code = "UNSUPPORTED_TYPE"
    status_code = 422


class ExtractionFailed(ServiceError):
    code = "EXTRACTION_FAILED"
    status_code = 422


class InvalidInput(ServiceError):
    """Resume text is empty or too short to analyze."""

    code = "INVALID_INPUT"
    status_code = 422


class InvalidResponse(ServiceError):
    """Model output is not a valid analysis. A fresh generation may succeed."""

    code = "INVALID_RESPONSE"
    retryable = True


class AnalysisFailed(ServiceError):
    """Remote analysis call failed; retryable depends on the cause."""

    code = "ANALYSIS_FAILED"


class NotConfigured(ServiceError):
    code = "API_NOT_CONFIGURED"
    status_code = 503


# =============================================================================
# Background pipeline
# =============================================================================


class PipelineAlreadyRunning(ServiceError):
    code = "PIPELINE_RUNNING"
    status_code = 409

    def __init__(self) -> None:
        super().__init__("Pipeline is already running")


class EmailDeliveryError(ServiceError):
    code = "EMAIL_DELIVERY_FAILED"
    status_code = 502
