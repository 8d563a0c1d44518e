# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where possible, a hint on
# how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError


class ProjectHubException(Exception):
    """
    Base exception for the ProjectHub API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PROJECTHUB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Lookup Exceptions
# =============================================================================

class ResourceNotFoundError(ProjectHubException):
    """Raised when a Project, Task or User id doesn't exist."""

    def __init__(self, resource: str, record_id: int | str):
        super().__init__(
            message=f"{resource} not found: {record_id}",
            code=f"{resource.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} id is correct",
            details={"id": record_id}
        )


# =============================================================================
# Validation Exceptions
# =============================================================================

class FormValidationError(ProjectHubException):
    """
    Raised when submitted fields fail validation.

    `errors` maps each field name to a list of messages, so clients can show
    them next to the matching form input.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        super().__init__(
            message="The given data was invalid",
            code="VALIDATION_ERROR",
            status_code=422,
            details={"errors": errors}
        )

    @classmethod
    def from_pydantic(cls, exc: ValidationError | RequestValidationError) -> "FormValidationError":
        """Group pydantic error entries by their last location component."""
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
            field = loc[-1] if loc else "__root__"
            errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
        return cls(errors)


class InvalidSortError(ProjectHubException):
    """Raised when sort_field or sort_direction is not accepted for a listing."""

    def __init__(self, param: str, value: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid {param}: {value}",
            code="INVALID_SORT",
            status_code=422,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"errors": {param: [f"The selected {param} is invalid."]}, "allowed": allowed}
        )


class InvalidCredentialsError(ProjectHubException):
    """Raised when a login attempt fails."""

    def __init__(self):
        super().__init__(
            message="These credentials do not match our records",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Check the email and password and try again",
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidImageError(ProjectHubException):
    """Raised when an uploaded file is not an accepted image."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"The image must be an image file: {filename}",
            code="INVALID_IMAGE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(ProjectHubException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(ProjectHubException):
    """Raised when file upload to storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"path": path, "error": error}
        )


class StorageDeleteError(ProjectHubException):
    """Raised when removing a stored image directory fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to delete files from storage: {error}",
            code="STORAGE_DELETE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"path": path, "error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def projecthub_exception_handler(
    request: Request,
    exc: ProjectHubException
) -> JSONResponse:
    """
    Convert ProjectHubException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Renders them in the same per-field shape as FormValidationError.
    """
    error = FormValidationError.from_pydantic(exc)
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )
