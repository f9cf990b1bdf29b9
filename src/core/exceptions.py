"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PROFILE_ID = "INVALID_PROFILE_ID"
    EMAIL_UNDELIVERABLE = "EMAIL_UNDELIVERABLE"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    EMAIL_SERVICE_UNAVAILABLE = "EMAIL_SERVICE_UNAVAILABLE"
    EMAIL_SERVICE_NOT_CONFIGURED = "EMAIL_SERVICE_NOT_CONFIGURED"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
        internal_detail: str | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        # Never shown to clients in production
        self.internal_detail = internal_detail
        super().__init__(self.message)


class ValidationError(AppException):
    """Client-correctable input problem."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: dict[str, str] | None = None,
        details: Any | None = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        self.field_errors = field_errors or {}
        if details is None and self.field_errors:
            details = {"fields": self.field_errors}
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class InvalidProfileIdError(AppException):
    """Path parameter is not a positive integer."""

    def __init__(self, raw_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_PROFILE_ID,
            message="Invalid profile ID",
            status_code=400,
            details={"profile_id": raw_id},
        )


class EmailUndeliverableError(ValidationError):
    """The verification service judged the address unable to receive mail."""

    def __init__(self, email: str, reason: str, suggestion: str | None = None) -> None:
        message = f"Email address is not deliverable: {reason}"
        if suggestion:
            message += f" (Did you mean: {suggestion}?)"
        super().__init__(
            message=message,
            field_errors={"email": reason},
            details={"email": email, "reason": reason, "suggestion": suggestion},
            error_code=ErrorCode.EMAIL_UNDELIVERABLE,
        )
        self.reason = reason
        self.suggestion = suggestion


class DuplicateEmailError(AppException):
    """Another profile already uses this email."""

    def __init__(self, email: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_EMAIL,
            message="Email already exists",
            status_code=400,
            details={"email": email} if email else None,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: int) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
            status_code=404,
            details={"profile_id": profile_id},
        )


class EmailServiceUnavailableError(AppException):
    """Transient failure talking to the verification service; safe to retry later."""

    def __init__(self, internal_detail: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_SERVICE_UNAVAILABLE,
            message=(
                "Email validation service is currently unavailable. "
                "Please try again later."
            ),
            status_code=500,
            internal_detail=internal_detail,
        )


class EmailServiceNotConfiguredError(AppException):
    """The verification service credential is missing."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_SERVICE_NOT_CONFIGURED,
            message="Email validation service not configured",
            status_code=500,
        )


class StorageError(AppException):
    """Persistence failure other than a uniqueness violation."""

    def __init__(
        self,
        message: str = "A database error occurred",
        internal_detail: str | None = None,
    ) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=500,
            internal_detail=internal_detail,
        )
