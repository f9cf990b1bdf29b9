"""Pydantic schemas for the email validation endpoint."""

from typing import Any

from pydantic import BaseModel, Field

from domain.entities.email_verification import EmailVerificationVerdict


class EmailValidationRequest(BaseModel):
    """Schema for an email validation request."""

    email: str | None = None


class EmailCheckDetails(BaseModel):
    """Individual checks reported by the verification service."""

    format_valid: bool
    mx_found: bool
    smtp_check: bool
    score: float


class EmailValidationResponse(BaseModel):
    """Schema for an email validation verdict."""

    is_valid: bool = Field(serialization_alias="isValid")
    details: EmailCheckDetails
    suggestion: str | None = None
    result: str
    reason: str
    additional_info: dict[str, Any] = Field(
        default_factory=dict, serialization_alias="additionalInfo"
    )

    @classmethod
    def from_verdict(cls, verdict: EmailVerificationVerdict) -> "EmailValidationResponse":
        return cls(
            is_valid=verdict.deliverable,
            details=EmailCheckDetails(
                format_valid=verdict.format_valid,
                mx_found=verdict.mx_found,
                smtp_check=verdict.smtp_check,
                score=verdict.score,
            ),
            suggestion=verdict.suggestion,
            result=verdict.result,
            reason=verdict.reason,
            additional_info=verdict.additional_info,
        )
