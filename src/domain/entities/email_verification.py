"""Email deliverability verdict value object."""

from dataclasses import dataclass, field
from typing import Any, Optional

MIN_DELIVERABLE_SCORE = 0.6

REASON_INVALID_FORMAT = "Invalid format"
REASON_NO_MX = "MX record not found"
REASON_SMTP_FAILED = "SMTP check failed"
REASON_LOW_SCORE = "Low quality score"
REASON_VALID = "Valid"
REASON_UNAVAILABLE = "Validation service unavailable"


@dataclass(frozen=True)
class EmailVerificationVerdict:
    """Result of one deliverability check. Never persisted or cached."""

    email: str
    format_valid: bool = False
    mx_found: bool = False
    smtp_check: bool = False
    score: float = 0.0
    suggestion: Optional[str] = None
    additional_info: dict[str, Any] = field(default_factory=dict)
    service_unavailable: bool = False
    error_detail: Optional[str] = None

    @property
    def deliverable(self) -> bool:
        if self.service_unavailable:
            return False
        return (
            self.format_valid
            and self.mx_found
            and self.smtp_check
            and self.score >= MIN_DELIVERABLE_SCORE
        )

    @property
    def reason(self) -> str:
        """First failing check, in the order the service evaluates them."""
        if self.service_unavailable:
            return REASON_UNAVAILABLE
        if not self.format_valid:
            return REASON_INVALID_FORMAT
        if not self.mx_found:
            return REASON_NO_MX
        if not self.smtp_check:
            return REASON_SMTP_FAILED
        if self.score < MIN_DELIVERABLE_SCORE:
            return REASON_LOW_SCORE
        return REASON_VALID

    @property
    def result(self) -> str:
        return "deliverable" if self.deliverable else "undeliverable"

    @classmethod
    def invalid_format(cls, email: str) -> "EmailVerificationVerdict":
        return cls(email=email)

    @classmethod
    def unavailable(cls, email: str, detail: str) -> "EmailVerificationVerdict":
        return cls(email=email, service_unavailable=True, error_detail=detail)
