"""Email validation API route."""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_profile_service
from api.schemas.common import ErrorResponse
from api.schemas.email_validation import EmailValidationRequest, EmailValidationResponse
from core.exceptions import EmailServiceUnavailableError
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/api", tags=["email-validation"])


@router.post(
    "/validate-email",
    response_model=EmailValidationResponse,
    summary="Check email deliverability",
    responses={
        400: {"model": ErrorResponse, "description": "Email is required"},
        500: {"model": ErrorResponse, "description": "Service not configured or unavailable"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def validate_email(
    request: Request,
    body: EmailValidationRequest,
    service: ProfileService = Depends(get_profile_service),
) -> EmailValidationResponse:
    """Run the remote deliverability check used by the profile form."""
    verdict = await service.verify_email(body.email)
    if verdict.service_unavailable:
        raise EmailServiceUnavailableError(internal_detail=verdict.error_detail)
    return EmailValidationResponse.from_verdict(verdict)
