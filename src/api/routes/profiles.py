"""Profile API routes."""

import re

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import get_profile_service
from api.schemas.common import ErrorResponse
from api.schemas.profile import (
    ProfileListResponse,
    ProfileMutationResponse,
    ProfileResponse,
    ProfileWrite,
)
from core.config import settings
from core.exceptions import InvalidProfileIdError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


# Upper bound of the Integer primary key column
MAX_PROFILE_ID = 2**31 - 1

_UNSIGNED_INT = re.compile(r"[0-9]{1,10}")


def _parse_profile_id(raw: str) -> int:
    """Path IDs must be ASCII positive integers within the key column's range."""
    if not _UNSIGNED_INT.fullmatch(raw):
        raise InvalidProfileIdError(raw)
    value = int(raw)
    if not 0 < value <= MAX_PROFILE_ID:
        raise InvalidProfileIdError(raw)
    return value


def _positive_int(raw: str | None, default: int, maximum: int) -> int:
    """Lenient query parsing: unusable values fall back to ``default``, large ones clamp."""
    if raw is None:
        return default
    raw = raw.strip()
    if raw.isascii() and raw.isdigit() and len(raw) > 10:
        return maximum
    if not _UNSIGNED_INT.fullmatch(raw):
        return default
    value = int(raw)
    if value <= 0:
        return default
    return min(value, maximum)


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    page: str | None = None,
    limit: str | None = None,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get one page of profiles, newest first."""
    page_number = _positive_int(page, 1, MAX_PROFILE_ID)
    page_size = _positive_int(limit, settings.default_page_size, settings.max_page_size)
    result = await service.list_profiles(page_number, page_size)
    return ProfileListResponse(
        profiles=[ProfileResponse.model_validate(p) for p in result.items],
        current_page=result.page,
        total_pages=result.total_pages,
        total=result.total,
        has_next=result.has_next,
        has_prev=result.has_prev,
    )


@router.get(
    "/recent",
    response_model=ProfileResponse | None,
    summary="Get the most recent profile",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_recent_profile(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse | None:
    """Get the profile with the highest ID, or null when there are none."""
    profile = await service.get_latest()
    return ProfileResponse.model_validate(profile) if profile else None


@router.get(
    "/{profile_id}",
    response_model=ProfileResponse,
    summary="Get a profile",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid profile ID"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    profile_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get a single profile by ID."""
    profile = await service.get(_parse_profile_id(profile_id))
    return ProfileResponse.model_validate(profile)


@router.post(
    "",
    response_model=ProfileMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
    responses={
        201: {"description": "Profile created successfully"},
        400: {
            "model": ErrorResponse,
            "description": "Missing or invalid fields, undeliverable or duplicate email",
        },
        500: {
            "model": ErrorResponse,
            "description": "Email verification unavailable or storage failure",
        },
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileWrite,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileMutationResponse:
    """Create a profile. The email must pass the deliverability check."""
    profile = await service.create(body.model_dump())
    return ProfileMutationResponse(
        message="Profile created successfully",
        data=ProfileResponse.model_validate(profile),
    )


@router.put(
    "/{profile_id}",
    response_model=ProfileMutationResponse,
    summary="Replace a profile",
    responses={
        200: {"description": "Profile updated successfully"},
        400: {
            "model": ErrorResponse,
            "description": "Missing or invalid fields, undeliverable or duplicate email",
        },
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: str,
    body: ProfileWrite,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileMutationResponse:
    """Replace every editable field of a profile."""
    pid = _parse_profile_id(profile_id)
    profile = await service.update(pid, body.model_dump())
    return ProfileMutationResponse(
        message=f"Profile updated successfully for ID {pid}",
        data=ProfileResponse.model_validate(profile),
    )


@router.delete(
    "/{profile_id}",
    response_model=ProfileMutationResponse,
    summary="Delete a profile",
    responses={
        200: {"description": "Profile deleted successfully"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileMutationResponse:
    """Hard-delete a profile and return what it held."""
    pid = _parse_profile_id(profile_id)
    profile = await service.delete(pid)
    return ProfileMutationResponse(
        message=f"Profile deleted successfully for ID {pid}",
        data=ProfileResponse.model_validate(profile),
    )
