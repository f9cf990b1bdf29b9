"""Rate limiting configuration using slowapi."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

# Writes each cost a paid email verification call
READ_LIMIT = "30/minute"
WRITE_LIMIT = "10/minute"

# Keyed by socket peer. Behind the hosting proxy, uvicorn's proxy headers
# support rewrites the peer from trusted forwarders only.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a 429 in the shared error body shape."""
    limit = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    return JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests, please slow down",
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "details": {"limit": str(limit)},
        },
    )
