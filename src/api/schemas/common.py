"""Error body shared by every failing endpoint."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body rendered by the exception handlers for any non-2xx response."""

    error: str
    error_code: str
    details: Any | None = None
