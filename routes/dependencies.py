"""
Shared route helpers: owner resolution and error rendering.
"""

from typing import Optional

from fastapi import Header
from fastapi.responses import JSONResponse
import structlog

from exceptions import AppError, AuthenticationError

logger = structlog.get_logger(__name__)


async def get_owner(
    x_owner_id: Optional[str] = Header(None, description="Owner whose data is operated on"),
) -> str:
    """
    Resolve the owner for a request.

    The owner is passed explicitly by the caller and threaded into every
    service call.

    Raises:
        AuthenticationError: If the header is missing or blank
    """
    owner = (x_owner_id or "").strip()
    if not owner:
        raise AuthenticationError()
    return owner


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )
