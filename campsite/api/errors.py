"""Translate reservation errors into JSON HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from campsite.config import settings
from campsite.exceptions import (
    ConflictError,
    InvalidRangeError,
    NotFoundError,
    ReservationError,
    TransientError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = "1"


def status_for(exc: ReservationError) -> int:
    """HTTP status code reported for an error kind."""
    if isinstance(exc, InvalidRangeError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return settings.conflict_status_code
    if isinstance(exc, TransientError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def reservation_error_handler(request: Request, exc: ReservationError) -> JSONResponse:
    status_code = status_for(exc)
    headers = None
    if isinstance(exc, TransientError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        headers = {"Retry-After": RETRY_AFTER_SECONDS}
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.kind, exc.message)

    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.kind},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReservationError, reservation_error_handler)  # type: ignore[arg-type]
