"""Pydantic v2 request/response schemas for reservation endpoints."""

import uuid
from datetime import date

from pydantic import BaseModel, Field

# Same loose shape the booking form has always accepted
EMAIL_PATTERN = r"^(.+)@(\S+)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for booking the campsite."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    start: date
    end: date


class BookingUpdate(BaseModel):
    """Schema for partially updating a booking. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    start: date | None = None
    end: date | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Identifier of the booking that was created or updated."""

    booking_id: uuid.UUID


class DeletionResponse(BaseModel):
    """Identifier of the booking that was cancelled."""

    booking_id: uuid.UUID


class AvailabilityResponse(BaseModel):
    """Open days in the queried window, ascending."""

    available_dates: list[date]


class ErrorResponse(BaseModel):
    detail: str
    error: str
