"""Campsite booking API router.

Reservation ids in paths are parsed here; a value that is not a UUID is a
client error (400), distinct from an unknown reservation (404).
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from campsite.api.deps import get_availability_service, get_reservation_service
from campsite.schemas.reservation import (
    AvailabilityResponse,
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    DeletionResponse,
    ErrorResponse,
)
from campsite.services.availability_service import AvailabilityService
from campsite.services.reservation_service import ReservationService, parse_external_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/booking/api/v1", tags=["bookings"])


@router.get(
    "/availability",
    response_model=AvailabilityResponse,
    summary="Query available dates to book the site",
)
async def query_availability(
    start: date = Query(..., description="First day of the window (clamped to tomorrow)"),
    end: date | None = Query(None, description="Last day of the window (clamped to one month ahead)"),
    service: AvailabilityService = Depends(get_availability_service),
) -> dict:
    """List of available dates between tomorrow and one month later."""
    available = await service.query(start, end)
    return {"available_dates": available}


@router.post(
    "/book",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Make a site booking",
    responses={
        400: {"model": ErrorResponse, "description": "Requested dates break a booking rule"},
        409: {"model": ErrorResponse, "description": "Requested dates are already booked"},
    },
)
async def book(
    body: BookingCreate,
    service: ReservationService = Depends(get_reservation_service),
) -> dict:
    """Book the campsite; the booking id is returned."""
    booking_id = await service.create(body.name, body.email, body.start, body.end)
    return {"booking_id": booking_id}


@router.patch(
    "/update/{booking_id}",
    response_model=BookingResponse,
    summary="Update a booking by providing the booking id",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id or dates"},
        404: {"model": ErrorResponse, "description": "The booking does not exist"},
        409: {"model": ErrorResponse, "description": "New dates are already booked"},
    },
)
async def update(
    booking_id: str,
    body: BookingUpdate,
    service: ReservationService = Depends(get_reservation_service),
) -> dict:
    external_id = parse_external_id(booking_id)
    logger.info("Update booking: %s", external_id)
    await service.update(
        external_id,
        guest_name=body.name,
        guest_contact=body.email,
        start=body.start,
        end=body.end,
    )
    return {"booking_id": external_id}


@router.delete(
    "/cancel/{booking_id}",
    response_model=DeletionResponse,
    summary="Cancel a booking by its booking id",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid id"},
        404: {"model": ErrorResponse, "description": "The booking does not exist"},
    },
)
async def cancel(
    booking_id: str,
    service: ReservationService = Depends(get_reservation_service),
) -> dict:
    external_id = parse_external_id(booking_id)
    logger.info("Delete booking: %s", external_id)
    await service.cancel(external_id)
    return {"booking_id": external_id}
