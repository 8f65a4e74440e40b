"""Shared API dependencies — single import point for all routers.

Services are built per request from the session factory and clock below, so
tests can swap either one with ``app.dependency_overrides``::

    app.dependency_overrides[get_session_factory] = lambda: test_factory
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campsite.database import async_session_factory
from campsite.services.availability_service import AvailabilityService
from campsite.services.calendar import BookingRules, Clock, today
from campsite.services.reservation_service import ReservationService


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session_factory


def get_clock() -> Clock:
    return today


def get_booking_rules() -> BookingRules:
    return BookingRules.from_settings()


def get_reservation_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    rules: BookingRules = Depends(get_booking_rules),
    clock: Clock = Depends(get_clock),
) -> ReservationService:
    return ReservationService(session_factory, rules=rules, clock=clock)


def get_availability_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    rules: BookingRules = Depends(get_booking_rules),
    clock: Clock = Depends(get_clock),
) -> AvailabilityService:
    return AvailabilityService(session_factory, rules=rules, clock=clock)


__all__ = [
    "get_availability_service",
    "get_booking_rules",
    "get_clock",
    "get_reservation_service",
    "get_session_factory",
]
