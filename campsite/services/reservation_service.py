"""Reservation service — book, update and cancel campsite reservations.

Each operation runs in its own transaction. Overlaps are never pre-checked
with a read: the unique constraint on ``day_claims.day`` rejects the losing
writer and the transaction wrapper reports it as ``ConflictError``.
"""

import logging
import uuid
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campsite.exceptions import InvalidRangeError, NotFoundError
from campsite.models.reservation import DayClaim, Reservation
from campsite.repositories.calendar_store import CalendarStore, calendar_transaction
from campsite.services.calendar import BookingRules, Clock, date_range, today

logger = logging.getLogger(__name__)


def parse_external_id(raw: str) -> uuid.UUID:
    """Parse a client-supplied reservation id in its canonical hyphenated form.

    Case is ignored; braces, ``urn:uuid:`` prefixes and bare hex are rejected.
    """
    try:
        parsed = uuid.UUID(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidRangeError("identifier", "Invalid UUID") from exc
    if str(parsed) != raw.lower():
        raise InvalidRangeError("identifier", "Invalid UUID")
    return parsed


def expand_claims(reservation_id: int, start: date, end: date) -> list[DayClaim]:
    """One claim per day of the inclusive range."""
    return [DayClaim(reservation_id=reservation_id, day=day) for day in date_range(start, end)]


class ReservationService:
    """Creates, updates and cancels reservations against the calendar store."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        rules: BookingRules | None = None,
        clock: Clock = today,
    ) -> None:
        self.session_factory = session_factory
        self.rules = rules or BookingRules.from_settings()
        self.clock = clock

    async def create(self, guest_name: str, guest_contact: str, start: date, end: date) -> uuid.UUID:
        """Book ``[start, end]`` and return the new reservation's external id.

        Raises ``InvalidRangeError`` before touching the store, and
        ``ConflictError`` if any day is already claimed. A failed create
        leaves nothing behind.
        """
        self.rules.validate(start, end, self.clock())
        external_id = uuid.uuid4()

        async with calendar_transaction(self.session_factory) as store:
            reservation = await store.insert_reservation(
                Reservation(
                    external_id=external_id,
                    guest_name=guest_name,
                    guest_contact=guest_contact,
                    start_date=start,
                    end_date=end,
                )
            )
            await store.insert_day_claims(expand_claims(reservation.id, start, end))

        logger.info("Booked reservation %s from %s to %s", external_id, start, end)
        return external_id

    async def update(
        self,
        external_id: uuid.UUID,
        guest_name: str | None = None,
        guest_contact: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> uuid.UUID:
        """Change contact details and/or dates of an existing reservation.

        An omitted bound falls back to the reservation's current committed
        bound. When the effective range differs from the current one, all
        claims are deleted and the new range is claimed in the same
        transaction, so a conflict leaves the old dates untouched.
        """
        if start is not None and end is not None:
            self.rules.validate(start, end, self.clock())

        async with calendar_transaction(self.session_factory) as store:
            reservation = await self._get_reservation(store, external_id)

            if guest_name is not None:
                reservation.guest_name = guest_name
            if guest_contact is not None:
                reservation.guest_contact = guest_contact

            if start is not None or end is not None:
                await self._replace_dates(store, reservation, start, end)

        logger.info("Updated reservation %s", external_id)
        return external_id

    async def cancel(self, external_id: uuid.UUID) -> uuid.UUID:
        """Delete the reservation and release all of its days."""
        async with calendar_transaction(self.session_factory) as store:
            reservation = await self._get_reservation(store, external_id)
            await store.delete_day_claims_by_reservation(reservation.id)
            await store.delete_reservation(reservation.id)

        logger.info("Cancelled reservation %s", external_id)
        return external_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _get_reservation(store: CalendarStore, external_id: uuid.UUID) -> Reservation:
        # Row lock serializes concurrent update/cancel of the same reservation
        reservation = await store.find_reservation_by_external_id(external_id, for_update=True)
        if reservation is None:
            raise NotFoundError("Booking is not found")
        return reservation

    async def _replace_dates(
        self,
        store: CalendarStore,
        reservation: Reservation,
        start: date | None,
        end: date | None,
    ) -> None:
        claims = await store.find_day_claims_by_reservation(reservation.id)
        if claims:
            current_start, current_end = claims[0].day, claims[-1].day
        else:
            current_start, current_end = reservation.start_date, reservation.end_date

        new_start = start if start is not None else current_start
        new_end = end if end is not None else current_end
        self.rules.validate(new_start, new_end, self.clock())

        if (new_start, new_end) == (current_start, current_end):
            return

        await store.delete_day_claims_by_reservation(reservation.id)
        await store.insert_day_claims(expand_claims(reservation.id, new_start, new_end))
        reservation.start_date = new_start
        reservation.end_date = new_end
        logger.info(
            "Moved reservation %s from %s..%s to %s..%s",
            reservation.external_id,
            current_start,
            current_end,
            new_start,
            new_end,
        )
