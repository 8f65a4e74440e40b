"""Calendar store — persistence of reservations and their day claims.

A ``CalendarStore`` is bound to one ``AsyncSession`` that is already inside a
transaction. Open one with :func:`calendar_transaction`, which owns the
commit/rollback and translates driver failures into the reservation error
taxonomy::

    async with calendar_transaction(async_session_factory) as store:
        reservation = await store.find_reservation_by_external_id(external_id)
        ...
"""

import logging
import uuid
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campsite.exceptions import ConflictError, TransientError
from campsite.models.reservation import DayClaim, Reservation

logger = logging.getLogger(__name__)


class CalendarStore:
    """Repository over the ``reservations`` and ``day_claims`` tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    async def insert_reservation(self, reservation: Reservation) -> Reservation:
        """Insert a reservation and return it with its store-assigned id."""
        self.session.add(reservation)
        await self.session.flush()
        return reservation

    async def find_reservation_by_external_id(
        self, external_id: uuid.UUID, for_update: bool = False
    ) -> Reservation | None:
        """Look up a reservation; ``for_update`` locks its row until the transaction ends."""
        query = select(Reservation).where(Reservation.external_id == external_id)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def delete_reservation(self, reservation_id: int) -> None:
        await self.session.execute(delete(Reservation).where(Reservation.id == reservation_id))

    # ------------------------------------------------------------------
    # Day claims
    # ------------------------------------------------------------------

    async def insert_day_claims(self, claims: Sequence[DayClaim]) -> None:
        """Insert all claims in one flush.

        A day that is already claimed makes the flush fail with
        ``IntegrityError``; the enclosing transaction then rolls back every
        claim in the batch.
        """
        self.session.add_all(claims)
        await self.session.flush()

    async def find_day_claims_in_range(self, start: date, end: date) -> list[DayClaim]:
        result = await self.session.execute(
            select(DayClaim)
            .where(DayClaim.day >= start, DayClaim.day <= end)
            .order_by(DayClaim.day.asc())
        )
        return list(result.scalars().all())

    async def find_day_claims_by_reservation(self, reservation_id: int) -> list[DayClaim]:
        result = await self.session.execute(
            select(DayClaim)
            .where(DayClaim.reservation_id == reservation_id)
            .order_by(DayClaim.day.asc())
        )
        return list(result.scalars().all())

    async def delete_day_claims_by_reservation(self, reservation_id: int) -> None:
        await self.session.execute(delete(DayClaim).where(DayClaim.reservation_id == reservation_id))


@asynccontextmanager
async def calendar_transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[CalendarStore]:
    """Run the block in one transaction on a fresh session.

    Commits when the block exits normally and rolls back on any exception.
    A uniqueness violation surfaces as ``ConflictError``; connection loss,
    lock timeouts and other infrastructure faults surface as ``TransientError``.
    """
    try:
        async with session_factory() as session:
            async with session.begin():
                yield CalendarStore(session)
    except IntegrityError as exc:
        logger.warning("Day claim collision, transaction rolled back: %s", exc.orig)
        raise ConflictError("Requested dates conflict with an existing reservation") from exc
    except (OperationalError, InterfaceError, PoolTimeoutError, OSError) as exc:
        # OSError covers refused connections and TimeoutError raised by the driver
        logger.error("Calendar store unavailable: %s", exc)
        raise TransientError("Calendar store is temporarily unavailable, please retry") from exc
    except DBAPIError as exc:
        if not exc.connection_invalidated:
            raise
        logger.error("Calendar store connection lost: %s", exc)
        raise TransientError("Calendar store is temporarily unavailable, please retry") from exc
