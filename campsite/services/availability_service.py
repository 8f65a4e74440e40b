"""Availability service — open campsite days within the booking horizon."""

import logging
from collections.abc import Iterable
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campsite.exceptions import InvalidRangeError
from campsite.repositories.calendar_store import calendar_transaction
from campsite.services.calendar import BookingRules, Clock, date_range, today

logger = logging.getLogger(__name__)


def open_days(start: date, end: date, claimed: Iterable[date]) -> list[date]:
    """Days of ``[start, end]`` that are not in ``claimed``, ascending."""
    taken = set(claimed)
    return [day for day in date_range(start, end) if day not in taken]


class AvailabilityService:
    """Read-only projection of committed day claims onto open dates."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        rules: BookingRules | None = None,
        clock: Clock = today,
    ) -> None:
        self.session_factory = session_factory
        self.rules = rules or BookingRules.from_settings()
        self.clock = clock

    def clamp(self, start: date, end: date | None) -> tuple[date, date]:
        """Clamp a requested window into ``[tomorrow, today + horizon]``."""
        current = self.clock()
        latest_end = self.rules.latest_end(current)
        effective_start = max(start, self.rules.earliest_start(current))
        effective_end = end if end is not None and end <= latest_end else latest_end
        if effective_start > effective_end:
            raise InvalidRangeError(
                "window",
                "Start date need to be early or the same as the end date.",
            )
        return effective_start, effective_end

    async def query(self, start: date, end: date | None = None) -> list[date]:
        effective_start, effective_end = self.clamp(start, end)
        logger.info("Query site availability from %s to %s", effective_start, effective_end)

        async with calendar_transaction(self.session_factory) as store:
            claims = await store.find_day_claims_in_range(effective_start, effective_end)

        return open_days(effective_start, effective_end, (claim.day for claim in claims))
