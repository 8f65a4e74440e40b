"""Calendar arithmetic and the booking rules applied to every requested range."""

import calendar
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date, timedelta

from campsite.config import settings
from campsite.exceptions import InvalidRangeError

Clock = Callable[[], date]


def today() -> date:
    """Current wall-clock date."""
    return date.today()


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole calendar months, clamping to the month's last day.

    >>> add_months(date(2024, 1, 31), 1)
    datetime.date(2024, 2, 29)
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def date_range(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive, ascending."""
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


@dataclass(frozen=True)
class BookingRules:
    """Lead time, horizon and maximum stay for a single campsite."""

    min_lead_days: int = 1
    horizon_months: int = 1
    max_stay_days: int = 3

    @classmethod
    def from_settings(cls) -> "BookingRules":
        return cls(
            min_lead_days=settings.min_lead_days,
            horizon_months=settings.horizon_months,
            max_stay_days=settings.max_stay_days,
        )

    def earliest_start(self, current: date) -> date:
        return current + timedelta(days=self.min_lead_days)

    def latest_end(self, current: date) -> date:
        return add_months(current, self.horizon_months)

    def validate(self, start: date, end: date, current: date) -> None:
        """Raise ``InvalidRangeError`` for the first rule ``[start, end]`` breaks."""
        if start < self.earliest_start(current):
            raise InvalidRangeError(
                "lead time",
                f"The campsite can be reserved minimum {self.min_lead_days} day(s) ahead of arrival, "
                f"but you requested {start.isoformat()}",
            )
        if end > self.latest_end(current):
            raise InvalidRangeError(
                "horizon",
                f"The campsite can be reserved up to {self.horizon_months} month(s) in advance, "
                f"but you requested until {end.isoformat()}",
            )
        if start > end or (end - start).days > self.max_stay_days - 1:
            raise InvalidRangeError(
                "max span",
                f"The campsite can be reserved for max {self.max_stay_days} day(s), "
                f"but you requested {start.isoformat()} to {end.isoformat()}",
            )
