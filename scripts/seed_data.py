"""Seed the database with a handful of sample campsite reservations.

Bookings go through the reservation service, so every sample respects the
lead time, horizon and maximum stay rules relative to today.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date, timedelta
from pathlib import Path

# Add project root to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from campsite.database import async_session_factory, engine, init_models
from campsite.exceptions import ReservationError
from campsite.models.reservation import DayClaim, Reservation
from campsite.services.reservation_service import ReservationService

# (guest name, contact, days from today to arrival, nights)
SAMPLE_STAYS = [
    ("Ada Lovelace", "ada@example.com", 2, 2),
    ("Grace Hopper", "grace@example.com", 5, 3),
    ("Alan Turing", "alan@example.com", 10, 1),
    ("Katherine Johnson", "katherine@example.com", 14, 3),
]


async def seed() -> None:
    """Clear all reservations and book the sample stays."""
    await init_models(engine)

    async with async_session_factory() as session:
        await session.execute(delete(DayClaim))
        await session.execute(delete(Reservation))
        await session.commit()

    service = ReservationService(async_session_factory)
    today = date.today()
    booked = 0

    for name, contact, offset, nights in SAMPLE_STAYS:
        start = today + timedelta(days=offset)
        end = start + timedelta(days=nights - 1)
        try:
            booking_id = await service.create(name, contact, start, end)
        except ReservationError as exc:
            print(f"   ⚠️  Skipped {name} ({start} to {end}): {exc.message}")
            continue
        booked += 1
        print(f"   ⛺ {name}: {start} to {end} (booking {booking_id})")

    await engine.dispose()
    print(f"✅ Created {booked} reservations")


if __name__ == "__main__":
    asyncio.run(seed())
