"""Reservation and DayClaim models — a campsite booking and the days it holds."""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from campsite.database import Base, TimestampMixin


class Reservation(TimestampMixin, Base):
    """A guest's reservation of the campsite for a contiguous range of days."""

    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        unique=True,
        default=uuid.uuid4,
    )
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_contact: Mapped[str] = mapped_column(String(255), nullable=False)
    # Denormalized bounds, kept in sync with the day claims
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, external_id={self.external_id}, "
            f"start_date={self.start_date}, end_date={self.end_date})>"
        )


class DayClaim(Base):
    """One reservation's hold on a single calendar day.

    The unique constraint on ``day`` is what keeps two reservations from ever
    sharing a day; concurrent writers are arbitrated by the database here.
    """

    __tablename__ = "day_claims"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reservation_id: Mapped[int] = mapped_column(
        ForeignKey("reservations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (UniqueConstraint("day", name="uq_day_claims_day"),)

    def __repr__(self) -> str:
        return f"<DayClaim(reservation_id={self.reservation_id}, day={self.day})>"
