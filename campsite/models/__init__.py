"""SQLAlchemy models for the campsite service.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from campsite.models.reservation import DayClaim, Reservation

__all__ = [
    "DayClaim",
    "Reservation",
]
