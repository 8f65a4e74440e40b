"""Reservation error taxonomy.

Every failing engine operation raises exactly one of these. The API layer maps
each kind to an HTTP status; nothing here is retried internally.
"""


class ReservationError(Exception):
    """Base class for all reservation engine errors."""

    kind = "reservation_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRangeError(ReservationError):
    """A requested range breaks a booking rule, or an identifier is malformed."""

    kind = "invalid_range"

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(message)
        self.rule = rule


class ConflictError(ReservationError):
    """A day in the requested range is already claimed by another reservation."""

    kind = "conflict"


class NotFoundError(ReservationError):
    """No reservation exists with the given external id."""

    kind = "not_found"


class TransientError(ReservationError):
    """The store was unavailable or timed out. Safe to retry the operation."""

    kind = "transient"
