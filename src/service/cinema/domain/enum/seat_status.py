from enum import StrEnum


class SeatStatus(StrEnum):
    """Lifecycle of a booked_seat row: held -> confirmed | cancelled | expired."""

    HELD = 'held'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    EXPIRED = 'expired'


# Statuses that may still claim a seat; uniqueness is enforced over these
CLAIMING_STATUSES = (SeatStatus.HELD, SeatStatus.CONFIRMED)
