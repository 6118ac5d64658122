"""Cinema Domain Enums"""

from src.service.cinema.domain.enum.booking_status import (
    BookingStatus,
    PaymentOutcome,
    PaymentStatus,
)
from src.service.cinema.domain.enum.seat_status import CLAIMING_STATUSES, SeatStatus
from src.service.cinema.domain.enum.show_status import ShowStatus

__all__ = [
    'BookingStatus',
    'CLAIMING_STATUSES',
    'PaymentOutcome',
    'PaymentStatus',
    'SeatStatus',
    'ShowStatus',
]
