"""Application layer DTOs"""

from src.service.cinema.app.dto.booking_dto import (
    BookingCreated,
    BookingView,
    FnbOrdered,
    PaymentInitiated,
    PaymentResolved,
    ShowScheduled,
    ShowSeatMap,
)

__all__ = [
    'BookingCreated',
    'BookingView',
    'FnbOrdered',
    'PaymentInitiated',
    'PaymentResolved',
    'ShowScheduled',
    'ShowSeatMap',
]
