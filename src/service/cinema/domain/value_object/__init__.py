from src.service.cinema.domain.value_object.fee_breakdown import FeeBreakdown, to_money
from src.service.cinema.domain.value_object.seat_layout import (
    SeatCategory,
    SeatLabel,
    SeatLayout,
    parse_seat_label,
)

__all__ = [
    'FeeBreakdown',
    'SeatCategory',
    'SeatLabel',
    'SeatLayout',
    'parse_seat_label',
    'to_money',
]
