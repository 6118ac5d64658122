"""Results handed from use cases to the HTTP layer."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.fnb_entity import FoodOrder
from src.service.cinema.domain.entity.payment_entity import Payment
from src.service.cinema.domain.entity.seat_hold_entity import SeatHold
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.value_object.fee_breakdown import FeeBreakdown
from src.service.cinema.domain.value_object.seat_layout import SeatLayout


@attrs.define(frozen=True)
class BookingCreated:
    booking: Booking
    show: Show
    seats: list[str]
    held_until: datetime
    breakdown: FeeBreakdown


@attrs.define(frozen=True)
class BookingView:
    booking: Booking
    show: Optional[Show]
    seats: list[SeatHold]


@attrs.define(frozen=True)
class PaymentInitiated:
    payment: Payment
    breakdown: FeeBreakdown


@attrs.define(frozen=True)
class PaymentResolved:
    booking: Booking
    payment: Payment


@attrs.define(frozen=True)
class ShowSeatMap:
    show: Show
    layout: SeatLayout
    pricing: dict[str, Decimal]
    booked_seats: list[str]
    blocked_seats: list[str]


@attrs.define(frozen=True)
class ShowScheduled:
    show: Show
    pricing: dict[str, Decimal]


@attrs.define(frozen=True)
class FnbOrdered:
    booking_id: int
    orders: list[FoodOrder]
    fnb_total: Decimal
    total_amount: Decimal
