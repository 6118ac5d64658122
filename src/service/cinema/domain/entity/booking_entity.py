from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import PolicyViolationError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.enum.booking_status import BookingStatus, PaymentStatus


@attrs.define
class Booking:
    """
    A reservation and its payment state.

    booking_status and payment_status only ever move together:
    pending/pending -> confirmed/paid | failed/failed, and
    confirmed/paid -> cancelled/refunded.
    """

    user_id: int
    show_id: int
    booking_reference: str
    total_amount: Decimal
    user_email: str
    user_mobile: str = attrs.field(repr=False)
    booking_status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    id: Optional[int] = None
    booked_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        show_id: int,
        booking_reference: str,
        total_amount: Decimal,
        user_email: str,
        user_mobile: str,
        now: datetime,
    ) -> 'Booking':
        return cls(
            user_id=user_id,
            show_id=show_id,
            booking_reference=booking_reference,
            total_amount=total_amount,
            user_email=user_email,
            user_mobile=user_mobile,
            booking_status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            booked_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return (
            self.booking_status == BookingStatus.PENDING
            and self.payment_status == PaymentStatus.PENDING
        )

    @Logger.io
    def validate_can_initiate_payment(self) -> None:
        if not self.is_pending:
            raise PolicyViolationError(
                f'Booking is {self.booking_status} with payment {self.payment_status}; '
                'payment cannot be initiated'
            )

    def validate_accepts_fnb(self) -> None:
        if not self.is_pending:
            raise PolicyViolationError('Food can only be added to a booking awaiting payment')

    def with_total(self, total_amount: Decimal) -> 'Booking':
        return attrs.evolve(self, total_amount=total_amount)

    @Logger.io
    def confirm(self) -> 'Booking':
        if not self.is_pending:
            raise PolicyViolationError(f'Booking is already {self.booking_status}')
        return attrs.evolve(
            self, booking_status=BookingStatus.CONFIRMED, payment_status=PaymentStatus.PAID
        )

    @Logger.io
    def fail(self) -> 'Booking':
        if not self.is_pending:
            raise PolicyViolationError(f'Booking is already {self.booking_status}')
        return attrs.evolve(
            self, booking_status=BookingStatus.FAILED, payment_status=PaymentStatus.FAILED
        )

    @Logger.io
    def cancel(self, *, show_starts_at: datetime, now: datetime, cutoff_hours: int) -> 'Booking':
        """
        Cancel a paid booking.

        Raises:
            PolicyViolationError: already cancelled, not paid, or inside the cutoff window
        """
        if self.booking_status == BookingStatus.CANCELLED:
            raise PolicyViolationError('Booking is already cancelled')
        if (
            self.booking_status != BookingStatus.CONFIRMED
            or self.payment_status != PaymentStatus.PAID
        ):
            raise PolicyViolationError('Only paid bookings can be cancelled')
        if now >= show_starts_at - timedelta(hours=cutoff_hours):
            raise PolicyViolationError(
                f'Cancellation is not allowed within {cutoff_hours} hours of show time'
            )
        return attrs.evolve(
            self, booking_status=BookingStatus.CANCELLED, payment_status=PaymentStatus.REFUNDED
        )
