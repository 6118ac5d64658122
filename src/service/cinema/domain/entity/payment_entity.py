from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import PolicyViolationError
from src.service.cinema.domain.enum.booking_status import PaymentStatus


@attrs.define
class Payment:
    booking_id: int
    transaction_id: str
    amount: Decimal
    method: str
    status: PaymentStatus = PaymentStatus.PENDING
    breakdown: dict[str, Any] = attrs.field(factory=dict)
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def initiate(
        cls,
        *,
        booking_id: int,
        transaction_id: str,
        amount: Decimal,
        method: str,
        breakdown: dict[str, Any],
        now: datetime,
    ) -> 'Payment':
        return cls(
            booking_id=booking_id,
            transaction_id=transaction_id,
            amount=amount,
            method=method,
            status=PaymentStatus.PENDING,
            breakdown=breakdown,
            created_at=now,
        )

    def validate_pending(self) -> None:
        if self.status != PaymentStatus.PENDING:
            raise PolicyViolationError(f'Payment is already {self.status}. Cannot re-confirm.')

    def mark_paid(self) -> 'Payment':
        self.validate_pending()
        return attrs.evolve(self, status=PaymentStatus.PAID)

    def mark_failed(self) -> 'Payment':
        self.validate_pending()
        return attrs.evolve(self, status=PaymentStatus.FAILED)
