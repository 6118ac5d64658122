from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema.domain.entity.payment_entity import Payment


class IPaymentRepo(ABC):
    @abstractmethod
    async def create(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_for_booking(self, *, transaction_id: str, booking_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    async def resolve_pending(self, *, payment: Payment) -> bool:
        """Write the resolved status only while the row is still pending; False if it was not."""
        pass

    @abstractmethod
    async def fail_pending_for_booking(self, *, booking_id: int) -> int:
        """Mark every still-pending attempt of the booking failed."""
        pass

    @abstractmethod
    async def transaction_exists(self, *, transaction_id: str) -> bool:
        pass
