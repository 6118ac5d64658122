from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus


class IBookingRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_owned(self, *, booking_id: int, user_id: int) -> Optional[Booking]:
        """Booking only if `user_id` owns it."""
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> list[Booking]:
        """Newest first."""
        pass

    @abstractmethod
    async def transition_status(self, *, booking: Booking, expected: BookingStatus) -> bool:
        """Compare-and-set on booking_status; False if the row had already moved on."""
        pass

    @abstractmethod
    async def update_total(self, *, booking_id: int, total_amount: Decimal) -> None:
        pass

    @abstractmethod
    async def reference_exists(self, *, booking_reference: str) -> bool:
        pass
