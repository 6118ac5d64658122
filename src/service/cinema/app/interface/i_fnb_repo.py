from abc import ABC, abstractmethod
from decimal import Decimal

from src.service.cinema.domain.entity.fnb_entity import FoodOrder, Snack


class IFnbRepo(ABC):
    @abstractmethod
    async def get_snacks(self, *, snack_ids: list[int]) -> dict[int, Snack]:
        pass

    @abstractmethod
    async def add_orders(self, *, orders: list[FoodOrder]) -> list[FoodOrder]:
        pass

    @abstractmethod
    async def total_for_booking(self, *, booking_id: int) -> Decimal:
        """Sum of quantity x price_at_order; zero when nothing was ordered."""
        pass
