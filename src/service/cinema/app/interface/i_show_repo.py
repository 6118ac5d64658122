from abc import ABC, abstractmethod
from datetime import date, time
from decimal import Decimal
from typing import Optional

from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.value_object.seat_layout import SeatLayout


class IShowRepo(ABC):
    """Shows, their per-category pricing, and the screen data they depend on."""

    @abstractmethod
    async def get_by_id(self, *, show_id: int) -> Optional[Show]:
        """Show with movie title, theater and screen names joined in."""
        pass

    @abstractmethod
    async def get_layout(self, *, screen_id: int) -> Optional[SeatLayout]:
        pass

    @abstractmethod
    async def list_blocked_seats(self, *, screen_id: int) -> list[str]:
        pass

    @abstractmethod
    async def get_pricing(self, *, show_id: int) -> dict[str, Decimal]:
        pass

    @abstractmethod
    async def movie_exists(self, *, movie_id: int) -> bool:
        pass

    @abstractmethod
    async def screen_exists(self, *, screen_id: int) -> bool:
        pass

    @abstractmethod
    async def find_active_show_at(
        self,
        *,
        screen_id: int,
        show_date: date,
        show_time: time,
        exclude_show_id: Optional[int] = None,
    ) -> Optional[int]:
        """Id of another active show occupying the same screen slot, if any."""
        pass

    @abstractmethod
    async def create(self, *, show: Show) -> Show:
        pass

    @abstractmethod
    async def update(self, *, show: Show) -> Show:
        pass

    @abstractmethod
    async def save_pricing(self, *, show_id: int, prices: dict[str, Decimal]) -> None:
        """Insert or overwrite one price row per category."""
        pass
