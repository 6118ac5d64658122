from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema.domain.entity.seat_hold_entity import SeatHold
from src.service.cinema.domain.enum.seat_status import SeatStatus


class ISeatHoldRepo(ABC):
    """
    Access to booked_seat rows.

    The repo never decides whether a hold is live; it returns candidate rows
    and callers filter them with `is_live`.
    """

    @abstractmethod
    async def list_claims(
        self, *, show_id: int, labels: Optional[list[str]] = None
    ) -> list[SeatHold]:
        """Held or confirmed rows of a show, optionally limited to some labels."""
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: int) -> list[SeatHold]:
        pass

    @abstractmethod
    async def list_unattached(
        self, *, show_id: int, user_id: int, labels: list[str]
    ) -> list[SeatHold]:
        """Held rows of a user for these labels that no booking owns yet."""
        pass

    @abstractmethod
    async def add_all(self, *, holds: list[SeatHold]) -> list[SeatHold]:
        """
        Insert holds and flush.

        Raises:
            SeatConflictError: another claiming row already exists for a label
        """
        pass

    @abstractmethod
    async def mark_expired(self, *, hold_ids: list[int]) -> int:
        pass

    @abstractmethod
    async def attach(self, *, hold_ids: list[int], booking_id: int) -> int:
        pass

    @abstractmethod
    async def release_by_booking(self, *, booking_id: int, statuses: list[SeatStatus]) -> int:
        """Move rows in `statuses` to cancelled and detach them from the booking."""
        pass

    @abstractmethod
    async def promote_by_booking(self, *, booking_id: int) -> int:
        """Move held rows of the booking to confirmed."""
        pass
