from datetime import datetime

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_seat_hold_repo import ISeatHoldRepo
from src.service.cinema.app.interface.i_show_repo import IShowRepo
from src.service.cinema.domain.entity.seat_hold_entity import is_live


class ConflictDetector:
    """Read-only check of which requested seats are already taken."""

    def __init__(self, *, seat_hold_repo: ISeatHoldRepo, show_repo: IShowRepo) -> None:
        self.seat_hold_repo = seat_hold_repo
        self.show_repo = show_repo

    @Logger.io
    async def find_conflicts(
        self, *, show_id: int, screen_id: int, labels: list[str], now: datetime
    ) -> list[str]:
        """
        Labels that are confirmed, held with a running window, or blocked.

        Returned in request order. Stale holds count as free; nothing is
        written here.
        """
        claims = await self.seat_hold_repo.list_claims(show_id=show_id, labels=labels)
        taken = {hold.seat_label for hold in claims if is_live(hold, now)}
        taken |= set(await self.show_repo.list_blocked_seats(screen_id=screen_id))
        return [label for label in labels if label in taken]
