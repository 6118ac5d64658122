from datetime import datetime, timedelta
from typing import Optional

import attrs

from src.platform.clock import ensure_utc
from src.service.cinema.domain.enum.seat_status import SeatStatus


@attrs.define
class SeatHold:
    """One booked_seat row: a claim by a user on a seat of a show."""

    show_id: int
    seat_label: str
    seat_category: str
    user_id: int
    status: SeatStatus = SeatStatus.HELD
    held_until: Optional[datetime] = None
    booking_id: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def place(
        cls,
        *,
        show_id: int,
        user_id: int,
        seat_label: str,
        seat_category: str,
        now: datetime,
        window: timedelta,
    ) -> 'SeatHold':
        return cls(
            show_id=show_id,
            seat_label=seat_label,
            seat_category=seat_category,
            user_id=user_id,
            status=SeatStatus.HELD,
            held_until=now + window,
            created_at=now,
        )

    def is_live(self, now: datetime) -> bool:
        return is_live(self, now)

    def expire(self) -> 'SeatHold':
        return attrs.evolve(self, status=SeatStatus.EXPIRED)

    def confirm(self) -> 'SeatHold':
        return attrs.evolve(self, status=SeatStatus.CONFIRMED, held_until=None)

    def release(self) -> 'SeatHold':
        return attrs.evolve(self, status=SeatStatus.CANCELLED, held_until=None, booking_id=None)


def is_live(hold: SeatHold, now: datetime) -> bool:
    """
    The only definition of a seat claim being in force.

    Confirmed rows always claim their seat; held rows claim it strictly
    before `held_until`. Every other status is inert.
    """
    if hold.status == SeatStatus.CONFIRMED:
        return True
    if hold.status == SeatStatus.HELD:
        held_until = ensure_utc(hold.held_until)
        return held_until is not None and held_until > now
    return False


def is_stale(hold: SeatHold, now: datetime) -> bool:
    """Held on paper but past its window: due for the lazy flip to expired."""
    return hold.status == SeatStatus.HELD and not is_live(hold, now)
