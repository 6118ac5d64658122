from datetime import datetime, timedelta

from src.platform.clock import ensure_utc
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_seat_hold_repo import ISeatHoldRepo
from src.service.cinema.domain.entity.seat_hold_entity import SeatHold, is_live, is_stale
from src.service.cinema.domain.enum.seat_status import SeatStatus


class HoldManager:
    """
    Places, attaches, promotes and releases seat holds.

    Every method runs on the repository of the caller's unit of work and
    never commits; the caller owns the transaction.
    """

    def __init__(self, *, seat_hold_repo: ISeatHoldRepo, window: timedelta) -> None:
        self.seat_hold_repo = seat_hold_repo
        self.window = window

    @Logger.io
    async def place_holds(
        self,
        *,
        user_id: int,
        show_id: int,
        classified_seats: dict[str, list[str]],
        now: datetime,
    ) -> datetime:
        labels = [label for seats in classified_seats.values() for label in seats]

        # A stale held row still occupies the unique index until it is flipped.
        await self.expire_stale(
            holds=await self.seat_hold_repo.list_claims(show_id=show_id, labels=labels), now=now
        )

        holds = [
            SeatHold.place(
                show_id=show_id,
                user_id=user_id,
                seat_label=label,
                seat_category=category,
                now=now,
                window=self.window,
            )
            for category, seats in classified_seats.items()
            for label in seats
        ]
        await self.seat_hold_repo.add_all(holds=holds)
        held_until = now + self.window
        Logger.base.info(
            f'🔒 [HOLD] show={show_id} user={user_id} seats={labels} '
            f'until={held_until.isoformat()}'
        )
        return held_until

    @Logger.io
    async def attach_to_booking(
        self,
        *,
        booking_id: int,
        show_id: int,
        user_id: int,
        held_until: datetime,
        labels: list[str],
    ) -> int:
        candidates = await self.seat_hold_repo.list_unattached(
            show_id=show_id, user_id=user_id, labels=labels
        )
        batch = [hold for hold in candidates if ensure_utc(hold.held_until) == held_until]
        return await self.seat_hold_repo.attach(
            hold_ids=[hold.id for hold in batch if hold.id is not None], booking_id=booking_id
        )

    @Logger.io
    async def release_holds(self, *, booking_id: int, include_confirmed: bool = False) -> int:
        """Cancel the booking's held (and optionally confirmed) rows; no-op once released."""
        statuses = [SeatStatus.HELD]
        if include_confirmed:
            statuses.append(SeatStatus.CONFIRMED)
        return await self.seat_hold_repo.release_by_booking(
            booking_id=booking_id, statuses=statuses
        )

    @Logger.io
    async def promote_holds(self, *, booking_id: int) -> int:
        return await self.seat_hold_repo.promote_by_booking(booking_id=booking_id)

    @Logger.io
    async def live_holds_for_booking(self, *, booking_id: int, now: datetime) -> list[SeatHold]:
        """Flip the booking's stale holds to expired and return the held rows still live."""
        live, _ = await self.sweep_booking_holds(booking_id=booking_id, now=now)
        return live

    async def sweep_booking_holds(
        self, *, booking_id: int, now: datetime
    ) -> tuple[list[SeatHold], list[SeatHold]]:
        """
        Flip the booking's stale holds to expired.

        Returns (live, lapsed): `lapsed` are the held rows this call expired,
        i.e. seats that were still held the last time the booking was priced.
        """
        holds = await self.seat_hold_repo.list_by_booking(booking_id=booking_id)
        held = [hold for hold in holds if hold.status == SeatStatus.HELD]
        await self.expire_stale(holds=held, now=now)
        live = [hold for hold in held if is_live(hold, now)]
        lapsed = [hold for hold in held if is_stale(hold, now)]
        return live, lapsed

    async def expire_stale(self, *, holds: list[SeatHold], now: datetime) -> int:
        stale_ids = [hold.id for hold in holds if is_stale(hold, now) and hold.id is not None]
        if not stale_ids:
            return 0
        Logger.base.info(f'⌛ [HOLD] Expiring {len(stale_ids)} stale hold(s)')
        return await self.seat_hold_repo.mark_expired(hold_ids=stale_ids)
