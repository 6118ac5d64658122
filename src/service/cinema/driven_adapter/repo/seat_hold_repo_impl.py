from typing import Optional

from sqlalchemy import select, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import SeatConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_seat_hold_repo import ISeatHoldRepo
from src.service.cinema.domain.entity.seat_hold_entity import SeatHold
from src.service.cinema.domain.enum.seat_status import CLAIMING_STATUSES, SeatStatus
from src.service.cinema.driven_adapter.model.booking_model import BookedSeatModel


class SeatHoldRepoImpl(ISeatHoldRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_seat: BookedSeatModel) -> SeatHold:
        return SeatHold(
            id=db_seat.id,
            show_id=db_seat.show_id,
            seat_label=db_seat.seat_label,
            seat_category=db_seat.seat_category,
            user_id=db_seat.user_id,
            status=SeatStatus(db_seat.status),
            held_until=db_seat.held_until,
            booking_id=db_seat.booking_id,
            created_at=db_seat.created_at,
        )

    async def _update_where(self, *conditions, **values) -> int:
        stmt = (
            sql_update(BookedSeatModel)
            .where(*conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    @Logger.io
    async def list_claims(
        self, *, show_id: int, labels: Optional[list[str]] = None
    ) -> list[SeatHold]:
        stmt = select(BookedSeatModel).where(
            BookedSeatModel.show_id == show_id,
            BookedSeatModel.status.in_([status.value for status in CLAIMING_STATUSES]),
        )
        if labels is not None:
            stmt = stmt.where(BookedSeatModel.seat_label.in_(labels))
        rows = (await self.session.scalars(stmt)).all()
        return [self._to_entity(row) for row in rows]

    @Logger.io
    async def list_by_booking(self, *, booking_id: int) -> list[SeatHold]:
        stmt = (
            select(BookedSeatModel)
            .where(BookedSeatModel.booking_id == booking_id)
            .order_by(BookedSeatModel.seat_label)
        )
        rows = (await self.session.scalars(stmt)).all()
        return [self._to_entity(row) for row in rows]

    @Logger.io
    async def list_unattached(
        self, *, show_id: int, user_id: int, labels: list[str]
    ) -> list[SeatHold]:
        stmt = select(BookedSeatModel).where(
            BookedSeatModel.show_id == show_id,
            BookedSeatModel.user_id == user_id,
            BookedSeatModel.status == SeatStatus.HELD.value,
            BookedSeatModel.booking_id.is_(None),
            BookedSeatModel.seat_label.in_(labels),
        )
        rows = (await self.session.scalars(stmt)).all()
        return [self._to_entity(row) for row in rows]

    @Logger.io
    async def add_all(self, *, holds: list[SeatHold]) -> list[SeatHold]:
        db_seats = [
            BookedSeatModel(
                show_id=hold.show_id,
                booking_id=hold.booking_id,
                user_id=hold.user_id,
                seat_label=hold.seat_label,
                seat_category=hold.seat_category,
                status=hold.status.value,
                held_until=hold.held_until,
            )
            for hold in holds
        ]
        self.session.add_all(db_seats)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Another transaction committed a claim between our check and our insert
            labels = [hold.seat_label for hold in holds]
            Logger.base.warning(f'⚔️ [HOLD] Lost race for seats {labels}: {e.orig}')
            raise SeatConflictError(labels) from e
        return [self._to_entity(db_seat) for db_seat in db_seats]

    @Logger.io
    async def mark_expired(self, *, hold_ids: list[int]) -> int:
        if not hold_ids:
            return 0
        return await self._update_where(
            BookedSeatModel.id.in_(hold_ids),
            BookedSeatModel.status == SeatStatus.HELD.value,
            status=SeatStatus.EXPIRED.value,
        )

    @Logger.io
    async def attach(self, *, hold_ids: list[int], booking_id: int) -> int:
        if not hold_ids:
            return 0
        return await self._update_where(
            BookedSeatModel.id.in_(hold_ids),
            BookedSeatModel.booking_id.is_(None),
            booking_id=booking_id,
        )

    @Logger.io
    async def release_by_booking(self, *, booking_id: int, statuses: list[SeatStatus]) -> int:
        return await self._update_where(
            BookedSeatModel.booking_id == booking_id,
            BookedSeatModel.status.in_([status.value for status in statuses]),
            status=SeatStatus.CANCELLED.value,
            booking_id=None,
            held_until=None,
        )

    @Logger.io
    async def promote_by_booking(self, *, booking_id: int) -> int:
        return await self._update_where(
            BookedSeatModel.booking_id == booking_id,
            BookedSeatModel.status == SeatStatus.HELD.value,
            status=SeatStatus.CONFIRMED.value,
            held_until=None,
        )
