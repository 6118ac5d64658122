from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.clock import ensure_utc
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_repo import IBookingRepo
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.cinema.driven_adapter.model.booking_model import BookingModel


class BookingRepoImpl(IBookingRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            user_id=db_booking.user_id,
            show_id=db_booking.show_id,
            booking_reference=db_booking.booking_reference,
            total_amount=Decimal(db_booking.total_amount),
            user_email=db_booking.user_email,
            user_mobile=db_booking.user_mobile,
            booking_status=BookingStatus(db_booking.booking_status),
            payment_status=PaymentStatus(db_booking.payment_status),
            booked_at=ensure_utc(db_booking.booked_at),
        )

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            booking_reference=booking.booking_reference,
            user_id=booking.user_id,
            show_id=booking.show_id,
            total_amount=booking.total_amount,
            booking_status=booking.booking_status.value,
            payment_status=booking.payment_status.value,
            user_email=booking.user_email,
            user_mobile=booking.user_mobile,
        )
        if booking.booked_at is not None:
            db_booking.booked_at = booking.booked_at
        self.session.add(db_booking)
        await self.session.flush()
        await self.session.refresh(db_booking)
        return self._to_entity(db_booking)

    @Logger.io
    async def get_by_id(self, *, booking_id: int) -> Optional[Booking]:
        db_booking = await self.session.get(BookingModel, booking_id)
        return self._to_entity(db_booking) if db_booking else None

    @Logger.io
    async def get_owned(self, *, booking_id: int, user_id: int) -> Optional[Booking]:
        stmt = select(BookingModel).where(
            BookingModel.id == booking_id, BookingModel.user_id == user_id
        )
        db_booking = (await self.session.scalars(stmt)).one_or_none()
        return self._to_entity(db_booking) if db_booking else None

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> list[Booking]:
        stmt = (
            select(BookingModel)
            .where(BookingModel.user_id == user_id)
            .order_by(BookingModel.booked_at.desc(), BookingModel.id.desc())
        )
        return [self._to_entity(row) for row in (await self.session.scalars(stmt)).all()]

    @Logger.io
    async def transition_status(self, *, booking: Booking, expected: BookingStatus) -> bool:
        stmt = (
            sql_update(BookingModel)
            .where(
                BookingModel.id == booking.id,
                BookingModel.booking_status == expected.value,
            )
            .values(
                booking_status=booking.booking_status.value,
                payment_status=booking.payment_status.value,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1

    @Logger.io
    async def update_total(self, *, booking_id: int, total_amount: Decimal) -> None:
        stmt = (
            sql_update(BookingModel)
            .where(BookingModel.id == booking_id)
            .values(total_amount=total_amount)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def reference_exists(self, *, booking_reference: str) -> bool:
        stmt = select(BookingModel.id).where(BookingModel.booking_reference == booking_reference)
        return (await self.session.execute(stmt)).scalar_one_or_none() is not None
