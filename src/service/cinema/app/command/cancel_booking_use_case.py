from datetime import timedelta
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.clock import Clock
from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, PolicyViolationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.service.hold_manager import HoldManager
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus


class CancelBookingUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, settings: Settings, clock: Clock) -> None:
        self.uow = uow
        self.settings = settings
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow=uow, settings=settings, clock=clock)

    @Logger.io
    async def execute(self, *, user_id: int, booking_id: int) -> Booking:
        """Cancel a paid booking before the cutoff, releasing its seats and flagging a refund."""
        now = self.clock()
        async with self.uow:
            booking = await self.uow.booking_repo.get_owned(booking_id=booking_id, user_id=user_id)
            if not booking:
                raise NotFoundError('Booking not found')
            show = await self.uow.show_repo.get_by_id(show_id=booking.show_id)
            if not show:
                raise NotFoundError('Show not found')

            cancelled = booking.cancel(
                show_starts_at=show.starts_at,
                now=now,
                cutoff_hours=self.settings.BOOKING_CANCEL_CUTOFF_HOURS,
            )
            # A concurrent cancel may already have moved the row
            if not await self.uow.booking_repo.transition_status(
                booking=cancelled, expected=BookingStatus.CONFIRMED
            ):
                raise PolicyViolationError('Booking is already cancelled')
            holds = HoldManager(
                seat_hold_repo=self.uow.seat_hold_repo,
                window=timedelta(minutes=self.settings.SEAT_HOLD_MINUTES),
            )
            released = await holds.release_holds(booking_id=booking_id, include_confirmed=True)
            await self.uow.commit()

        metrics.record_booking_cancelled()
        Logger.base.info(
            f'↩️ [CANCEL] {booking.booking_reference} cancelled, {released} seat(s) released'
        )
        return cancelled
