from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_dto import BookingView


class GetBookingUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, user_id: int, booking_id: int) -> BookingView:
        async with self.uow:
            # Someone else's booking looks exactly like a missing one
            booking = await self.uow.booking_repo.get_owned(booking_id=booking_id, user_id=user_id)
            if not booking:
                raise NotFoundError('Booking not found')
            show = await self.uow.show_repo.get_by_id(show_id=booking.show_id)
            seats = await self.uow.seat_hold_repo.list_by_booking(booking_id=booking_id)
            return BookingView(booking=booking, show=show, seats=seats)
