from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_dto import BookingView
from src.service.cinema.domain.entity.show_entity import Show


class ListBookingsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, user_id: int) -> list[BookingView]:
        async with self.uow:
            bookings = await self.uow.booking_repo.list_by_user(user_id=user_id)
            shows: dict[int, Show | None] = {}
            views = []
            for booking in bookings:
                if booking.show_id not in shows:
                    shows[booking.show_id] = await self.uow.show_repo.get_by_id(
                        show_id=booking.show_id
                    )
                assert booking.id is not None
                seats = await self.uow.seat_hold_repo.list_by_booking(booking_id=booking.id)
                views.append(BookingView(booking=booking, show=shows[booking.show_id], seats=seats))
            return views
