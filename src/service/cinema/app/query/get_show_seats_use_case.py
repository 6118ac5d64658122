from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.clock import Clock
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_dto import ShowSeatMap
from src.service.cinema.domain.entity.seat_hold_entity import is_live


class GetShowSeatsUseCase:
    """Seat map of a show: layout, category prices and unavailable seats."""

    def __init__(self, *, uow: AbstractUnitOfWork, clock: Clock) -> None:
        self.uow = uow
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow=uow, clock=clock)

    @Logger.io
    async def execute(self, *, show_id: int) -> ShowSeatMap:
        now = self.clock()
        async with self.uow:
            show = await self.uow.show_repo.get_by_id(show_id=show_id)
            if not show:
                raise NotFoundError('Show not found')
            layout = await self.uow.show_repo.get_layout(screen_id=show.screen_id)
            if layout is None:
                raise NotFoundError('Seat layout not found for this screen')
            pricing = await self.uow.show_repo.get_pricing(show_id=show_id)
            claims = await self.uow.seat_hold_repo.list_claims(show_id=show_id)
            blocked = await self.uow.show_repo.list_blocked_seats(screen_id=show.screen_id)

        # Live holds are reported as booked
        booked = sorted({hold.seat_label for hold in claims if is_live(hold, now)})
        return ShowSeatMap(
            show=show,
            layout=layout,
            pricing=pricing,
            booked_seats=booked,
            blocked_seats=sorted(blocked),
        )
