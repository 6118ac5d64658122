from datetime import date, time
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PricingMissingError,
)
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_dto import ShowScheduled
from src.service.cinema.app.service.pricing_resolver import price_sheet
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.enum.show_status import ShowStatus


class CreateShowUseCase:
    """
    Schedule a show and price every seat category of its screen.

    The show only commits together with a price row for each layout
    category; if any is missing after insertion nothing is kept.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, settings: Settings) -> None:
        self.uow = uow
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, settings=settings)

    async def _insert_pricing(self, *, show_id: int, prices: dict[str, Decimal]) -> None:
        await self.uow.show_repo.save_pricing(show_id=show_id, prices=prices)

    @Logger.io
    async def execute(
        self,
        *,
        movie_id: int,
        screen_id: int,
        show_date: date,
        show_time: time,
        base_price: Decimal,
        format: Optional[str] = None,
        language: Optional[str] = None,
    ) -> ShowScheduled:
        async with self.uow:
            if not await self.uow.show_repo.movie_exists(movie_id=movie_id):
                raise NotFoundError('Movie not found')
            if not await self.uow.show_repo.screen_exists(screen_id=screen_id):
                raise NotFoundError('Screen not found')
            layout = await self.uow.show_repo.get_layout(screen_id=screen_id)
            if layout is None or layout.is_empty:
                raise InvalidInputError('Screen has no seat layout configured')
            if await self.uow.show_repo.find_active_show_at(
                screen_id=screen_id, show_date=show_date, show_time=show_time
            ):
                raise ConflictError('A show already exists for this screen at the given time')

            show = await self.uow.show_repo.create(
                show=Show(
                    movie_id=movie_id,
                    screen_id=screen_id,
                    show_date=show_date,
                    show_time=show_time,
                    base_price=base_price,
                    status=ShowStatus.ACTIVE,
                    format=format,
                    language=language,
                )
            )
            assert show.id is not None

            await self._insert_pricing(
                show_id=show.id,
                prices=price_sheet(
                    base_price, layout.category_names, self.settings.CATEGORY_PRICE_MULTIPLIERS
                ),
            )
            stored = await self.uow.show_repo.get_pricing(show_id=show.id)
            for category in layout.category_names:
                if category not in stored:
                    raise PricingMissingError(category)

            await self.uow.commit()

        Logger.base.info(f'🎬 [SHOW] Show {show.id} scheduled on screen {screen_id}: {stored}')
        return ShowScheduled(show=show, pricing=stored)
