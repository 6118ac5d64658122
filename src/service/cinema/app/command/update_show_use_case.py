from typing import Self

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
from src.service.cinema.domain.entity.show_entity import ShowChanges
from src.service.cinema.domain.enum.show_status import ShowStatus


class UpdateShowUseCase:
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

    @Logger.io
    async def execute(self, *, show_id: int, changes: ShowChanges) -> ShowScheduled:
        """Apply an admin edit; a new base price re-prices every category in one transaction."""
        if changes.is_empty:
            raise InvalidInputError('No valid fields to update')

        async with self.uow:
            show = await self.uow.show_repo.get_by_id(show_id=show_id)
            if not show:
                raise NotFoundError('Show not found')
            updated = show.apply_changes(changes)

            if updated.status == ShowStatus.ACTIVE and (
                changes.moves_slot or changes.status == ShowStatus.ACTIVE
            ):
                if await self.uow.show_repo.find_active_show_at(
                    screen_id=updated.screen_id,
                    show_date=updated.show_date,
                    show_time=updated.show_time,
                    exclude_show_id=show_id,
                ):
                    raise ConflictError('A show already exists for this screen at the given time')

            updated = await self.uow.show_repo.update(show=updated)

            repriced: list[str] = []
            if changes.base_price is not None:
                layout = await self.uow.show_repo.get_layout(screen_id=updated.screen_id)
                if layout is None or layout.is_empty:
                    raise InvalidInputError('Screen has no seat layout configured')
                await self.uow.show_repo.save_pricing(
                    show_id=show_id,
                    prices=price_sheet(
                        changes.base_price,
                        layout.category_names,
                        self.settings.CATEGORY_PRICE_MULTIPLIERS,
                    ),
                )
                repriced = list(layout.category_names)

            pricing = await self.uow.show_repo.get_pricing(show_id=show_id)
            for category in repriced:
                if category not in pricing:
                    raise PricingMissingError(category)
            await self.uow.commit()

        return ShowScheduled(show=updated, pricing=pricing)
