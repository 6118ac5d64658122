from datetime import date, time
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_show_repo import IShowRepo
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.enum.show_status import ShowStatus
from src.service.cinema.domain.value_object.seat_layout import SeatLayout
from src.service.cinema.driven_adapter.model.catalog_model import (
    BlockedSeatModel,
    MovieModel,
    ScreenModel,
    SeatLayoutModel,
)
from src.service.cinema.driven_adapter.model.show_model import SeatPricingModel, ShowModel


class ShowRepoImpl(IShowRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(
        db_show: ShowModel,
        movie_title: Optional[str] = None,
        theater_name: Optional[str] = None,
        screen_name: Optional[str] = None,
    ) -> Show:
        return Show(
            id=db_show.id,
            movie_id=db_show.movie_id,
            screen_id=db_show.screen_id,
            show_date=db_show.show_date,
            show_time=db_show.show_time,
            base_price=Decimal(db_show.base_price),
            status=ShowStatus(db_show.status),
            format=db_show.format,
            language=db_show.language,
            movie_title=movie_title,
            theater_name=theater_name,
            screen_name=screen_name,
        )

    @Logger.io
    async def get_by_id(self, *, show_id: int) -> Optional[Show]:
        stmt = (
            select(ShowModel, MovieModel.title, ScreenModel.theater_name, ScreenModel.name)
            .outerjoin(MovieModel, MovieModel.id == ShowModel.movie_id)
            .outerjoin(ScreenModel, ScreenModel.id == ShowModel.screen_id)
            .where(ShowModel.id == show_id)
        )
        row = (await self.session.execute(stmt)).one_or_none()
        if row is None:
            return None
        db_show, title, theater_name, screen_name = row
        return self._to_entity(db_show, title, theater_name, screen_name)

    @Logger.io
    async def get_layout(self, *, screen_id: int) -> Optional[SeatLayout]:
        stmt = select(SeatLayoutModel.layout_data).where(SeatLayoutModel.screen_id == screen_id)
        document = (await self.session.execute(stmt)).scalar_one_or_none()
        if document is None:
            return None
        return SeatLayout.from_document(document)

    @Logger.io
    async def list_blocked_seats(self, *, screen_id: int) -> list[str]:
        stmt = select(BlockedSeatModel.seat_row, BlockedSeatModel.seat_number).where(
            BlockedSeatModel.screen_id == screen_id,
            BlockedSeatModel.is_blocked.is_(True),
        )
        rows = (await self.session.execute(stmt)).all()
        return [f'{seat_row}{seat_number}' for seat_row, seat_number in rows]

    @Logger.io
    async def get_pricing(self, *, show_id: int) -> dict[str, Decimal]:
        stmt = select(SeatPricingModel.seat_category, SeatPricingModel.price).where(
            SeatPricingModel.show_id == show_id
        )
        rows = (await self.session.execute(stmt)).all()
        return {category: Decimal(price) for category, price in rows}

    async def movie_exists(self, *, movie_id: int) -> bool:
        stmt = select(MovieModel.id).where(MovieModel.id == movie_id)
        return (await self.session.execute(stmt)).scalar_one_or_none() is not None

    async def screen_exists(self, *, screen_id: int) -> bool:
        stmt = select(ScreenModel.id).where(ScreenModel.id == screen_id)
        return (await self.session.execute(stmt)).scalar_one_or_none() is not None

    @Logger.io
    async def find_active_show_at(
        self,
        *,
        screen_id: int,
        show_date: date,
        show_time: time,
        exclude_show_id: Optional[int] = None,
    ) -> Optional[int]:
        stmt = select(ShowModel.id).where(
            ShowModel.screen_id == screen_id,
            ShowModel.show_date == show_date,
            ShowModel.show_time == show_time,
            ShowModel.status == ShowStatus.ACTIVE.value,
        )
        if exclude_show_id is not None:
            stmt = stmt.where(ShowModel.id != exclude_show_id)
        return (await self.session.execute(stmt.limit(1))).scalar_one_or_none()

    @Logger.io
    async def create(self, *, show: Show) -> Show:
        db_show = ShowModel(
            movie_id=show.movie_id,
            screen_id=show.screen_id,
            show_date=show.show_date,
            show_time=show.show_time,
            base_price=show.base_price,
            format=show.format,
            language=show.language,
            status=show.status.value,
        )
        self.session.add(db_show)
        await self.session.flush()
        return self._to_entity(db_show)

    @Logger.io
    async def update(self, *, show: Show) -> Show:
        db_show = await self.session.get(ShowModel, show.id)
        if db_show is None:
            raise NotFoundError('Show not found')
        db_show.show_date = show.show_date
        db_show.show_time = show.show_time
        db_show.base_price = show.base_price
        db_show.status = show.status.value
        db_show.format = show.format
        db_show.language = show.language
        await self.session.flush()
        return self._to_entity(db_show)

    @Logger.io
    async def save_pricing(self, *, show_id: int, prices: dict[str, Decimal]) -> None:
        stmt = select(SeatPricingModel).where(SeatPricingModel.show_id == show_id)
        existing = {row.seat_category: row for row in (await self.session.scalars(stmt)).all()}
        for category, price in prices.items():
            if category in existing:
                existing[category].price = price
            else:
                self.session.add(
                    SeatPricingModel(show_id=show_id, seat_category=category, price=price)
                )
        await self.session.flush()
