"""Show creation is all-or-nothing with respect to category pricing."""

from datetime import time
from decimal import Decimal

from sqlalchemy import func, select
import pytest

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import ConflictError, PricingMissingError
from src.service.cinema.app.command.create_show_use_case import CreateShowUseCase
from src.service.cinema.driven_adapter.model import SeatPricingModel, ShowModel
from test.cinema_constants import SHOW_DATE, SHOW_TIME


async def _count(database, model) -> int:
    async with database.session() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.fixture
def use_case(uow_factory) -> CreateShowUseCase:
    return CreateShowUseCase(uow=uow_factory(), settings=Settings(_env_file=None))


@pytest.mark.integration
class TestCreateShow:
    async def test_show_and_full_price_sheet_committed(self, seed, use_case, database) -> None:
        movie_id = await seed.movie()
        screen_id = await seed.screen()

        scheduled = await use_case.execute(
            movie_id=movie_id,
            screen_id=screen_id,
            show_date=SHOW_DATE,
            show_time=SHOW_TIME,
            base_price=Decimal('250'),
        )

        assert scheduled.show.id is not None
        assert scheduled.pricing == {
            'regular': Decimal('250'),
            'premium': Decimal('300'),
            'recliner': Decimal('375'),
        }
        assert await _count(database, ShowModel) == 1
        assert await _count(database, SeatPricingModel) == 3

    async def test_incomplete_pricing_leaves_no_show_behind(
        self, seed, use_case, database, monkeypatch
    ) -> None:
        movie_id = await seed.movie()
        screen_id = await seed.screen()
        insert_pricing = use_case._insert_pricing

        async def drop_recliner(*, show_id: int, prices: dict[str, Decimal]) -> None:
            await insert_pricing(
                show_id=show_id,
                prices={name: price for name, price in prices.items() if name != 'recliner'},
            )

        monkeypatch.setattr(use_case, '_insert_pricing', drop_recliner)

        with pytest.raises(PricingMissingError, match='recliner'):
            await use_case.execute(
                movie_id=movie_id,
                screen_id=screen_id,
                show_date=SHOW_DATE,
                show_time=SHOW_TIME,
                base_price=Decimal('250'),
            )

        assert await _count(database, ShowModel) == 0
        assert await _count(database, SeatPricingModel) == 0

    async def test_same_screen_and_slot_rejected(self, seed, use_case) -> None:
        ids = await seed.default_show()

        with pytest.raises(ConflictError):
            await use_case.execute(
                movie_id=ids['movie_id'],
                screen_id=ids['screen_id'],
                show_date=SHOW_DATE,
                show_time=SHOW_TIME,
                base_price=Decimal('250'),
            )

    async def test_other_slot_on_same_screen_allowed(self, seed, use_case) -> None:
        ids = await seed.default_show()

        scheduled = await use_case.execute(
            movie_id=ids['movie_id'],
            screen_id=ids['screen_id'],
            show_date=SHOW_DATE,
            show_time=time(22, 0),
            base_price=Decimal('250'),
        )

        assert scheduled.show.id != ids['show_id']
