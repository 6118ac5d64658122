"""Unit tests for scheduling and editing shows."""

from datetime import time
from decimal import Decimal

import attrs
import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PricingMissingError,
)
from src.service.cinema.app.command.create_show_use_case import CreateShowUseCase
from src.service.cinema.app.command.update_show_use_case import UpdateShowUseCase
from src.service.cinema.domain.entity.show_entity import ShowChanges
from src.service.cinema.domain.enum.show_status import ShowStatus
from src.service.cinema.domain.value_object.seat_layout import SeatLayout
from test.cinema_constants import SHOW_DATE, SHOW_TIME


@pytest.fixture
def create_use_case(stocked_uow, settings) -> CreateShowUseCase:
    stocked_uow.show_repo.movie_exists.return_value = True
    stocked_uow.show_repo.screen_exists.return_value = True
    stocked_uow.show_repo.find_active_show_at.return_value = None
    stocked_uow.show_repo.create.side_effect = lambda show: attrs.evolve(show, id=8)
    return CreateShowUseCase(uow=stocked_uow, settings=settings)


def _schedule_params(**overrides) -> dict:
    return {
        'movie_id': 1,
        'screen_id': 1,
        'show_date': SHOW_DATE,
        'show_time': time(21, 0),
        'base_price': Decimal('200'),
    } | overrides


@pytest.mark.unit
class TestCreateShow:
    async def test_prices_every_layout_category(self, create_use_case, stocked_uow) -> None:
        await create_use_case.execute(**_schedule_params())

        stocked_uow.show_repo.save_pricing.assert_awaited_once_with(
            show_id=8,
            prices={
                'regular': Decimal('200'),
                'premium': Decimal('240'),
                'recliner': Decimal('300'),
            },
        )
        assert stocked_uow.committed == 1

    async def test_missing_price_row_aborts_without_commit(
        self, create_use_case, stocked_uow
    ) -> None:
        stocked_uow.show_repo.get_pricing.return_value = {'regular': Decimal('200')}

        with pytest.raises(PricingMissingError, match='premium'):
            await create_use_case.execute(**_schedule_params())

        assert stocked_uow.committed == 0
        assert stocked_uow.rolled_back == 1

    async def test_occupied_slot_conflicts(self, create_use_case, stocked_uow, show) -> None:
        stocked_uow.show_repo.find_active_show_at.return_value = show
        with pytest.raises(ConflictError):
            await create_use_case.execute(**_schedule_params(show_time=SHOW_TIME))
        stocked_uow.show_repo.create.assert_not_awaited()

    async def test_unknown_movie(self, create_use_case, stocked_uow) -> None:
        stocked_uow.show_repo.movie_exists.return_value = False
        with pytest.raises(NotFoundError, match='Movie'):
            await create_use_case.execute(**_schedule_params())

    async def test_screen_without_layout(self, create_use_case, stocked_uow) -> None:
        stocked_uow.show_repo.get_layout.return_value = SeatLayout()
        with pytest.raises(InvalidInputError, match='layout'):
            await create_use_case.execute(**_schedule_params())


@pytest.mark.unit
class TestUpdateShow:
    @pytest.fixture
    def use_case(self, stocked_uow, settings) -> UpdateShowUseCase:
        stocked_uow.show_repo.find_active_show_at.return_value = None
        stocked_uow.show_repo.update.side_effect = lambda show: show
        return UpdateShowUseCase(uow=stocked_uow, settings=settings)

    async def test_empty_change_set_rejected(self, use_case, stocked_uow) -> None:
        with pytest.raises(InvalidInputError, match='No valid fields'):
            await use_case.execute(show_id=1, changes=ShowChanges())
        stocked_uow.show_repo.get_by_id.assert_not_awaited()

    async def test_new_base_price_reprices_categories(self, use_case, stocked_uow) -> None:
        scheduled = await use_case.execute(
            show_id=1, changes=ShowChanges(base_price=Decimal('150'))
        )

        assert scheduled.show.base_price == Decimal('150')
        stocked_uow.show_repo.save_pricing.assert_awaited_once_with(
            show_id=1,
            prices={
                'regular': Decimal('150'),
                'premium': Decimal('180'),
                'recliner': Decimal('225'),
            },
        )

    async def test_reprice_missing_category_aborts_without_commit(
        self, use_case, stocked_uow
    ) -> None:
        stocked_uow.show_repo.get_pricing.return_value = {
            'regular': Decimal('150'),
            'premium': Decimal('180'),
        }

        with pytest.raises(PricingMissingError, match='recliner'):
            await use_case.execute(show_id=1, changes=ShowChanges(base_price=Decimal('150')))

        assert stocked_uow.committed == 0
        assert stocked_uow.rolled_back == 1

    async def test_language_change_keeps_prices(self, use_case, stocked_uow) -> None:
        scheduled = await use_case.execute(show_id=1, changes=ShowChanges(language='Hindi'))

        assert scheduled.show.language == 'Hindi'
        stocked_uow.show_repo.save_pricing.assert_not_awaited()
        stocked_uow.show_repo.find_active_show_at.assert_not_awaited()

    async def test_moving_into_occupied_slot_conflicts(self, use_case, stocked_uow, show) -> None:
        stocked_uow.show_repo.find_active_show_at.return_value = attrs.evolve(show, id=2)

        with pytest.raises(ConflictError):
            await use_case.execute(show_id=1, changes=ShowChanges(show_time=time(9, 0)))

        stocked_uow.show_repo.find_active_show_at.assert_awaited_once_with(
            screen_id=1, show_date=SHOW_DATE, show_time=time(9, 0), exclude_show_id=1
        )
        assert stocked_uow.committed == 0

    async def test_cancelling_skips_slot_check(self, use_case, stocked_uow) -> None:
        scheduled = await use_case.execute(
            show_id=1, changes=ShowChanges(status=ShowStatus.CANCELLED)
        )
        assert scheduled.show.status == ShowStatus.CANCELLED
        stocked_uow.show_repo.find_active_show_at.assert_not_awaited()
