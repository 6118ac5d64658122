"""Mocked unit of work for use-case unit tests: repositories are AsyncMocks."""

from decimal import Decimal
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.config.core_setting import Settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.value_object.seat_layout import SeatLayout
from test.cinema_constants import BASE_PRICE, DEFAULT_LAYOUT, SHOW_DATE, SHOW_TIME


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.show_repo = AsyncMock()
        self.seat_hold_repo = AsyncMock()
        self.booking_repo = AsyncMock()
        self.payment_repo = AsyncMock()
        self.fnb_repo = AsyncMock()
        self.committed = 0
        self.rolled_back = 0

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def show() -> Show:
    return Show(
        id=1,
        movie_id=1,
        screen_id=1,
        show_date=SHOW_DATE,
        show_time=SHOW_TIME,
        base_price=BASE_PRICE,
        movie_title='Interstellar',
        theater_name='PVR Forum',
        screen_name='Audi 1',
    )


@pytest.fixture
def stocked_uow(uow: FakeUnitOfWork, show: Show) -> FakeUnitOfWork:
    """Show 1 on screen 1 with the default layout, priced and with nothing taken."""
    uow.show_repo.get_by_id.return_value = show
    uow.show_repo.get_layout.return_value = SeatLayout.from_document(DEFAULT_LAYOUT)
    uow.show_repo.list_blocked_seats.return_value = []
    uow.show_repo.get_pricing.return_value = {
        'regular': Decimal('100'),
        'premium': Decimal('120'),
        'recliner': Decimal('150'),
    }
    uow.seat_hold_repo.list_claims.return_value = []
    uow.booking_repo.reference_exists.return_value = False
    uow.booking_repo.create.side_effect = lambda booking: attrs.evolve(booking, id=42)
    return uow
