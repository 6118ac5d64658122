"""
Test Configuration and Fixtures

This module provides:
- Environment setup before application modules read settings
- A throwaway SQLite database per test, built from ORM metadata
- A controllable clock injected through the DI container
- Catalog seeding helpers (movie, screen, layout, show, pricing, snacks)
- An httpx client bound to the ASGI app and bearer tokens for it

Architecture:
- Unit tests (`*_unit_test.py`): mocks only, no database
- Integration tests (`*_integration_test.py`): real repositories on SQLite
"""

# =============================================================================
# Environment setup MUST happen before any other imports: settings and the
# loguru sinks are built at import time.
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['LOG_DIR'] = str(test_log_dir)
    os.environ['ENVIRONMENT'] = 'test'
    os.environ['DEBUG'] = 'false'
    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from datetime import date, datetime, time, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any  # noqa: E402

from dependency_injector import providers  # noqa: E402
import httpx  # noqa: E402
import pytest  # noqa: E402

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.database.orm_db_setting import Database, create_db_and_tables  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.service.cinema.app.service.pricing_resolver import price_sheet  # noqa: E402
from src.service.cinema.domain.entity.user_entity import UserEntity  # noqa: E402
from src.service.cinema.driven_adapter.model import (  # noqa: E402
    BlockedSeatModel,
    MovieModel,
    ScreenModel,
    SeatLayoutModel,
    SeatPricingModel,
    ShowModel,
    SnackModel,
)
from test.cinema_constants import (  # noqa: E402
    BASE_PRICE,
    BUYER_ID,
    DEFAULT_LAYOUT,
    SHOW_DATE,
    SHOW_TIME,
    TEST_NOW,
)


class FakeClock:
    """Callable clock the container hands to every use case."""

    def __init__(self, now: datetime = TEST_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)

    def set(self, now: datetime) -> None:
        self.now = now


@pytest.fixture
def clock() -> Generator[FakeClock, None, None]:
    fake = FakeClock()
    container.clock.override(providers.Object(fake))
    yield fake
    container.clock.reset_override()


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    # A file database so that separate sessions see each other's commits
    db = Database(f'sqlite+aiosqlite:///{tmp_path / "cinema_test.db"}')
    await create_db_and_tables(db)
    container.database.override(providers.Object(db))
    yield db
    container.database.reset_override()
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(session_factory=database.session_factory)


class CatalogSeeder:
    """Writes catalog rows straight through the ORM."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def _add(self, row: Any) -> Any:
        async with self.database.session() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
            return row

    async def movie(self, title: str = 'Interstellar') -> int:
        return (await self._add(MovieModel(title=title, language='English'))).id

    async def screen(
        self, layout: dict[str, Any] | None = None, name: str = 'Audi 1'
    ) -> int:
        screen = await self._add(ScreenModel(theater_name='PVR Forum', name=name))
        await self._add(
            SeatLayoutModel(screen_id=screen.id, layout_data=layout or DEFAULT_LAYOUT)
        )
        return screen.id

    async def screen_without_layout(self, name: str = 'Audi 9') -> int:
        return (await self._add(ScreenModel(theater_name='PVR Forum', name=name))).id

    async def block(self, *, screen_id: int, row: str, number: int) -> None:
        await self._add(BlockedSeatModel(screen_id=screen_id, seat_row=row, seat_number=number))

    async def show(
        self,
        *,
        movie_id: int,
        screen_id: int,
        show_date: date = SHOW_DATE,
        show_time: time = SHOW_TIME,
        base_price: Decimal = BASE_PRICE,
        layout: dict[str, Any] | None = None,
        status: str = 'active',
    ) -> int:
        show = await self._add(
            ShowModel(
                movie_id=movie_id,
                screen_id=screen_id,
                show_date=show_date,
                show_time=show_time,
                base_price=base_price,
                format='2D',
                language='English',
                status=status,
            )
        )
        multipliers = container.config_service().CATEGORY_PRICE_MULTIPLIERS
        for category, price in price_sheet(
            base_price, (layout or DEFAULT_LAYOUT).keys(), multipliers
        ).items():
            await self._add(SeatPricingModel(show_id=show.id, seat_category=category, price=price))
        return show.id

    async def snack(self, name: str = 'Popcorn', price: str = '150', available: bool = True) -> int:
        return (
            await self._add(SnackModel(name=name, price=Decimal(price), is_available=available))
        ).id

    async def default_show(self) -> dict[str, int]:
        movie_id = await self.movie()
        screen_id = await self.screen()
        show_id = await self.show(movie_id=movie_id, screen_id=screen_id)
        return {'movie_id': movie_id, 'screen_id': screen_id, 'show_id': show_id}


@pytest.fixture
def seed(database: Database) -> CatalogSeeder:
    return CatalogSeeder(database)


@pytest.fixture
def token_for() -> Callable[..., dict[str, str]]:
    def _headers(user_id: int = BUYER_ID, *, is_admin: bool = False) -> dict[str, str]:
        token = container.jwt_auth().create_jwt_token(
            UserEntity(id=user_id, email=f'user{user_id}@example.com', is_admin=is_admin)
        )
        return {'Authorization': f'Bearer {token}'}

    return _headers


@pytest.fixture
async def client(
    database: Database, clock: FakeClock
) -> AsyncGenerator[httpx.AsyncClient, None]:
    container.wire(modules=WIRE_MODULES)
    app = create_app(lifespan=_no_lifespan, title_suffix=' (Test)')
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url='http://test') as http_client:
        yield http_client
    container.unwire()


@asynccontextmanager
async def _no_lifespan(app: Any) -> AsyncGenerator[None, None]:
    # The database and wiring are provided by fixtures
    yield
