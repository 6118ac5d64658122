"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.clock import utc_now
from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Object(settings)

    # Store handle: one engine per process, disposed in the lifespan
    database = providers.Singleton(Database, db_url=config_service.provided.DATABASE_URL_ASYNC)

    # One transaction per use-case call
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session_factory
    )

    # Time source (overridden in tests)
    clock = providers.Object(utc_now)

    # Auth service
    jwt_auth = providers.Singleton(
        JwtAuth,
        secret_key=config_service.provided.SECRET_KEY,
        algorithm=config_service.provided.ALGORITHM,
        expire_minutes=config_service.provided.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


container = Container()


async def cleanup() -> None:
    database = container.database()
    await database.dispose()
    container.reset_singletons()
