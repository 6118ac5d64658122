import json
from decimal import Decimal
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Cinema Booking'
    VERSION: str = '0.1.0'
    ENVIRONMENT: str = 'development'  # development exposes internal error detail
    DEBUG: bool = True  # Set to False in production

    # Logging
    SERVICE_NAME: str = 'cinema-booking'
    LOG_DIR: Path = _PROJECT_ROOT / 'logs'  # rotating file sink, DEBUG only

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ALGORITHM: str = 'HS256'

    # CORS
    # NoDecode: the validator below receives the raw string, comma or JSON list
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return json.loads(v)
        if isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'cinema_booking'
    DATABASE_URL: Optional[str] = None  # full URL override, e.g. sqlite+aiosqlite:///./dev.db

    # Pool tuning (ignored by SQLite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Booking rules
    SEAT_HOLD_MINUTES: int = 10
    BOOKING_CANCEL_CUTOFF_HOURS: int = 2
    CONVENIENCE_FEE_RATE: Decimal = Decimal('0.05')
    GST_RATE: Decimal = Decimal('0.18')
    CATEGORY_PRICE_MULTIPLIERS: dict[str, Decimal] = {
        'regular': Decimal('1'),
        'premium': Decimal('1.2'),
        'recliner': Decimal('1.5'),
    }

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == 'development'


settings = Settings()  # type: ignore
