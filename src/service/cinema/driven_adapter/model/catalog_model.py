from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class MovieModel(Base):
    __tablename__ = 'movie'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    language: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class ScreenModel(Base):
    __tablename__ = 'screen'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    theater_name: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class SeatLayoutModel(Base):
    __tablename__ = 'seat_layout'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    screen_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('screen.id'), nullable=False, unique=True
    )
    # {"<category>": {"rows": ["A", "B"], "seatsPerRow": 10}}
    layout_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)


class BlockedSeatModel(Base):
    __tablename__ = 'blocked_seat'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    screen_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('screen.id'), nullable=False, index=True
    )
    seat_row: Mapped[str] = mapped_column(String(2), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    is_blocked: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint('screen_id', 'seat_row', 'seat_number', name='uq_blocked_seat'),
    )
