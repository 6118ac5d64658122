from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


# A seat can carry at most one claiming row per show; released/expired rows stay as history.
LIVE_CLAIM_PREDICATE = "status IN ('held', 'confirmed')"


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_reference: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    show_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('show.id'), nullable=False, index=True
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False)
    booking_status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)
    user_mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    booked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class BookedSeatModel(Base):
    __tablename__ = 'booked_seat'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    show_id: Mapped[int] = mapped_column(Integer, ForeignKey('show.id'), nullable=False)
    booking_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('booking.id'), nullable=True, index=True
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_label: Mapped[str] = mapped_column(String(5), nullable=False)
    seat_category: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='held', nullable=False)
    held_until: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index('ix_booked_seat_show_label', 'show_id', 'seat_label'),
        Index(
            'uq_booked_seat_live_claim',
            'show_id',
            'seat_label',
            unique=True,
            sqlite_where=text(LIVE_CLAIM_PREDICATE),
            postgresql_where=text(LIVE_CLAIM_PREDICATE),
        ),
    )


class PaymentModel(Base):
    __tablename__ = 'payment'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('booking.id'), nullable=False, index=True
    )
    transaction_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    breakdown: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
