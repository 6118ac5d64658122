from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import GoneError, NotFoundError
from src.service.cinema.domain.enum.show_status import ShowStatus


@attrs.define
class Show:
    movie_id: int
    screen_id: int
    show_date: date
    show_time: time
    base_price: Decimal
    status: ShowStatus = ShowStatus.ACTIVE
    format: Optional[str] = None
    language: Optional[str] = None
    id: Optional[int] = None
    # Read-side details joined from movie / screen
    movie_title: Optional[str] = None
    theater_name: Optional[str] = None
    screen_name: Optional[str] = None

    @property
    def starts_at(self) -> datetime:
        """Show dates and times are stored as UTC wall-clock values."""
        return datetime.combine(self.show_date, self.show_time, tzinfo=timezone.utc)

    def validate_bookable(self, *, now: datetime) -> None:
        if self.status != ShowStatus.ACTIVE:
            raise NotFoundError('Show not found or not active')
        if self.starts_at <= now:
            raise GoneError('Show has already started')

    def apply_changes(self, changes: 'ShowChanges') -> 'Show':
        return attrs.evolve(
            self,
            show_date=self.show_date if changes.show_date is None else changes.show_date,
            show_time=self.show_time if changes.show_time is None else changes.show_time,
            base_price=self.base_price if changes.base_price is None else changes.base_price,
            status=self.status if changes.status is None else changes.status,
            format=self.format if changes.format is None else changes.format,
            language=self.language if changes.language is None else changes.language,
        )


@attrs.frozen
class ShowChanges:
    """The only show fields an admin update may touch."""

    show_date: Optional[date] = None
    show_time: Optional[time] = None
    base_price: Optional[Decimal] = None
    status: Optional[ShowStatus] = None
    format: Optional[str] = None
    language: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.show_date,
                self.show_time,
                self.base_price,
                self.status,
                self.format,
                self.language,
            )
        )

    @property
    def moves_slot(self) -> bool:
        return self.show_date is not None or self.show_time is not None
