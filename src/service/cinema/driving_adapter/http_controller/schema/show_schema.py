from datetime import date, time
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import Field

from src.service.cinema.domain.entity.show_entity import ShowChanges
from src.service.cinema.domain.enum.show_status import ShowStatus
from src.service.cinema.driving_adapter.http_controller.schema.camel_model import (
    CamelRequest,
    CamelResponse,
    Money,
)


class ShowCreateRequest(CamelRequest):
    movie_id: int = Field(gt=0)
    screen_id: int = Field(gt=0)
    show_date: date
    show_time: time
    base_price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    format: Optional[Literal['2D', '3D', 'IMAX', '4DX']] = None
    language: Optional[str] = Field(default=None, max_length=50)

    model_config = {
        'json_schema_extra': {
            'example': {
                'movieId': 1,
                'screenId': 2,
                'showDate': '2026-01-12',
                'showTime': '18:30:00',
                'basePrice': 200,
                'format': '2D',
                'language': 'English',
            }
        },
    }


class ShowUpdateRequest(CamelRequest):
    """Fields outside this model are rejected with 400."""

    show_date: Optional[date] = None
    show_time: Optional[time] = None
    base_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    status: Optional[ShowStatus] = None
    format: Optional[Literal['2D', '3D', 'IMAX', '4DX']] = None
    language: Optional[str] = Field(default=None, max_length=50)

    def to_changes(self) -> ShowChanges:
        return ShowChanges(
            show_date=self.show_date,
            show_time=self.show_time,
            base_price=self.base_price,
            status=self.status,
            format=self.format,
            language=self.language,
        )


class ShowScheduledResponse(CamelResponse):
    success: bool = True
    message: str
    show_id: int
    show_date: date
    show_time: time
    base_price: Money
    status: ShowStatus
    pricing: Dict[str, Money]


class CategorySeatsResponse(CamelResponse):
    rows: List[str]
    seats_per_row: int
    price: Optional[Money] = None


class ShowSeatMapResponse(CamelResponse):
    success: bool = True
    show_id: int
    movie: Optional[str] = None
    theater: Optional[str] = None
    screen: Optional[str] = None
    show_date: date
    show_time: time
    layout: Dict[str, CategorySeatsResponse]
    booked_seats: List[str]
    blocked_seats: List[str]
    total_capacity: int
    available_count: int
