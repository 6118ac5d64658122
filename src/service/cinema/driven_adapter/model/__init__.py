"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema.driven_adapter.model.booking_model import (
    BookedSeatModel,
    BookingModel,
    PaymentModel,
)
from src.service.cinema.driven_adapter.model.catalog_model import (
    BlockedSeatModel,
    MovieModel,
    ScreenModel,
    SeatLayoutModel,
)
from src.service.cinema.driven_adapter.model.fnb_model import FoodOrderModel, SnackModel
from src.service.cinema.driven_adapter.model.show_model import SeatPricingModel, ShowModel

__all__ = [
    'BlockedSeatModel',
    'BookedSeatModel',
    'BookingModel',
    'FoodOrderModel',
    'MovieModel',
    'PaymentModel',
    'ScreenModel',
    'SeatLayoutModel',
    'SeatPricingModel',
    'ShowModel',
    'SnackModel',
]
