"""
Wire Modules Configuration

Modules whose `Provide[...]` markers the container resolves.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import (
    cancel_booking_use_case,
    confirm_payment_use_case,
    create_booking_use_case,
    create_show_use_case,
    initiate_payment_use_case,
    order_fnb_use_case,
    update_show_use_case,
)
from src.service.cinema.app.query import (
    get_booking_use_case,
    get_show_seats_use_case,
    list_bookings_use_case,
)
from src.service.cinema.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    initiate_payment_use_case,
    confirm_payment_use_case,
    cancel_booking_use_case,
    create_show_use_case,
    update_show_use_case,
    order_fnb_use_case,
    list_bookings_use_case,
    get_booking_use_case,
    get_show_seats_use_case,
    role_auth,
]
