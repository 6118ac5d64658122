from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidInputError


@attrs.frozen
class Snack:
    id: int
    name: str
    price: Decimal
    is_available: bool = True


@attrs.define
class FoodOrder:
    booking_id: int
    snack_id: int
    quantity: int
    price_at_order: Decimal
    id: Optional[int] = None
    snack_name: Optional[str] = None

    @classmethod
    def for_snack(cls, *, booking_id: int, snack: Snack, quantity: int) -> 'FoodOrder':
        if quantity < 1:
            raise InvalidInputError(f'Quantity for item {snack.id} must be at least 1')
        if not snack.is_available:
            raise InvalidInputError(f'{snack.name} is not available')
        return cls(
            booking_id=booking_id,
            snack_id=snack.id,
            quantity=quantity,
            price_at_order=snack.price,
            snack_name=snack.name,
        )

    @property
    def line_total(self) -> Decimal:
        return self.price_at_order * self.quantity
