from typing import List

from pydantic import Field

from src.service.cinema.driving_adapter.http_controller.schema.camel_model import (
    CamelRequest,
    CamelResponse,
    Money,
)


class FnbItemRequest(CamelRequest):
    item_id: int = Field(gt=0)
    quantity: int = Field(ge=1, le=20)


class FnbOrderRequest(CamelRequest):
    booking_id: int = Field(gt=0)
    items: List[FnbItemRequest] = Field(min_length=1)

    model_config = {
        'json_schema_extra': {
            'example': {'bookingId': 12, 'items': [{'itemId': 3, 'quantity': 2}]}
        },
    }


class FnbOrderedItem(CamelResponse):
    item_id: int
    name: str | None = None
    quantity: int
    price: Money
    line_total: Money


class FnbOrderResponse(CamelResponse):
    success: bool = True
    booking_id: int
    fnb_total: Money
    total_amount: Money
    ordered_items: List[FnbOrderedItem]
