from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from src.service.cinema.domain.value_object.fee_breakdown import to_money


# Amounts go out as JSON numbers rounded to two places
Money = Annotated[
    Decimal,
    PlainSerializer(lambda value: float(to_money(value)), return_type=float, when_used='json'),
]


class CamelRequest(BaseModel):
    """Request bodies: camelCase keys only, unknown keys rejected."""

    model_config = ConfigDict(alias_generator=to_camel, extra='forbid')


class CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeeBreakdownResponse(CamelResponse):
    tickets: Money
    fnb: Money
    convenience_fee: Money
    gst: Money
    total: Money
