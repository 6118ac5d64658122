from typing import Literal

from pydantic import Field

from src.service.cinema.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.cinema.driving_adapter.http_controller.schema.camel_model import (
    CamelRequest,
    CamelResponse,
    FeeBreakdownResponse,
    Money,
)


class PaymentInitiateRequest(CamelRequest):
    booking_id: int = Field(gt=0)
    payment_method: Literal['card', 'upi', 'netbanking', 'wallet']
    includes_fnb: bool = False

    model_config = {
        'json_schema_extra': {
            'example': {'bookingId': 12, 'paymentMethod': 'upi', 'includesFnb': True}
        },
    }


class PaymentInitiatedResponse(CamelResponse):
    success: bool = True
    transaction_id: str
    amount: Money
    breakdown: FeeBreakdownResponse


class PaymentConfirmRequest(CamelRequest):
    booking_id: int = Field(gt=0)
    transaction_id: str = Field(pattern=r'^TXN\d{6}$')
    status: Literal['success', 'failed']

    model_config = {
        'json_schema_extra': {
            'example': {'bookingId': 12, 'transactionId': 'TXN123456', 'status': 'success'}
        },
    }


class PaymentConfirmedResponse(CamelResponse):
    success: bool = True
    message: str
    booking_id: int
    booking_reference: str
    transaction_id: str
    booking_status: BookingStatus
    payment_status: PaymentStatus
