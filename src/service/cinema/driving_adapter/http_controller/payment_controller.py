from fastapi import APIRouter, Depends
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.cinema.app.command.initiate_payment_use_case import InitiatePaymentUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.booking_status import BookingStatus, PaymentOutcome
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.cinema.driving_adapter.http_controller.schema.camel_model import (
    FeeBreakdownResponse,
)
from src.service.cinema.driving_adapter.http_controller.schema.payment_schema import (
    PaymentConfirmedResponse,
    PaymentConfirmRequest,
    PaymentInitiatedResponse,
    PaymentInitiateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/initiate')
@Logger.io
async def initiate_payment(
    request: PaymentInitiateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: InitiatePaymentUseCase = Depends(InitiatePaymentUseCase.depends),
) -> PaymentInitiatedResponse:
    with tracer.start_as_current_span('controller.initiate_payment') as span:
        span.set_attribute('booking_id', request.booking_id)
        initiated = await use_case.execute(
            user_id=current_user.id,
            booking_id=request.booking_id,
            payment_method=request.payment_method,
            includes_fnb=request.includes_fnb,
        )
        breakdown = initiated.breakdown
        return PaymentInitiatedResponse(
            transaction_id=initiated.payment.transaction_id,
            amount=initiated.payment.amount,
            breakdown=FeeBreakdownResponse(
                tickets=breakdown.tickets,
                fnb=breakdown.fnb,
                convenience_fee=breakdown.convenience_fee,
                gst=breakdown.gst,
                total=breakdown.total,
            ),
        )


@router.post('/confirm')
@Logger.io
async def confirm_payment(
    request: PaymentConfirmRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
) -> PaymentConfirmedResponse:
    with tracer.start_as_current_span('controller.confirm_payment') as span:
        span.set_attribute('booking_id', request.booking_id)
        span.set_attribute('outcome', request.status)
        resolved = await use_case.execute(
            user_id=current_user.id,
            booking_id=request.booking_id,
            transaction_id=request.transaction_id,
            outcome=PaymentOutcome(request.status),
        )
        booking = resolved.booking
        message = (
            'Payment successful. Your booking is confirmed.'
            if booking.booking_status == BookingStatus.CONFIRMED
            else 'Payment failed. Seats have been released.'
        )
        return PaymentConfirmedResponse(
            message=message,
            booking_id=request.booking_id,
            booking_reference=booking.booking_reference,
            transaction_id=resolved.payment.transaction_id,
            booking_status=booking.booking_status,
            payment_status=booking.payment_status,
        )
