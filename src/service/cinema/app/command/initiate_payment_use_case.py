from datetime import timedelta
from decimal import Decimal
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.clock import Clock
from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import GoneError, NotFoundError, PolicyViolationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.dto.booking_dto import PaymentInitiated
from src.service.cinema.app.service.hold_manager import HoldManager
from src.service.cinema.app.service.pricing_resolver import PricingResolver
from src.service.cinema.app.service.reference_generator import transaction_id, unique_code
from src.service.cinema.domain.entity.payment_entity import Payment
from src.service.cinema.domain.enum.booking_status import BookingStatus


class InitiatePaymentUseCase:
    """
    Open a pending payment against a pending booking.

    The amount is always recomputed from the seats the booking still holds
    and current pricing; whatever the client believes the total is, is
    ignored. A booking whose holds have all lapsed is failed here.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, settings: Settings, clock: Clock) -> None:
        self.uow = uow
        self.settings = settings
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow=uow, settings=settings, clock=clock)

    @Logger.io
    async def execute(
        self, *, user_id: int, booking_id: int, payment_method: str, includes_fnb: bool
    ) -> PaymentInitiated:
        now = self.clock()
        with self.tracer.start_as_current_span(
            'use_case.initiate_payment', attributes={'booking.id': booking_id}
        ):
            async with self.uow:
                booking = await self.uow.booking_repo.get_owned(
                    booking_id=booking_id, user_id=user_id
                )
                if not booking:
                    raise NotFoundError('Booking not found')
                booking.validate_can_initiate_payment()

                holds = HoldManager(
                    seat_hold_repo=self.uow.seat_hold_repo,
                    window=timedelta(minutes=self.settings.SEAT_HOLD_MINUTES),
                )
                live_holds = await holds.live_holds_for_booking(booking_id=booking_id, now=now)
                if not live_holds:
                    if not await self.uow.booking_repo.transition_status(
                        booking=booking.fail(), expected=BookingStatus.PENDING
                    ):
                        raise PolicyViolationError('Booking is no longer pending')
                    await self.uow.payment_repo.fail_pending_for_booking(booking_id=booking_id)
                    await self.uow.commit()
                    metrics.record_payment_resolved(outcome='holds_expired')
                    Logger.base.info(
                        f'⌛ [PAYMENT] {booking.booking_reference} failed: every seat hold expired'
                    )
                    raise GoneError('Seat hold has expired. Please select seats again.')

                pricing = PricingResolver(
                    show_repo=self.uow.show_repo,
                    convenience_fee_rate=self.settings.CONVENIENCE_FEE_RATE,
                    gst_rate=self.settings.GST_RATE,
                )
                ticket_total = await pricing.ticket_total(
                    show_id=booking.show_id, categories=[hold.seat_category for hold in live_holds]
                )
                fnb_total = (
                    await self.uow.fnb_repo.total_for_booking(booking_id=booking_id)
                    if includes_fnb
                    else Decimal('0')
                )
                breakdown = pricing.derive_total(raw_ticket_total=ticket_total, fnb_total=fnb_total)

                await self.uow.booking_repo.update_total(
                    booking_id=booking_id, total_amount=breakdown.total
                )
                # Only the newest attempt stays open
                await self.uow.payment_repo.fail_pending_for_booking(booking_id=booking_id)

                txn = await unique_code(
                    transaction_id,
                    lambda code: self.uow.payment_repo.transaction_exists(transaction_id=code),
                )
                payment = await self.uow.payment_repo.create(
                    payment=Payment.initiate(
                        booking_id=booking_id,
                        transaction_id=txn,
                        amount=breakdown.total,
                        method=payment_method,
                        breakdown=breakdown.to_document(),
                        now=now,
                    )
                )
                await self.uow.commit()

            Logger.base.info(
                f'💳 [PAYMENT] {txn} initiated for {booking.booking_reference}: {breakdown.total}'
            )
            return PaymentInitiated(payment=payment, breakdown=breakdown)
