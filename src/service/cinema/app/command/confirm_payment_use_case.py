from datetime import timedelta
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
from src.service.cinema.app.dto.booking_dto import PaymentResolved
from src.service.cinema.app.service.hold_manager import HoldManager
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.payment_entity import Payment
from src.service.cinema.domain.enum.booking_status import BookingStatus, PaymentOutcome


class ConfirmPaymentUseCase:
    """
    Resolve a pending payment reported by the simulated gateway.

    success: live holds become confirmed seats, booking confirmed/paid.
    failed:  holds are released, booking and payment failed.
    A payment that is no longer pending is never resolved twice: the writes
    are compare-and-set on the pending status, so of two racing confirms
    the second finds nothing to update and rolls back.
    Seats that lapsed after initiation fail the whole booking.
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
        self, *, user_id: int, booking_id: int, transaction_id: str, outcome: PaymentOutcome
    ) -> PaymentResolved:
        now = self.clock()
        with self.tracer.start_as_current_span(
            'use_case.confirm_payment',
            attributes={'booking.id': booking_id, 'payment.outcome': outcome.value},
        ):
            async with self.uow:
                booking = await self.uow.booking_repo.get_owned(
                    booking_id=booking_id, user_id=user_id
                )
                if not booking:
                    raise NotFoundError('Booking not found')
                payment = await self.uow.payment_repo.get_for_booking(
                    transaction_id=transaction_id, booking_id=booking_id
                )
                if not payment:
                    raise NotFoundError('Payment not found')
                payment.validate_pending()

                holds = HoldManager(
                    seat_hold_repo=self.uow.seat_hold_repo,
                    window=timedelta(minutes=self.settings.SEAT_HOLD_MINUTES),
                )
                if outcome == PaymentOutcome.SUCCESS:
                    live_holds, lapsed = await holds.sweep_booking_holds(
                        booking_id=booking_id, now=now
                    )
                    # The amount was priced on every seat held at initiation
                    if lapsed or not live_holds:
                        await self._resolve(booking=booking.fail(), payment=payment.mark_failed())
                        await holds.release_holds(booking_id=booking_id)
                        await self.uow.commit()
                        metrics.record_payment_resolved(outcome='holds_expired')
                        raise GoneError('Seat hold has expired. Please select seats again.')
                    booking = booking.confirm()
                    payment = payment.mark_paid()
                    await self._resolve(booking=booking, payment=payment)
                    await holds.promote_holds(booking_id=booking_id)
                else:
                    booking = booking.fail()
                    payment = payment.mark_failed()
                    await self._resolve(booking=booking, payment=payment)
                    await holds.release_holds(booking_id=booking_id)

                await self.uow.commit()

            metrics.record_payment_resolved(outcome=payment.status.value)
            Logger.base.info(
                f'✅ [PAYMENT] {transaction_id} resolved as {payment.status} for '
                f'{booking.booking_reference} -> {booking.booking_status}'
            )
            return PaymentResolved(booking=booking, payment=payment)

    async def _resolve(self, *, booking: Booking, payment: Payment) -> None:
        # Another request may have resolved the payment since it was read
        if not await self.uow.payment_repo.resolve_pending(payment=payment):
            raise PolicyViolationError('Payment is already resolved. Cannot re-confirm.')
        if not await self.uow.booking_repo.transition_status(
            booking=booking, expected=BookingStatus.PENDING
        ):
            raise PolicyViolationError('Booking is no longer pending. Cannot re-confirm.')
