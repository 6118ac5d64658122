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
from src.platform.exception.exceptions import ConflictError, NotFoundError, SeatConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.dto.booking_dto import BookingCreated
from src.service.cinema.app.service.conflict_detector import ConflictDetector
from src.service.cinema.app.service.hold_manager import HoldManager
from src.service.cinema.app.service.pricing_resolver import PricingResolver
from src.service.cinema.app.service.reference_generator import booking_reference, unique_code
from src.service.cinema.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Reserve seats for a show and open a pending booking.

    Flow (one transaction):
    1. Show must exist, be active and not have started
    2. Requested labels are classified against the screen layout
    3. Conflict check: confirmed, live-held or blocked seats abort the request
    4. Seat prices are resolved per category and fees derived
    5. Holds are inserted (the unique claim index settles races) and the
       booking row is created, then the holds are attached to it
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
        self,
        *,
        user_id: int,
        show_id: int,
        seats: list[str],
        user_email: str,
        user_mobile: str,
    ) -> BookingCreated:
        now = self.clock()
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'show.id': show_id, 'user.id': user_id, 'seat.count': len(seats)},
        ):
            async with self.uow:
                show = await self.uow.show_repo.get_by_id(show_id=show_id)
                if not show:
                    raise NotFoundError('Show not found')
                show.validate_bookable(now=now)

                layout = await self.uow.show_repo.get_layout(screen_id=show.screen_id)
                if layout is None:
                    raise NotFoundError('Seat layout not found for this screen')
                classified = layout.classify(seats)

                detector = ConflictDetector(
                    seat_hold_repo=self.uow.seat_hold_repo, show_repo=self.uow.show_repo
                )
                conflicts = await detector.find_conflicts(
                    show_id=show_id, screen_id=show.screen_id, labels=seats, now=now
                )
                if conflicts:
                    metrics.record_seat_conflict(show_id=show_id, stage='detect')
                    raise SeatConflictError(conflicts)

                pricing = PricingResolver(
                    show_repo=self.uow.show_repo,
                    convenience_fee_rate=self.settings.CONVENIENCE_FEE_RATE,
                    gst_rate=self.settings.GST_RATE,
                )
                raw_total = await pricing.ticket_total(
                    show_id=show_id,
                    categories=[name for name, labels in classified.items() for _ in labels],
                )
                breakdown = pricing.derive_total(raw_ticket_total=raw_total, fnb_total=Decimal('0'))

                holds = HoldManager(
                    seat_hold_repo=self.uow.seat_hold_repo,
                    window=timedelta(minutes=self.settings.SEAT_HOLD_MINUTES),
                )
                try:
                    held_until = await holds.place_holds(
                        user_id=user_id, show_id=show_id, classified_seats=classified, now=now
                    )
                except SeatConflictError:
                    metrics.record_seat_conflict(show_id=show_id, stage='insert')
                    raise

                reference = await unique_code(
                    booking_reference,
                    lambda code: self.uow.booking_repo.reference_exists(booking_reference=code),
                )
                booking = await self.uow.booking_repo.create(
                    booking=Booking.create(
                        user_id=user_id,
                        show_id=show_id,
                        booking_reference=reference,
                        total_amount=breakdown.total,
                        user_email=user_email,
                        user_mobile=user_mobile,
                        now=now,
                    )
                )
                assert booking.id is not None

                attached = await holds.attach_to_booking(
                    booking_id=booking.id,
                    show_id=show_id,
                    user_id=user_id,
                    held_until=held_until,
                    labels=seats,
                )
                if attached != len(seats):
                    raise ConflictError('Seat holds changed while booking, please retry')

                await self.uow.commit()

            metrics.record_booking_created(show_id=show_id, seat_count=len(seats))
            Logger.base.info(
                f'🎟️ [BOOKING] {booking.booking_reference} created: show={show_id} '
                f'user={user_id} seats={seats} total={breakdown.total}'
            )
            return BookingCreated(
                booking=booking,
                show=show,
                seats=seats,
                held_until=held_until,
                breakdown=breakdown,
            )
