from datetime import timedelta
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.clock import Clock
from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InvalidInputError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_dto import FnbOrdered
from src.service.cinema.app.service.hold_manager import HoldManager
from src.service.cinema.app.service.pricing_resolver import PricingResolver
from src.service.cinema.domain.entity.fnb_entity import FoodOrder


class OrderFnbUseCase:
    """Add snacks to a booking that is still awaiting payment and refresh its total."""

    def __init__(self, *, uow: AbstractUnitOfWork, settings: Settings, clock: Clock) -> None:
        self.uow = uow
        self.settings = settings
        self.clock = clock

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
        self, *, user_id: int, booking_id: int, items: list[tuple[int, int]]
    ) -> FnbOrdered:
        """`items` holds (snack id, quantity) pairs."""
        if not items:
            raise InvalidInputError('At least one item must be ordered')

        now = self.clock()
        async with self.uow:
            booking = await self.uow.booking_repo.get_owned(booking_id=booking_id, user_id=user_id)
            if not booking:
                raise NotFoundError('Booking not found')
            booking.validate_accepts_fnb()

            snacks = await self.uow.fnb_repo.get_snacks(snack_ids=[item_id for item_id, _ in items])
            orders = []
            for item_id, quantity in items:
                if item_id not in snacks:
                    raise NotFoundError(f'Item {item_id} not found')
                orders.append(
                    FoodOrder.for_snack(
                        booking_id=booking_id, snack=snacks[item_id], quantity=quantity
                    )
                )
            orders = await self.uow.fnb_repo.add_orders(orders=orders)
            fnb_total = await self.uow.fnb_repo.total_for_booking(booking_id=booking_id)

            holds = HoldManager(
                seat_hold_repo=self.uow.seat_hold_repo,
                window=timedelta(minutes=self.settings.SEAT_HOLD_MINUTES),
            )
            live_holds = await holds.live_holds_for_booking(booking_id=booking_id, now=now)
            pricing = PricingResolver(
                show_repo=self.uow.show_repo,
                convenience_fee_rate=self.settings.CONVENIENCE_FEE_RATE,
                gst_rate=self.settings.GST_RATE,
            )
            ticket_total = await pricing.ticket_total(
                show_id=booking.show_id, categories=[hold.seat_category for hold in live_holds]
            )
            breakdown = pricing.derive_total(raw_ticket_total=ticket_total, fnb_total=fnb_total)
            await self.uow.booking_repo.update_total(
                booking_id=booking_id, total_amount=breakdown.total
            )
            await self.uow.commit()

        return FnbOrdered(
            booking_id=booking_id,
            orders=orders,
            fnb_total=fnb_total,
            total_amount=breakdown.total,
        )
