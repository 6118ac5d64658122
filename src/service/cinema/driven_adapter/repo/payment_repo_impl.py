from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.clock import ensure_utc
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_payment_repo import IPaymentRepo
from src.service.cinema.domain.entity.payment_entity import Payment
from src.service.cinema.domain.enum.booking_status import PaymentStatus
from src.service.cinema.driven_adapter.model.booking_model import PaymentModel


class PaymentRepoImpl(IPaymentRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_payment: PaymentModel) -> Payment:
        return Payment(
            id=db_payment.id,
            booking_id=db_payment.booking_id,
            transaction_id=db_payment.transaction_id,
            amount=Decimal(db_payment.amount),
            method=db_payment.payment_method,
            status=PaymentStatus(db_payment.status),
            breakdown=dict(db_payment.breakdown or {}),
            created_at=ensure_utc(db_payment.created_at),
        )

    @Logger.io
    async def create(self, *, payment: Payment) -> Payment:
        db_payment = PaymentModel(
            booking_id=payment.booking_id,
            transaction_id=payment.transaction_id,
            amount=payment.amount,
            payment_method=payment.method,
            status=payment.status.value,
            breakdown=payment.breakdown,
        )
        self.session.add(db_payment)
        await self.session.flush()
        await self.session.refresh(db_payment)
        return self._to_entity(db_payment)

    @Logger.io
    async def get_for_booking(self, *, transaction_id: str, booking_id: int) -> Optional[Payment]:
        stmt = select(PaymentModel).where(
            PaymentModel.transaction_id == transaction_id,
            PaymentModel.booking_id == booking_id,
        )
        db_payment = (await self.session.scalars(stmt)).one_or_none()
        return self._to_entity(db_payment) if db_payment else None

    @Logger.io
    async def resolve_pending(self, *, payment: Payment) -> bool:
        stmt = (
            sql_update(PaymentModel)
            .where(
                PaymentModel.id == payment.id,
                PaymentModel.status == PaymentStatus.PENDING.value,
            )
            .values(status=payment.status.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1

    @Logger.io
    async def fail_pending_for_booking(self, *, booking_id: int) -> int:
        stmt = (
            sql_update(PaymentModel)
            .where(
                PaymentModel.booking_id == booking_id,
                PaymentModel.status == PaymentStatus.PENDING.value,
            )
            .values(status=PaymentStatus.FAILED.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def transaction_exists(self, *, transaction_id: str) -> bool:
        stmt = select(PaymentModel.id).where(PaymentModel.transaction_id == transaction_id)
        return (await self.session.execute(stmt)).scalar_one_or_none() is not None
