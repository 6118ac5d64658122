from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_fnb_repo import IFnbRepo
from src.service.cinema.domain.entity.fnb_entity import FoodOrder, Snack
from src.service.cinema.driven_adapter.model.fnb_model import FoodOrderModel, SnackModel


class FnbRepoImpl(IFnbRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @Logger.io
    async def get_snacks(self, *, snack_ids: list[int]) -> dict[int, Snack]:
        stmt = select(SnackModel).where(SnackModel.id.in_(snack_ids))
        return {
            row.id: Snack(
                id=row.id,
                name=row.name,
                price=Decimal(row.price),
                is_available=row.is_available,
            )
            for row in (await self.session.scalars(stmt)).all()
        }

    @Logger.io
    async def add_orders(self, *, orders: list[FoodOrder]) -> list[FoodOrder]:
        db_orders = [
            FoodOrderModel(
                booking_id=order.booking_id,
                snack_id=order.snack_id,
                quantity=order.quantity,
                price_at_order=order.price_at_order,
            )
            for order in orders
        ]
        self.session.add_all(db_orders)
        await self.session.flush()
        for order, db_order in zip(orders, db_orders, strict=True):
            order.id = db_order.id
        return orders

    @Logger.io
    async def total_for_booking(self, *, booking_id: int) -> Decimal:
        stmt = select(
            func.coalesce(func.sum(FoodOrderModel.quantity * FoodOrderModel.price_at_order), 0)
        ).where(FoodOrderModel.booking_id == booking_id)
        return Decimal(str((await self.session.execute(stmt)).scalar_one()))
