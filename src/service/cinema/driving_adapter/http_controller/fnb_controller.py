from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.order_fnb_use_case import OrderFnbUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.cinema.driving_adapter.http_controller.schema.fnb_schema import (
    FnbOrderedItem,
    FnbOrderRequest,
    FnbOrderResponse,
)


router = APIRouter()


@router.post('/order')
@Logger.io
async def order_fnb(
    request: FnbOrderRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: OrderFnbUseCase = Depends(OrderFnbUseCase.depends),
) -> FnbOrderResponse:
    ordered = await use_case.execute(
        user_id=current_user.id,
        booking_id=request.booking_id,
        items=[(item.item_id, item.quantity) for item in request.items],
    )
    return FnbOrderResponse(
        booking_id=ordered.booking_id,
        fnb_total=ordered.fnb_total,
        total_amount=ordered.total_amount,
        ordered_items=[
            FnbOrderedItem(
                item_id=order.snack_id,
                name=order.snack_name,
                quantity=order.quantity,
                price=order.price_at_order,
                line_total=order.line_total,
            )
            for order in ordered.orders
        ],
    )
