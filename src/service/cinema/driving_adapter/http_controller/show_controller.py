from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_show_use_case import CreateShowUseCase
from src.service.cinema.app.command.update_show_use_case import UpdateShowUseCase
from src.service.cinema.app.dto.booking_dto import ShowScheduled
from src.service.cinema.app.query.get_show_seats_use_case import GetShowSeatsUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.show_schema import (
    CategorySeatsResponse,
    ShowCreateRequest,
    ShowScheduledResponse,
    ShowSeatMapResponse,
    ShowUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _scheduled_response(scheduled: ShowScheduled, message: str) -> ShowScheduledResponse:
    show = scheduled.show
    if show.id is None:
        raise ValueError('Show ID should not be None after saving.')
    return ShowScheduledResponse(
        message=message,
        show_id=show.id,
        show_date=show.show_date,
        show_time=show.show_time,
        base_price=show.base_price,
        status=show.status,
        pricing=scheduled.pricing,
    )


@router.get('/{show_id}/seats')
@Logger.io
async def get_show_seats(
    show_id: int,
    use_case: GetShowSeatsUseCase = Depends(GetShowSeatsUseCase.depends),
) -> ShowSeatMapResponse:
    seat_map = await use_case.execute(show_id=show_id)
    show, layout = seat_map.show, seat_map.layout
    unavailable = set(seat_map.booked_seats) | set(seat_map.blocked_seats)
    return ShowSeatMapResponse(
        show_id=show_id,
        movie=show.movie_title,
        theater=show.theater_name,
        screen=show.screen_name,
        show_date=show.show_date,
        show_time=show.show_time,
        layout={
            category.name: CategorySeatsResponse(
                rows=list(category.rows),
                seats_per_row=category.seats_per_row,
                price=seat_map.pricing.get(category.name),
            )
            for category in layout.categories
        },
        booked_seats=seat_map.booked_seats,
        blocked_seats=seat_map.blocked_seats,
        total_capacity=layout.total_capacity(),
        available_count=max(layout.total_capacity() - len(unavailable), 0),
    )


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_show(
    request: ShowCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateShowUseCase = Depends(CreateShowUseCase.depends),
) -> ShowScheduledResponse:
    with tracer.start_as_current_span('controller.create_show') as span:
        span.set_attribute('screen_id', request.screen_id)
        scheduled = await use_case.execute(
            movie_id=request.movie_id,
            screen_id=request.screen_id,
            show_date=request.show_date,
            show_time=request.show_time,
            base_price=request.base_price,
            format=request.format,
            language=request.language,
        )
        return _scheduled_response(scheduled, 'Show created successfully')


@router.patch('/{show_id}')
@Logger.io
async def update_show(
    show_id: int,
    request: ShowUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateShowUseCase = Depends(UpdateShowUseCase.depends),
) -> ShowScheduledResponse:
    scheduled = await use_case.execute(show_id=show_id, changes=request.to_changes())
    return _scheduled_response(scheduled, 'Show updated successfully')
