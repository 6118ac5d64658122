from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.app.dto.booking_dto import BookingView
from src.service.cinema.app.query.get_booking_use_case import GetBookingUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookedSeatResponse,
    BookingCancelledResponse,
    BookingCreatedResponse,
    BookingCreateRequest,
    BookingDetailResponse,
    BookingListResponse,
    BookingSummaryResponse,
    ShowDetails,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _summary_fields(view: BookingView) -> dict:
    booking, show = view.booking, view.show
    return {
        'booking_id': booking.id,
        'booking_reference': booking.booking_reference,
        'show_id': booking.show_id,
        'movie': show.movie_title if show else None,
        'theater': show.theater_name if show else None,
        'screen': show.screen_name if show else None,
        'show_date': show.show_date if show else None,
        'show_time': show.show_time if show else None,
        'total_amount': booking.total_amount,
        'booking_status': booking.booking_status,
        'payment_status': booking.payment_status,
        'booked_at': booking.booked_at,
        'seats': sorted(seat.seat_label for seat in view.seats),
    }


@router.post('/create', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingCreatedResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('show_id', request.show_id)
        span.set_attribute('user_id', current_user.id)

        created = await use_case.execute(
            user_id=current_user.id,
            show_id=request.show_id,
            seats=request.seats,
            user_email=str(request.user_details.email),
            user_mobile=request.user_details.mobile,
        )
        booking, show = created.booking, created.show
        if booking.id is None:
            raise ValueError('Booking ID should not be None after creation.')

        return BookingCreatedResponse(
            booking_id=booking.id,
            booking_reference=booking.booking_reference,
            message='Seats held. Complete payment before the hold expires.',
            total_amount=booking.total_amount,
            held_until=created.held_until,
            show_details=ShowDetails(
                movie=show.movie_title,
                theater=show.theater_name,
                screen=show.screen_name,
                show_time=show.show_time,
                date=show.show_date,
                seats=created.seats,
            ),
        )


@router.get('')
@Logger.io
async def list_my_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    views = await use_case.execute(user_id=current_user.id)
    return BookingListResponse(
        bookings=[BookingSummaryResponse(**_summary_fields(view)) for view in views]
    )


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    view = await use_case.execute(user_id=current_user.id, booking_id=booking_id)
    return BookingDetailResponse(
        **_summary_fields(view),
        user_email=view.booking.user_email,
        seat_details=[
            BookedSeatResponse(
                seat_label=seat.seat_label,
                seat_category=seat.seat_category,
                status=seat.status,
            )
            for seat in sorted(view.seats, key=lambda seat: seat.seat_label)
        ],
    )


@router.post('/{booking_id}/cancel')
@Logger.io
async def cancel_booking(
    booking_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingCancelledResponse:
    booking = await use_case.execute(user_id=current_user.id, booking_id=booking_id)
    return BookingCancelledResponse(
        message=(
            f'Booking {booking.booking_reference} has been cancelled and a refund initiated.'
        ),
        booking_id=booking_id,
        booking_reference=booking.booking_reference,
        booking_status=booking.booking_status,
        payment_status=booking.payment_status,
    )
