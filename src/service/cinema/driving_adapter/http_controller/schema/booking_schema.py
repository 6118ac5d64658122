from datetime import date, datetime, time
from typing import List, Optional

from pydantic import EmailStr, Field

from src.service.cinema.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.cinema.driving_adapter.http_controller.schema.camel_model import (
    CamelRequest,
    CamelResponse,
    Money,
)


class UserDetails(CamelRequest):
    email: EmailStr
    mobile: str = Field(pattern=r'^\+?\d{10,15}$')


class BookingCreateRequest(CamelRequest):
    show_id: int = Field(gt=0)
    seats: List[str] = Field(min_length=1, max_length=10)
    user_details: UserDetails

    model_config = {
        'json_schema_extra': {
            'example': {
                'showId': 1,
                'seats': ['A1', 'A2'],
                'userDetails': {'email': 'viewer@example.com', 'mobile': '9876543210'},
            }
        },
    }


class ShowDetails(CamelResponse):
    movie: Optional[str] = None
    theater: Optional[str] = None
    screen: Optional[str] = None
    show_time: time
    date: date
    seats: List[str]


class BookingCreatedResponse(CamelResponse):
    model_config = {
        'json_schema_extra': {
            'example': {
                'success': True,
                'bookingId': 12,
                'bookingReference': 'PVR482913',
                'message': 'Seats held. Complete payment before the hold expires.',
                'totalAmount': 272.58,
                'heldUntil': '2026-01-10T10:40:00Z',
                'showDetails': {
                    'movie': 'Interstellar',
                    'theater': 'PVR Forum',
                    'screen': 'Audi 1',
                    'showTime': '18:30:00',
                    'date': '2026-01-12',
                    'seats': ['A1', 'A2'],
                },
            }
        },
    }

    success: bool = True
    booking_id: int
    booking_reference: str
    message: str
    total_amount: Money
    held_until: datetime
    show_details: ShowDetails


class BookedSeatResponse(CamelResponse):
    seat_label: str
    seat_category: str
    status: str


class BookingSummaryResponse(CamelResponse):
    booking_id: int
    booking_reference: str
    show_id: int
    movie: Optional[str] = None
    theater: Optional[str] = None
    screen: Optional[str] = None
    show_date: Optional[date] = None
    show_time: Optional[time] = None
    total_amount: Money
    booking_status: BookingStatus
    payment_status: PaymentStatus
    booked_at: Optional[datetime] = None
    seats: List[str]


class BookingListResponse(CamelResponse):
    success: bool = True
    bookings: List[BookingSummaryResponse]


class BookingDetailResponse(BookingSummaryResponse):
    user_email: str
    seat_details: List[BookedSeatResponse]


class BookingCancelledResponse(CamelResponse):
    success: bool = True
    message: str
    booking_id: int
    booking_reference: str
    booking_status: BookingStatus
    payment_status: PaymentStatus
