"""
Unit tests for CreateBookingUseCase

Repositories are mocked; these tests pin the order of checks and that
nothing is committed when a check fails.
"""

from datetime import timedelta
from decimal import Decimal

import attrs
import pytest

from src.platform.exception.exceptions import (
    GoneError,
    InvalidSeatFormatError,
    NotFoundError,
    SeatConflictError,
)
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.domain.entity.seat_hold_entity import SeatHold
from src.service.cinema.domain.enum.seat_status import SeatStatus
from src.service.cinema.domain.enum.show_status import ShowStatus
from test.cinema_constants import BUYER_ID, OTHER_BUYER_ID, SHOW_STARTS_AT, TEST_NOW


def _booking_params(seats: list[str]) -> dict:
    return {
        'user_id': BUYER_ID,
        'show_id': 1,
        'seats': seats,
        'user_email': 'viewer@example.com',
        'user_mobile': '9876543210',
    }


@pytest.fixture
def use_case(stocked_uow, settings) -> CreateBookingUseCase:
    stocked_uow.seat_hold_repo.attach.side_effect = lambda hold_ids, booking_id: len(hold_ids)
    return CreateBookingUseCase(uow=stocked_uow, settings=settings, clock=lambda: TEST_NOW)


def _placed_rows(labels: list[str]) -> list[SeatHold]:
    return [
        SeatHold(
            id=index,
            show_id=1,
            seat_label=label,
            seat_category='regular' if label.startswith('A') else 'premium',
            user_id=BUYER_ID,
            held_until=TEST_NOW + timedelta(minutes=10),
        )
        for index, label in enumerate(labels, start=1)
    ]


@pytest.mark.unit
class TestCreateBookingUseCase:
    async def test_regular_and_premium_seat_priced_with_fees(self, use_case, stocked_uow) -> None:
        # Arrange
        stocked_uow.seat_hold_repo.list_unattached.return_value = _placed_rows(['A1', 'B2'])

        # Act
        created = await use_case.execute(**_booking_params(['A1', 'B2']))

        # Assert
        assert created.breakdown.tickets == Decimal('220')
        assert created.breakdown.convenience_fee == Decimal('11')
        assert created.booking.total_amount == Decimal('272.58')
        assert created.booking.id == 42
        assert created.booking.booking_reference.startswith('PVR')
        assert created.held_until == TEST_NOW + timedelta(minutes=10)
        placed = stocked_uow.seat_hold_repo.add_all.await_args.kwargs['holds']
        assert {(hold.seat_label, hold.seat_category) for hold in placed} == {
            ('A1', 'regular'),
            ('B2', 'premium'),
        }
        stocked_uow.seat_hold_repo.attach.assert_awaited_once_with(hold_ids=[1, 2], booking_id=42)
        assert stocked_uow.committed == 1

    async def test_live_hold_by_someone_else_conflicts(self, use_case, stocked_uow) -> None:
        stocked_uow.seat_hold_repo.list_claims.return_value = [
            SeatHold(
                id=9,
                show_id=1,
                seat_label='A1',
                seat_category='regular',
                user_id=OTHER_BUYER_ID,
                held_until=TEST_NOW + timedelta(minutes=3),
            )
        ]

        with pytest.raises(SeatConflictError) as exc_info:
            await use_case.execute(**_booking_params(['A1', 'A2']))

        assert exc_info.value.labels == ['A1']
        stocked_uow.seat_hold_repo.add_all.assert_not_awaited()
        assert stocked_uow.committed == 0
        assert stocked_uow.rolled_back == 1

    async def test_blocked_seat_conflicts(self, use_case, stocked_uow) -> None:
        stocked_uow.show_repo.list_blocked_seats.return_value = ['A2']

        with pytest.raises(SeatConflictError, match='A2'):
            await use_case.execute(**_booking_params(['A2']))

    async def test_stale_hold_is_expired_then_seat_taken(self, use_case, stocked_uow) -> None:
        stale = SeatHold(
            id=9,
            show_id=1,
            seat_label='A1',
            seat_category='regular',
            user_id=OTHER_BUYER_ID,
            held_until=TEST_NOW - timedelta(seconds=1),
        )
        stocked_uow.seat_hold_repo.list_claims.return_value = [stale]
        stocked_uow.seat_hold_repo.list_unattached.return_value = _placed_rows(['A1'])

        await use_case.execute(**_booking_params(['A1']))

        stocked_uow.seat_hold_repo.mark_expired.assert_awaited_once_with(hold_ids=[9])
        assert stocked_uow.committed == 1

    async def test_confirmed_seat_conflicts(self, use_case, stocked_uow) -> None:
        stocked_uow.seat_hold_repo.list_claims.return_value = [
            SeatHold(
                id=3,
                show_id=1,
                seat_label='B2',
                seat_category='premium',
                user_id=OTHER_BUYER_ID,
                status=SeatStatus.CONFIRMED,
                booking_id=7,
            )
        ]

        with pytest.raises(SeatConflictError):
            await use_case.execute(**_booking_params(['B2']))

    async def test_malformed_seat_is_rejected_before_any_read_of_holds(
        self, use_case, stocked_uow
    ) -> None:
        with pytest.raises(InvalidSeatFormatError):
            await use_case.execute(**_booking_params(['A1', 'b2']))
        stocked_uow.seat_hold_repo.list_claims.assert_not_awaited()

    async def test_missing_show(self, use_case, stocked_uow) -> None:
        stocked_uow.show_repo.get_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await use_case.execute(**_booking_params(['A1']))

    async def test_inactive_show_is_not_found(self, use_case, stocked_uow, show) -> None:
        stocked_uow.show_repo.get_by_id.return_value = attrs.evolve(
            show, status=ShowStatus.CANCELLED
        )
        with pytest.raises(NotFoundError, match='not active'):
            await use_case.execute(**_booking_params(['A1']))

    async def test_started_show_is_gone(self, stocked_uow, settings) -> None:
        use_case = CreateBookingUseCase(
            uow=stocked_uow, settings=settings, clock=lambda: SHOW_STARTS_AT
        )
        with pytest.raises(GoneError) as exc_info:
            await use_case.execute(**_booking_params(['A1']))
        assert exc_info.value.status_code == 410
