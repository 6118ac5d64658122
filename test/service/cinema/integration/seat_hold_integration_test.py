"""
Integration tests for seat holds on a real database.

Two units of work stand in for two concurrent requests: both pass the
conflict check, and the partial unique index over live claims decides
which insert survives.
"""

from datetime import timedelta
from decimal import Decimal

from sqlalchemy import select
import pytest

from src.platform.exception.exceptions import SeatConflictError
from src.service.cinema.app.service.conflict_detector import ConflictDetector
from src.service.cinema.app.service.hold_manager import HoldManager
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.seat_status import SeatStatus
from src.service.cinema.driven_adapter.model import BookedSeatModel
from test.cinema_constants import BUYER_ID, OTHER_BUYER_ID, TEST_NOW


WINDOW = timedelta(minutes=10)


def _detector(uow) -> ConflictDetector:
    return ConflictDetector(seat_hold_repo=uow.seat_hold_repo, show_repo=uow.show_repo)


def _holds(uow) -> HoldManager:
    return HoldManager(seat_hold_repo=uow.seat_hold_repo, window=WINDOW)


async def _rows(database, show_id: int) -> list[BookedSeatModel]:
    async with database.session() as session:
        stmt = (
            select(BookedSeatModel)
            .where(BookedSeatModel.show_id == show_id)
            .order_by(BookedSeatModel.id)
        )
        return list((await session.scalars(stmt)).all())


@pytest.mark.integration
class TestConcurrentHolds:
    async def test_second_writer_loses_on_unique_claim(self, seed, uow_factory, database) -> None:
        ids = await seed.default_show()
        show_id, screen_id = ids['show_id'], ids['screen_id']
        seats = {'regular': ['A1', 'A2']}

        uow_a, uow_b = uow_factory(), uow_factory()
        async with uow_a, uow_b:
            # Both requests see the seats as free
            for uow in (uow_a, uow_b):
                assert (
                    await _detector(uow).find_conflicts(
                        show_id=show_id, screen_id=screen_id, labels=['A1', 'A2'], now=TEST_NOW
                    )
                    == []
                )

            await _holds(uow_a).place_holds(
                user_id=BUYER_ID, show_id=show_id, classified_seats=seats, now=TEST_NOW
            )
            await uow_a.commit()

            with pytest.raises(SeatConflictError):
                await _holds(uow_b).place_holds(
                    user_id=OTHER_BUYER_ID, show_id=show_id, classified_seats=seats, now=TEST_NOW
                )

        rows = await _rows(database, show_id)
        assert sorted(row.seat_label for row in rows) == ['A1', 'A2']
        assert {row.user_id for row in rows} == {BUYER_ID}


@pytest.mark.integration
class TestHoldExpiry:
    async def test_stale_hold_does_not_block_a_new_hold(self, seed, uow_factory, database) -> None:
        ids = await seed.default_show()
        show_id, screen_id = ids['show_id'], ids['screen_id']

        async with uow_factory() as uow:
            await _holds(uow).place_holds(
                user_id=OTHER_BUYER_ID,
                show_id=show_id,
                classified_seats={'premium': ['B5']},
                now=TEST_NOW,
            )
            await uow.commit()

        later = TEST_NOW + WINDOW + timedelta(seconds=1)
        async with uow_factory() as uow:
            # Pure read: nothing flips the old row, yet the seat is free
            conflicts = await _detector(uow).find_conflicts(
                show_id=show_id, screen_id=screen_id, labels=['B5'], now=later
            )
            assert conflicts == []
            assert (await _rows(database, show_id))[0].status == SeatStatus.HELD

            await _holds(uow).place_holds(
                user_id=BUYER_ID,
                show_id=show_id,
                classified_seats={'premium': ['B5']},
                now=later,
            )
            await uow.commit()

        statuses = {(row.user_id, row.status) for row in await _rows(database, show_id)}
        assert statuses == {(OTHER_BUYER_ID, 'expired'), (BUYER_ID, 'held')}

    async def test_blocked_seat_reported_as_conflict(self, seed, uow_factory) -> None:
        ids = await seed.default_show()
        await seed.block(screen_id=ids['screen_id'], row='C', number=1)

        async with uow_factory() as uow:
            conflicts = await _detector(uow).find_conflicts(
                show_id=ids['show_id'],
                screen_id=ids['screen_id'],
                labels=['C2', 'C1'],
                now=TEST_NOW,
            )
        assert conflicts == ['C1']


@pytest.mark.integration
class TestAttachAndRelease:
    async def test_release_twice_is_a_no_op(self, seed, uow_factory, database) -> None:
        ids = await seed.default_show()
        show_id = ids['show_id']

        async with uow_factory() as uow:
            held_until = await _holds(uow).place_holds(
                user_id=BUYER_ID,
                show_id=show_id,
                classified_seats={'regular': ['A3'], 'premium': ['B3']},
                now=TEST_NOW,
            )
            booking = await uow.booking_repo.create(
                booking=Booking.create(
                    user_id=BUYER_ID,
                    show_id=show_id,
                    booking_reference='PVR555555',
                    total_amount=Decimal('0'),
                    user_email='viewer@example.com',
                    user_mobile='9876543210',
                    now=TEST_NOW,
                )
            )
            attached = await _holds(uow).attach_to_booking(
                booking_id=booking.id,
                show_id=show_id,
                user_id=BUYER_ID,
                held_until=held_until,
                labels=['A3', 'B3'],
            )
            assert attached == 2
            await uow.commit()

        async with uow_factory() as uow:
            assert await _holds(uow).release_holds(booking_id=booking.id) == 2
            await uow.commit()
        after_first = [
            (r.seat_label, r.status, r.booking_id) for r in await _rows(database, show_id)
        ]

        async with uow_factory() as uow:
            assert await _holds(uow).release_holds(booking_id=booking.id) == 0
            await uow.commit()
        after_second = [
            (r.seat_label, r.status, r.booking_id) for r in await _rows(database, show_id)
        ]

        assert after_first == after_second
        assert {status for _, status, _ in after_second} == {'cancelled'}
        assert {booking_id for _, _, booking_id in after_second} == {None}
