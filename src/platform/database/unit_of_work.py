"""
Unit of Work - one database transaction shared by every repository.

    async with uow:
        booking = await uow.booking_repo.create(booking=...)
        await uow.seat_hold_repo.attach(...)
        await uow.commit()

Leaving the block rolls back whatever was not committed, whether the body
returned early or raised, and closes the session.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_booking_repo import IBookingRepo
    from src.service.cinema.app.interface.i_fnb_repo import IFnbRepo
    from src.service.cinema.app.interface.i_payment_repo import IPaymentRepo
    from src.service.cinema.app.interface.i_seat_hold_repo import ISeatHoldRepo
    from src.service.cinema.app.interface.i_show_repo import IShowRepo


class AbstractUnitOfWork(abc.ABC):
    show_repo: IShowRepo
    seat_hold_repo: ISeatHoldRepo
    booking_repo: IBookingRepo
    payment_repo: IPaymentRepo
    fnb_repo: IFnbRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.cinema.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
        from src.service.cinema.driven_adapter.repo.fnb_repo_impl import FnbRepoImpl
        from src.service.cinema.driven_adapter.repo.payment_repo_impl import PaymentRepoImpl
        from src.service.cinema.driven_adapter.repo.seat_hold_repo_impl import SeatHoldRepoImpl
        from src.service.cinema.driven_adapter.repo.show_repo_impl import ShowRepoImpl

        if self.session is not None:
            raise RuntimeError('Unit of work is already in use')
        self.session = self.session_factory()
        self.show_repo = ShowRepoImpl(self.session)
        self.seat_hold_repo = SeatHoldRepoImpl(self.session)
        self.booking_repo = BookingRepoImpl(self.session)
        self.payment_repo = PaymentRepoImpl(self.session)
        self.fnb_repo = FnbRepoImpl(self.session)
        return await super().__aenter__()  # type: ignore[return-value]

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() outside of `async with uow`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
