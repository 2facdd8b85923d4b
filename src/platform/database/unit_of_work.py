"""
Unit of Work Pattern - one database session shared by a use case's repositories

Architecture:
- UoW opens a fresh session on every `async with` and closes it on exit
- UoW owns commit/rollback; leaving the block without commit rolls back
- Repositories receive the shared session from the UoW
- A use case may enter the same UoW several times in sequence to run
  independent transactions (e.g. mark a payment completed, then issue)
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.ticketing.app.interface.i_capacity_ledger import ICapacityLedger
    from src.service.ticketing.app.interface.i_entry_scan_repo import IEntryScanRepo
    from src.service.ticketing.app.interface.i_event_ticketing_command_repo import (
        IEventTicketingCommandRepo,
    )
    from src.service.ticketing.app.interface.i_event_ticketing_query_repo import (
        IEventTicketingQueryRepo,
    )
    from src.service.ticketing.app.interface.i_payment_command_repo import IPaymentCommandRepo
    from src.service.ticketing.app.interface.i_payment_query_repo import IPaymentQueryRepo
    from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
    from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
    from src.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for Ticketing Service

    Usage:
        async with uow:
            result = await uow.capacity_ledger.reserve(tier_id=..., quantity=2)
            await uow.commit()
    """

    capacity_ledger: ICapacityLedger
    event_ticketing_command_repo: IEventTicketingCommandRepo
    event_ticketing_query_repo: IEventTicketingQueryRepo
    payment_command_repo: IPaymentCommandRepo
    payment_query_repo: IPaymentQueryRepo
    ticket_command_repo: ITicketCommandRepo
    ticket_query_repo: ITicketQueryRepo
    entry_scan_repo: IEntryScanRepo
    user_command_repo: IUserCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self._session_cm: AsyncContextManager[AsyncSession] | None = None
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.ticketing.driven_adapter.repo.capacity_ledger_impl import (
            CapacityLedgerImpl,
        )
        from src.service.ticketing.driven_adapter.repo.entry_scan_repo_impl import (
            EntryScanRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.event_ticketing_command_repo_impl import (
            EventTicketingCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.event_ticketing_query_repo_impl import (
            EventTicketingQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.payment_command_repo_impl import (
            PaymentCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.payment_query_repo_impl import (
            PaymentQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.ticket_query_repo_impl import (
            TicketQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.user_command_repo_impl import (
            UserCommandRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Create repositories with shared session
        self.capacity_ledger = CapacityLedgerImpl(self.session)
        self.event_ticketing_command_repo = EventTicketingCommandRepoImpl(self.session)
        self.event_ticketing_query_repo = EventTicketingQueryRepoImpl(self.session)
        self.payment_command_repo = PaymentCommandRepoImpl(self.session)
        self.payment_query_repo = PaymentQueryRepoImpl(self.session)
        self.ticket_command_repo = TicketCommandRepoImpl(self.session)
        self.ticket_query_repo = TicketQueryRepoImpl(self.session)
        self.entry_scan_repo = EntryScanRepoImpl(self.session)
        self.user_command_repo = UserCommandRepoImpl(self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            session_cm, self._session_cm, self.session = self._session_cm, None, None
            if session_cm is not None:
                await session_cm.__aexit__(*args)

    async def _commit(self) -> None:
        if self.session is None:
            raise RuntimeError('Unit of work used outside of `async with`')
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
