"""
Integration fixtures: real use cases over the SQLite test database.

Every unit of work gets its own session, like concurrent requests would.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Awaitable, Callable, List

import pytest

from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.ticketing.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.ticketing.app.command.create_event_and_ticket_tiers_use_case import (
    CreateEventAndTicketTiersUseCase,
)
from src.service.ticketing.app.command.create_order_use_case import CreateOrderUseCase
from src.service.ticketing.app.command.issue_tickets_use_case import IssueTicketsUseCase
from src.service.ticketing.app.command.update_event_status_use_case import (
    UpdateEventStatusUseCase,
)
from src.service.ticketing.app.command.verify_scan_use_case import VerifyScanUseCase
from src.service.ticketing.app.dto.event_view import EventWithTiers, TicketTierDraft
from src.service.ticketing.app.dto.order_dto import CartItem, OrderCreated, PaymentConfirmation
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.ticket_code_generator import TicketCodeGenerator
from src.service.ticketing.driven_adapter.payment_gateway.mock_payment_gateway import (
    MockPaymentGateway,
)


@pytest.fixture
def uow_factory() -> Callable[[], SqlAlchemyUnitOfWork]:
    database = Database()
    return lambda: SqlAlchemyUnitOfWork(session_factory=database.session)


@pytest.fixture
def issue_tickets_use_case(uow_factory) -> Callable[[], IssueTicketsUseCase]:
    return lambda: IssueTicketsUseCase(uow=uow_factory(), code_generator=TicketCodeGenerator())


@pytest.fixture
def confirm_payment_use_case(
    uow_factory, issue_tickets_use_case
) -> Callable[[], ConfirmPaymentUseCase]:
    return lambda: ConfirmPaymentUseCase(
        uow=uow_factory(), issue_tickets_use_case=issue_tickets_use_case()
    )


@pytest.fixture
def verify_scan_use_case(uow_factory) -> Callable[[], VerifyScanUseCase]:
    return lambda: VerifyScanUseCase(uow=uow_factory())


@pytest.fixture
def create_published_event(
    uow_factory, organiser: UserEntity
) -> Callable[..., Awaitable[EventWithTiers]]:
    """Draft event with the given (name, price, quantity) tiers, then published."""

    async def _create(
        *tiers: tuple[str, str, int], name: str = 'Indie Night'
    ) -> EventWithTiers:
        created = await CreateEventAndTicketTiersUseCase(uow=uow_factory()).execute(
            user=organiser,
            name=name,
            venue='Blue Frog',
            start_date=datetime.now(timezone.utc) + timedelta(days=30),
            total_capacity=sum(quantity for _, _, quantity in tiers),
            tiers=[
                TicketTierDraft(name=tier_name, price=Decimal(price), quantity=quantity)
                for tier_name, price, quantity in tiers
            ],
        )
        await UpdateEventStatusUseCase(uow=uow_factory()).execute(
            user=organiser, event_id=created.event.id, status=EventStatus.PUBLISHED
        )
        return created

    return _create


@pytest.fixture
def place_order(uow_factory, buyer: UserEntity) -> Callable[..., Awaitable[OrderCreated]]:
    async def _place_order(
        event_id: str, *items: tuple[str, int], user: UserEntity | None = None
    ) -> OrderCreated:
        return await CreateOrderUseCase(
            uow=uow_factory(), payment_gateway=MockPaymentGateway()
        ).execute(
            user=user or buyer,
            event_id=event_id,
            cart_items=[CartItem(tier_id=tier_id, quantity=qty) for tier_id, qty in items],
        )

    return _place_order


@pytest.fixture
def confirm(confirm_payment_use_case) -> Callable[..., Awaitable[PaymentConfirmation]]:
    async def _confirm(order: OrderCreated, *, verified: bool = True) -> PaymentConfirmation:
        return await confirm_payment_use_case().execute(
            external_order_id=order.external_order_id,
            external_payment_id=f'pay_{order.payment_id[-8:]}',
            verified=verified,
        )

    return _confirm


@pytest.fixture
def tier_sold_counts(uow_factory) -> Callable[[str], Awaitable[List[int]]]:
    async def _sold_counts(event_id: str) -> List[int]:
        async with uow_factory() as uow:
            view = await uow.event_ticketing_query_repo.get_event_with_tiers(event_id=event_id)
        return [tier.sold_count for tier in view.tiers]

    return _sold_counts
