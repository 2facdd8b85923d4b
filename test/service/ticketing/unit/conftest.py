"""
Unit test configuration for ticketing service.

Overrides autouse fixtures from parent conftest to enable pure unit testing
without infrastructure dependencies (database, HTTP app).

Provides a mocked unit of work whose repositories are AsyncMocks, so use cases
can be driven step by step.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.value_object.cart_snapshot import CartLine, CartSnapshot


REPOSITORY_NAMES = (
    'capacity_ledger',
    'event_ticketing_command_repo',
    'event_ticketing_query_repo',
    'payment_command_repo',
    'payment_query_repo',
    'ticket_command_repo',
    'ticket_query_repo',
    'entry_scan_repo',
    'user_command_repo',
)


@pytest.fixture(autouse=True, scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    """No-op override for unit tests - no real database needed"""
    yield


@pytest.fixture
def mock_uow() -> MagicMock:
    """Unit of work double: `async with` yields itself and never swallows errors."""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    for name in REPOSITORY_NAMES:
        setattr(uow, name, AsyncMock())
    return uow


@pytest.fixture
def published_event() -> EventEntity:
    return EventEntity(
        id='event_1',
        organization_id='org_1',
        created_by_user_id='organiser_1',
        name='Indie Night',
        venue='Blue Frog',
        start_date=datetime.now(timezone.utc) + timedelta(days=30),
        total_capacity=300,
        status=EventStatus.PUBLISHED,
    )


@pytest.fixture
def make_tier() -> Callable[..., TicketTierEntity]:
    def _make_tier(
        tier_id: str = 'tier_ga',
        *,
        event_id: str = 'event_1',
        price: str = '500.00',
        quantity: int = 100,
        sold_count: int = 0,
        **overrides,
    ) -> TicketTierEntity:
        return TicketTierEntity(
            id=tier_id,
            event_id=event_id,
            name=overrides.pop('name', tier_id.replace('tier_', '').upper()),
            price=Decimal(price),
            quantity=quantity,
            sold_count=sold_count,
            **overrides,
        )

    return _make_tier


@pytest.fixture
def make_payment() -> Callable[..., Payment]:
    def _make_payment(
        *lines: tuple[str, int, str],
        status: PaymentStatus = PaymentStatus.COMPLETED,
        **overrides,
    ) -> Payment:
        snapshot = CartSnapshot(
            lines=[
                CartLine(tier_id=tier_id, quantity=quantity, unit_price=price)
                for tier_id, quantity, price in (lines or [('tier_ga', 2, '500.00')])
            ],
            currency='INR',
        )
        payment = Payment.create_pending(
            user_id=overrides.pop('user_id', 'buyer_1'),
            event_id=overrides.pop('event_id', 'event_1'),
            cart_snapshot=snapshot,
        )
        payment.id = overrides.pop('id', 'payment_1')
        payment.status = status
        for field, value in overrides.items():
            setattr(payment, field, value)
        return payment

    return _make_payment


@pytest.fixture
def make_ticket() -> Callable[..., Ticket]:
    def _make_ticket(
        status: TicketStatus = TicketStatus.CONFIRMED,
        *,
        ticket_id: str = 'ticket_1',
        tier_id: str = 'tier_ga',
        code: str = 'ABCD2345',
        **overrides,
    ) -> Ticket:
        return Ticket(
            id=ticket_id,
            ticket_tier_id=tier_id,
            user_id=overrides.pop('user_id', 'buyer_1'),
            payment_id=overrides.pop('payment_id', 'payment_1'),
            ticket_code=code,
            status=status,
            attendee_name=overrides.pop('attendee_name', 'Arjun Mehta'),
            **overrides,
        )

    return _make_ticket
