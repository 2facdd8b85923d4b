from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
)
from src.service.ticketing.app.command.refund_payment_use_case import RefundPaymentUseCase
from src.service.ticketing.app.dto.event_view import UNKNOWN_ORGANIZER, EventWithTiers
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.list_recent_scans_use_case import ListRecentScansUseCase
from src.service.ticketing.domain.enum.payment_status import PaymentStatus


@pytest.mark.unit
class TestRefundPaymentUseCase:
    @pytest.mark.asyncio
    async def test_completed_payment_refunds_confirmed_tickets(
        self, mock_uow: MagicMock, make_payment
    ) -> None:
        # Arrange
        payment = make_payment(status=PaymentStatus.COMPLETED)
        refunded = make_payment(status=PaymentStatus.REFUNDED, failure_reason='Show cancelled')
        mock_uow.payment_command_repo.get_by_id = AsyncMock(side_effect=[payment, refunded])
        mock_uow.payment_command_repo.refund_if_completed = AsyncMock(return_value=True)
        mock_uow.ticket_command_repo.refund_confirmed_by_payment = AsyncMock(return_value=2)
        use_case = RefundPaymentUseCase(uow=mock_uow)

        # Act
        result = await use_case.execute(payment_id=payment.id, reason='Show cancelled')

        # Assert
        assert result.status == PaymentStatus.REFUNDED
        mock_uow.ticket_command_repo.refund_confirmed_by_payment.assert_awaited_once_with(
            payment_id=payment.id
        )
        mock_uow.capacity_ledger.reserve.assert_not_awaited()
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_pending_payment_cannot_be_refunded(
        self, mock_uow: MagicMock, make_payment
    ) -> None:
        mock_uow.payment_command_repo.get_by_id = AsyncMock(
            return_value=make_payment(status=PaymentStatus.PENDING)
        )

        with pytest.raises(DomainError):
            await RefundPaymentUseCase(uow=mock_uow).execute(payment_id='payment_1', reason='x')

        mock_uow.payment_command_repo.refund_if_completed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_refund_conflicts(self, mock_uow: MagicMock, make_payment) -> None:
        mock_uow.payment_command_repo.get_by_id = AsyncMock(return_value=make_payment())
        mock_uow.payment_command_repo.refund_if_completed = AsyncMock(return_value=False)

        with pytest.raises(ConflictError):
            await RefundPaymentUseCase(uow=mock_uow).execute(payment_id='payment_1', reason='x')

        mock_uow.ticket_command_repo.refund_confirmed_by_payment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_payment(self, mock_uow: MagicMock) -> None:
        mock_uow.payment_command_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await RefundPaymentUseCase(uow=mock_uow).execute(payment_id='missing', reason='x')


@pytest.mark.unit
class TestQueryUseCases:
    @pytest.mark.asyncio
    async def test_recent_scans_default_limit(self, mock_uow: MagicMock) -> None:
        mock_uow.entry_scan_repo.list_recent = AsyncMock(return_value=[])

        await ListRecentScansUseCase(uow=mock_uow, default_limit=20).execute(event_id='event_1')

        mock_uow.entry_scan_repo.list_recent.assert_awaited_once_with(event_id='event_1', limit=20)

    @pytest.mark.asyncio
    async def test_recent_scans_rejects_non_positive_limit(self, mock_uow: MagicMock) -> None:
        with pytest.raises(DomainError):
            await ListRecentScansUseCase(uow=mock_uow).execute(event_id='event_1', limit=0)

    @pytest.mark.asyncio
    async def test_get_event_missing(self, mock_uow: MagicMock) -> None:
        mock_uow.event_ticketing_query_repo.get_event_with_tiers = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await GetEventUseCase(uow=mock_uow).execute(event_id='missing')

    def test_event_view_aggregates(self, published_event, make_tier) -> None:
        # Arrange
        view = EventWithTiers(
            event=published_event,
            tiers=[
                make_tier('tier_ga', price='500.00', sold_count=7),
                make_tier('tier_vip', price='1500.00', sold_count=3),
                make_tier('tier_early', price='250.00', is_active=False),
            ],
        )

        # Assert
        assert view.tickets_sold == 10
        assert view.lowest_price == Decimal('500.00')
        assert view.organizer_name == UNKNOWN_ORGANIZER

    def test_event_view_without_active_tiers(self, published_event, make_tier) -> None:
        view = EventWithTiers(event=published_event, tiers=[make_tier(is_active=False)])

        assert view.lowest_price == Decimal('0')
