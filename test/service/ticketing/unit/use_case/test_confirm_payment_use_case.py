"""
Unit tests for ConfirmPaymentUseCase

Test focus:
- verified: pending -> completed, then issuance runs
- repeated verified confirmation re-runs issuance without re-completing
- unverified: pending -> failed, no issuance
- conflicting verdicts raise ConflictError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.service.ticketing.app.command.confirm_payment_use_case import (
    VERIFICATION_FAILED_REASON,
    ConfirmPaymentUseCase,
)
from src.service.ticketing.app.command.issue_tickets_use_case import IssueTicketsUseCase
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.value_object.issuance_result import IssuanceResult


@pytest.fixture
def issue_tickets() -> AsyncMock:
    use_case = AsyncMock(spec=IssueTicketsUseCase)
    use_case.execute = AsyncMock(
        side_effect=lambda *, payment_id: IssuanceResult.issued(payment_id=payment_id, tickets=[])
    )
    return use_case


@pytest.fixture
def use_case(mock_uow: MagicMock, issue_tickets: AsyncMock) -> ConfirmPaymentUseCase:
    return ConfirmPaymentUseCase(uow=mock_uow, issue_tickets_use_case=issue_tickets)


@pytest.mark.unit
class TestConfirmPaymentUseCase:
    @pytest.mark.asyncio
    async def test_verified_payment_completes_then_issues(
        self,
        use_case: ConfirmPaymentUseCase,
        mock_uow: MagicMock,
        issue_tickets: AsyncMock,
        make_payment,
    ) -> None:
        # Arrange
        payment = make_payment(status=PaymentStatus.PENDING, external_order_id='order_payment_1')
        mock_uow.payment_command_repo.get_by_external_order_id = AsyncMock(return_value=payment)
        mock_uow.payment_command_repo.complete_if_pending = AsyncMock(return_value=True)

        # Act
        confirmation = await use_case.execute(
            external_order_id='order_payment_1', external_payment_id='pay_1', verified=True
        )

        # Assert
        assert confirmation.payment_status == PaymentStatus.COMPLETED
        assert confirmation.issuance is not None
        call = mock_uow.payment_command_repo.complete_if_pending.await_args
        assert call.kwargs['payment_id'] == payment.id
        assert call.kwargs['external_payment_id'] == 'pay_1'
        mock_uow.commit.assert_awaited_once()
        issue_tickets.execute.assert_awaited_once_with(payment_id=payment.id)

    @pytest.mark.asyncio
    async def test_repeated_confirmation_skips_completion_and_reissues(
        self,
        use_case: ConfirmPaymentUseCase,
        mock_uow: MagicMock,
        issue_tickets: AsyncMock,
        make_payment,
    ) -> None:
        """A completed payment loses the conditional update yet still reaches issuance"""
        # Arrange
        payment = make_payment(status=PaymentStatus.COMPLETED)
        mock_uow.payment_command_repo.get_by_external_order_id = AsyncMock(return_value=payment)
        mock_uow.payment_command_repo.complete_if_pending = AsyncMock(return_value=False)
        mock_uow.payment_command_repo.get_by_id = AsyncMock(return_value=payment)

        # Act
        confirmation = await use_case.execute(
            external_order_id='order_payment_1', external_payment_id='pay_1', verified=True
        )

        # Assert
        assert confirmation.payment_status == PaymentStatus.COMPLETED
        mock_uow.commit.assert_not_awaited()
        issue_tickets.execute.assert_awaited_once_with(payment_id=payment.id)

    @pytest.mark.asyncio
    async def test_verifying_failed_payment_conflicts(
        self,
        use_case: ConfirmPaymentUseCase,
        mock_uow: MagicMock,
        issue_tickets: AsyncMock,
        make_payment,
    ) -> None:
        payment = make_payment(status=PaymentStatus.FAILED)
        mock_uow.payment_command_repo.get_by_external_order_id = AsyncMock(return_value=payment)
        mock_uow.payment_command_repo.complete_if_pending = AsyncMock(return_value=False)
        mock_uow.payment_command_repo.get_by_id = AsyncMock(return_value=payment)

        with pytest.raises(ConflictError, match='failed'):
            await use_case.execute(
                external_order_id='order_payment_1', external_payment_id='pay_1', verified=True
            )

        issue_tickets.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unverified_payment_fails_without_issuance(
        self,
        use_case: ConfirmPaymentUseCase,
        mock_uow: MagicMock,
        issue_tickets: AsyncMock,
        make_payment,
    ) -> None:
        # Arrange
        payment = make_payment(status=PaymentStatus.PENDING)
        mock_uow.payment_command_repo.get_by_external_order_id = AsyncMock(return_value=payment)
        mock_uow.payment_command_repo.fail_if_pending = AsyncMock(return_value=True)

        # Act
        confirmation = await use_case.execute(
            external_order_id='order_payment_1', external_payment_id='pay_1', verified=False
        )

        # Assert
        assert confirmation.payment_status == PaymentStatus.FAILED
        assert confirmation.issuance is None
        mock_uow.payment_command_repo.fail_if_pending.assert_awaited_once_with(
            payment_id=payment.id, failure_reason=VERIFICATION_FAILED_REASON
        )
        mock_uow.commit.assert_awaited_once()
        issue_tickets.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unverified_call_on_completed_payment_conflicts(
        self, use_case: ConfirmPaymentUseCase, mock_uow: MagicMock, make_payment
    ) -> None:
        payment = make_payment(status=PaymentStatus.COMPLETED)
        mock_uow.payment_command_repo.get_by_external_order_id = AsyncMock(return_value=payment)
        mock_uow.payment_command_repo.fail_if_pending = AsyncMock(return_value=False)
        mock_uow.payment_command_repo.get_by_id = AsyncMock(return_value=payment)

        with pytest.raises(ConflictError):
            await use_case.execute(
                external_order_id='order_payment_1', external_payment_id='pay_1', verified=False
            )

    @pytest.mark.asyncio
    async def test_unknown_order_is_not_found(
        self, use_case: ConfirmPaymentUseCase, mock_uow: MagicMock
    ) -> None:
        mock_uow.payment_command_repo.get_by_external_order_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                external_order_id='order_missing', external_payment_id='pay_1', verified=True
            )
