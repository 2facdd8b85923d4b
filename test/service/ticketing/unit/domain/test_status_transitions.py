"""
Unit tests for the closed status enums and their transition tables.

Terminal states accept nothing; every forward edge is listed explicitly.
"""

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


@pytest.mark.unit
class TestTicketStatusTransitions:
    @pytest.mark.parametrize(
        'source,target',
        [
            (TicketStatus.PENDING, TicketStatus.CONFIRMED),
            (TicketStatus.PENDING, TicketStatus.CANCELLED),
            (TicketStatus.CONFIRMED, TicketStatus.SCANNED),
            (TicketStatus.CONFIRMED, TicketStatus.CANCELLED),
            (TicketStatus.CONFIRMED, TicketStatus.REFUNDED),
        ],
    )
    def test_allowed_edges(self, source: TicketStatus, target: TicketStatus) -> None:
        assert source.can_transition_to(target)

    @pytest.mark.parametrize(
        'terminal', [TicketStatus.SCANNED, TicketStatus.CANCELLED, TicketStatus.REFUNDED]
    )
    def test_terminal_states_accept_nothing(self, terminal: TicketStatus) -> None:
        assert not any(terminal.can_transition_to(target) for target in TicketStatus)

    def test_scanned_ticket_cannot_be_scanned_again(self, make_ticket) -> None:
        # Arrange
        ticket = make_ticket(TicketStatus.SCANNED)

        # Act & Assert
        with pytest.raises(DomainError, match='from scanned to scanned'):
            ticket.ensure_can_transition_to(TicketStatus.SCANNED)

    def test_pending_ticket_cannot_skip_to_scanned(self) -> None:
        assert not TicketStatus.PENDING.can_transition_to(TicketStatus.SCANNED)


@pytest.mark.unit
class TestPaymentStatusTransitions:
    def test_pending_moves_to_completed_or_failed(self) -> None:
        assert PaymentStatus.PENDING.can_transition_to(PaymentStatus.COMPLETED)
        assert PaymentStatus.PENDING.can_transition_to(PaymentStatus.FAILED)
        assert not PaymentStatus.PENDING.can_transition_to(PaymentStatus.REFUNDED)

    def test_only_completed_payments_refund(self) -> None:
        assert PaymentStatus.COMPLETED.can_transition_to(PaymentStatus.REFUNDED)
        assert not PaymentStatus.FAILED.can_transition_to(PaymentStatus.REFUNDED)

    def test_failed_payment_rejects_refund_transition(self, make_payment) -> None:
        payment = make_payment(status=PaymentStatus.FAILED)

        with pytest.raises(DomainError):
            payment.ensure_can_transition_to(PaymentStatus.REFUNDED)


@pytest.mark.unit
class TestEventStatusTransitions:
    def test_draft_publishes(self, published_event) -> None:
        # Arrange
        published_event.status = EventStatus.DRAFT

        # Act
        updated = published_event.transition_to(EventStatus.PUBLISHED)

        # Assert
        assert updated.status == EventStatus.PUBLISHED
        assert published_event.status == EventStatus.DRAFT

    def test_completed_event_cannot_reopen(self, published_event) -> None:
        published_event.status = EventStatus.COMPLETED

        with pytest.raises(DomainError, match='Cannot change event status'):
            published_event.transition_to(EventStatus.PUBLISHED)

    def test_draft_cannot_complete_directly(self) -> None:
        assert not EventStatus.DRAFT.can_transition_to(EventStatus.COMPLETED)
