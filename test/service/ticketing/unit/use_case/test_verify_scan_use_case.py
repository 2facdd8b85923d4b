"""
Unit tests for VerifyScanUseCase

Test focus:
- Resolution order: unknown -> wrong event -> already scanned -> expired -> pending -> admit
- Exactly one EntryScan per resolved ticket, none for unknown codes
- A lost admission race is re-classified from the fresh row, never retried
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import attrs
import pytest

from src.service.ticketing.app.command.verify_scan_use_case import VerifyScanUseCase
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.scan_result import ScanResult
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


EARLIER = datetime(2026, 11, 1, 18, 5, tzinfo=timezone.utc)


@pytest.fixture
def use_case(mock_uow: MagicMock) -> VerifyScanUseCase:
    return VerifyScanUseCase(uow=mock_uow)


def _arrange_ticket(mock_uow: MagicMock, ticket, tier, event) -> None:
    mock_uow.ticket_command_repo.get_by_code = AsyncMock(return_value=ticket)
    mock_uow.event_ticketing_query_repo.get_tier_by_id = AsyncMock(return_value=tier)
    mock_uow.event_ticketing_query_repo.get_event_by_id = AsyncMock(return_value=event)


def _recorded_scan(mock_uow: MagicMock):
    mock_uow.entry_scan_repo.append.assert_awaited_once()
    return mock_uow.entry_scan_repo.append.await_args.kwargs['entry_scan']


@pytest.mark.unit
class TestVerifyScanUseCase:
    @pytest.mark.asyncio
    async def test_confirmed_ticket_is_admitted(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock, make_ticket, make_tier, published_event
    ) -> None:
        # Arrange
        _arrange_ticket(mock_uow, make_ticket(), make_tier(), published_event)
        mock_uow.ticket_command_repo.mark_scanned_if_confirmed = AsyncMock(return_value=True)

        # Act
        outcome = await use_case.execute(
            ticket_code=' abcd2345 ',
            event_id='event_1',
            scanner_user_id='gatekeeper_1',
            gate_name='Gate A',
        )

        # Assert
        assert outcome.success is True
        assert outcome.scan_result == ScanResult.SUCCESS
        assert outcome.message == 'Entry approved'
        assert outcome.ticket.status == TicketStatus.SCANNED
        assert outcome.ticket.event_name == 'Indie Night'
        assert outcome.ticket.tier_name == 'GA'
        mock_uow.ticket_command_repo.get_by_code.assert_awaited_once_with(ticket_code='ABCD2345')

        scan = _recorded_scan(mock_uow)
        assert scan.scan_result == ScanResult.SUCCESS
        assert scan.gate_name == 'Gate A'
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_code_logs_unmatched_scan_only(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock
    ) -> None:
        """Unknown codes never produce an EntryScan or a fabricated ticket reference"""
        # Arrange
        mock_uow.ticket_command_repo.get_by_code = AsyncMock(return_value=None)

        # Act
        outcome = await use_case.execute(
            ticket_code='ABCD1234', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        # Assert
        assert outcome.success is False
        assert outcome.scan_result == ScanResult.INVALID
        assert outcome.message == 'Invalid ticket code'
        assert outcome.ticket is None
        mock_uow.entry_scan_repo.append.assert_not_awaited()
        unmatched = mock_uow.entry_scan_repo.append_unmatched.await_args.kwargs['unmatched_scan']
        assert unmatched.raw_code == 'ABCD1234'

    @pytest.mark.asyncio
    async def test_unknown_code_not_logged_when_disabled(self, mock_uow: MagicMock) -> None:
        mock_uow.ticket_command_repo.get_by_code = AsyncMock(return_value=None)
        use_case = VerifyScanUseCase(uow=mock_uow, log_unmatched_scans=False)

        outcome = await use_case.execute(
            ticket_code='ABCD1234', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        assert outcome.scan_result == ScanResult.INVALID
        mock_uow.entry_scan_repo.append_unmatched.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_event_beats_already_scanned(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock, make_ticket, make_tier, published_event
    ) -> None:
        # Arrange
        ticket = make_ticket(TicketStatus.SCANNED, scanned_at=EARLIER)
        _arrange_ticket(mock_uow, ticket, make_tier(), published_event)

        # Act
        outcome = await use_case.execute(
            ticket_code=ticket.ticket_code, event_id='event_2', scanner_user_id='gatekeeper_1'
        )

        # Assert
        assert outcome.scan_result == ScanResult.WRONG_EVENT
        assert outcome.ticket is None
        mock_uow.ticket_command_repo.mark_scanned_if_confirmed.assert_not_awaited()
        scan = _recorded_scan(mock_uow)
        assert scan.scan_result == ScanResult.WRONG_EVENT
        assert scan.event_id == 'event_2'

    @pytest.mark.asyncio
    async def test_already_scanned_reports_original_time(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock, make_ticket, make_tier, published_event
    ) -> None:
        ticket = make_ticket(TicketStatus.SCANNED, scanned_at=EARLIER)
        _arrange_ticket(mock_uow, ticket, make_tier(), published_event)

        outcome = await use_case.execute(
            ticket_code=ticket.ticket_code, event_id='event_1', scanner_user_id='gatekeeper_2'
        )

        assert outcome.scan_result == ScanResult.ALREADY_SCANNED
        assert EARLIER.isoformat() in outcome.message
        assert outcome.ticket.scanned_at == EARLIER
        assert _recorded_scan(mock_uow).scan_result == ScanResult.ALREADY_SCANNED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'status,expected',
        [
            (TicketStatus.REFUNDED, ScanResult.EXPIRED),
            (TicketStatus.CANCELLED, ScanResult.EXPIRED),
            (TicketStatus.PENDING, ScanResult.INVALID),
        ],
    )
    async def test_non_admissible_statuses(
        self,
        use_case: VerifyScanUseCase,
        mock_uow: MagicMock,
        make_ticket,
        make_tier,
        published_event,
        status: TicketStatus,
        expected: ScanResult,
    ) -> None:
        _arrange_ticket(mock_uow, make_ticket(status), make_tier(), published_event)

        outcome = await use_case.execute(
            ticket_code='ABCD2345', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        assert outcome.success is False
        assert outcome.scan_result == expected
        mock_uow.ticket_command_repo.mark_scanned_if_confirmed.assert_not_awaited()
        assert _recorded_scan(mock_uow).scan_result == expected

    @pytest.mark.asyncio
    async def test_lost_admission_race_reclassifies_as_already_scanned(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock, make_ticket, make_tier, published_event
    ) -> None:
        """Another gate admitted the ticket between our read and our update"""
        # Arrange
        _arrange_ticket(mock_uow, make_ticket(), make_tier(), published_event)
        mock_uow.ticket_command_repo.mark_scanned_if_confirmed = AsyncMock(return_value=False)
        mock_uow.ticket_command_repo.get_by_id = AsyncMock(
            return_value=make_ticket(
                TicketStatus.SCANNED, scanned_at=EARLIER, scanned_by_user_id='gatekeeper_2'
            )
        )

        # Act
        outcome = await use_case.execute(
            ticket_code='ABCD2345', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        # Assert
        assert outcome.scan_result == ScanResult.ALREADY_SCANNED
        mock_uow.ticket_command_repo.mark_scanned_if_confirmed.assert_awaited_once()
        assert _recorded_scan(mock_uow).scan_result == ScanResult.ALREADY_SCANNED

    @pytest.mark.asyncio
    async def test_lost_race_to_refund_reclassifies_as_expired(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock, make_ticket, make_tier, published_event
    ) -> None:
        _arrange_ticket(mock_uow, make_ticket(), make_tier(), published_event)
        mock_uow.ticket_command_repo.mark_scanned_if_confirmed = AsyncMock(return_value=False)
        mock_uow.ticket_command_repo.get_by_id = AsyncMock(
            return_value=make_ticket(TicketStatus.REFUNDED)
        )

        outcome = await use_case.execute(
            ticket_code='ABCD2345', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        assert outcome.scan_result == ScanResult.EXPIRED

    @pytest.mark.asyncio
    @pytest.mark.parametrize('event_status', [EventStatus.CANCELLED, EventStatus.COMPLETED])
    async def test_confirmed_ticket_for_closed_event_is_expired(
        self,
        use_case: VerifyScanUseCase,
        mock_uow: MagicMock,
        make_ticket,
        make_tier,
        published_event,
        event_status: EventStatus,
    ) -> None:
        # Arrange
        closed_event = attrs.evolve(published_event, status=event_status)
        _arrange_ticket(mock_uow, make_ticket(), make_tier(), closed_event)

        # Act
        outcome = await use_case.execute(
            ticket_code='ABCD2345', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        # Assert
        assert outcome.success is False
        assert outcome.scan_result == ScanResult.EXPIRED
        assert outcome.message == f'Event is {event_status}, entry is closed'
        mock_uow.ticket_command_repo.mark_scanned_if_confirmed.assert_not_awaited()
        assert _recorded_scan(mock_uow).scan_result == ScanResult.EXPIRED

    @pytest.mark.asyncio
    async def test_already_scanned_still_reported_after_event_completes(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock, make_ticket, make_tier, published_event
    ) -> None:
        completed_event = attrs.evolve(published_event, status=EventStatus.COMPLETED)
        ticket = make_ticket(TicketStatus.SCANNED, scanned_at=EARLIER)
        _arrange_ticket(mock_uow, ticket, make_tier(), completed_event)

        outcome = await use_case.execute(
            ticket_code='ABCD2345', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        assert outcome.scan_result == ScanResult.ALREADY_SCANNED

    @pytest.mark.asyncio
    async def test_malformed_code_skips_lookup(
        self, use_case: VerifyScanUseCase, mock_uow: MagicMock
    ) -> None:
        """Codes outside the ticket alphabet cannot match a ticket"""
        # Arrange
        mock_uow.ticket_command_repo.get_by_code = AsyncMock(return_value=None)

        # Act
        outcome = await use_case.execute(
            ticket_code='o0i1-???', event_id='event_1', scanner_user_id='gatekeeper_1'
        )

        # Assert
        assert outcome.scan_result == ScanResult.INVALID
        assert outcome.message == 'Invalid ticket code'
        mock_uow.ticket_command_repo.get_by_code.assert_not_awaited()
        mock_uow.entry_scan_repo.append.assert_not_awaited()
        unmatched = mock_uow.entry_scan_repo.append_unmatched.await_args.kwargs['unmatched_scan']
        assert unmatched.raw_code == 'O0I1-???'
