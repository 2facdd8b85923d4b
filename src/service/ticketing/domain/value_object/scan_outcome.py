from datetime import datetime
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.scan_result import ScanResult
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


@attrs.define(frozen=True)
class ScannedTicketView:
    """What the gate screen shows about the presented ticket."""

    id: str
    ticket_code: str
    status: TicketStatus
    tier_name: str
    event_id: str
    event_name: str
    attendee_name: Optional[str] = None
    attendee_email: Optional[str] = None
    scanned_at: Optional[datetime] = None


@attrs.define(frozen=True)
class ScanOutcome:
    success: bool
    scan_result: ScanResult
    message: str
    ticket: Optional[ScannedTicketView] = None

    @classmethod
    def approved(cls, ticket: ScannedTicketView) -> 'ScanOutcome':
        return cls(
            success=True,
            scan_result=ScanResult.SUCCESS,
            message='Entry approved',
            ticket=ticket,
        )

    @classmethod
    def rejected(
        cls,
        scan_result: ScanResult,
        message: str,
        ticket: Optional[ScannedTicketView] = None,
    ) -> 'ScanOutcome':
        return cls(success=False, scan_result=scan_result, message=message, ticket=ticket)
