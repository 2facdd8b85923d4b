from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.service.ticketing.app.dto.ticket_view import RecentScan
from src.service.ticketing.domain.enum.scan_result import ScanResult
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.value_object.scan_outcome import ScanOutcome


class ScanVerifyRequest(BaseModel):
    ticket_code: str = Field(min_length=1, max_length=64)
    event_id: str
    gate_name: Optional[str] = Field(default=None, max_length=100)
    device_info: Optional[str] = Field(default=None, max_length=255)

    class Config:
        json_schema_extra = {
            'example': {
                'ticket_code': 'K7QX3M9P',
                'event_id': '0192f1c4-7a3e-7c1a-9d2b-5f8e3a1b2c4d',
                'gate_name': 'Gate 2',
            }
        }


class ScannedTicketResponse(BaseModel):
    id: str
    ticket_code: str
    status: TicketStatus
    tier_name: str
    event_id: str
    event_name: str
    attendee_name: Optional[str]
    attendee_email: Optional[str]
    scanned_at: Optional[datetime]


class ScanVerifyResponse(BaseModel):
    success: bool
    scan_result: ScanResult
    message: str
    ticket: Optional[ScannedTicketResponse] = None

    @classmethod
    def from_outcome(cls, outcome: ScanOutcome) -> 'ScanVerifyResponse':
        ticket = outcome.ticket
        return cls(
            success=outcome.success,
            scan_result=outcome.scan_result,
            message=outcome.message,
            ticket=(
                ScannedTicketResponse(
                    id=ticket.id,
                    ticket_code=ticket.ticket_code,
                    status=ticket.status,
                    tier_name=ticket.tier_name,
                    event_id=ticket.event_id,
                    event_name=ticket.event_name,
                    attendee_name=ticket.attendee_name,
                    attendee_email=ticket.attendee_email,
                    scanned_at=ticket.scanned_at,
                )
                if ticket
                else None
            ),
        )


class RecentScanResponse(BaseModel):
    id: str
    ticket_id: str
    ticket_code: str
    attendee_name: Optional[str]
    scan_result: ScanResult
    scanned_by_user_id: str
    gate_name: Optional[str]
    scanned_at: datetime

    @classmethod
    def from_view(cls, view: RecentScan) -> 'RecentScanResponse':
        return cls(
            id=view.scan.id,
            ticket_id=view.scan.ticket_id,
            ticket_code=view.ticket_code,
            attendee_name=view.attendee_name,
            scan_result=view.scan.scan_result,
            scanned_by_user_id=view.scan.scanned_by_user_id,
            gate_name=view.scan.gate_name,
            scanned_at=view.scan.scanned_at,
        )
