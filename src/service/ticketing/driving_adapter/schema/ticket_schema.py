from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from src.service.ticketing.app.dto.ticket_view import TicketWithEvent
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


class TicketResponse(BaseModel):
    id: str
    ticket_code: str
    ticket_tier_id: str
    payment_id: Optional[str]
    status: TicketStatus
    attendee_name: Optional[str]
    attendee_email: Optional[str]
    purchased_at: Optional[datetime]
    scanned_at: Optional[datetime]

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            ticket_code=ticket.ticket_code,
            ticket_tier_id=ticket.ticket_tier_id,
            payment_id=ticket.payment_id,
            status=ticket.status,
            attendee_name=ticket.attendee_name,
            attendee_email=ticket.attendee_email,
            purchased_at=ticket.purchased_at,
            scanned_at=ticket.scanned_at,
        )


class MyTicketResponse(TicketResponse):
    tier_name: str
    tier_price: Decimal
    currency: str
    event_id: str
    event_name: str
    event_venue: str
    event_start_date: datetime

    @classmethod
    def from_view(cls, view: TicketWithEvent) -> 'MyTicketResponse':
        return cls(
            **TicketResponse.from_entity(view.ticket).model_dump(),
            tier_name=view.tier_name,
            tier_price=view.tier_price,
            currency=view.currency,
            event_id=view.event_id,
            event_name=view.event_name,
            event_venue=view.event_venue,
            event_start_date=view.event_start_date,
        )

    class Config:
        json_schema_extra = {
            'example': {
                'id': '0192f1c4-7d00-7000-8000-000000000001',
                'ticket_code': 'K7QX3M9P',
                'ticket_tier_id': '0192f1c4-7b00-7000-8000-00000000000a',
                'payment_id': '0192f1c4-7c00-7000-8000-000000000001',
                'status': 'confirmed',
                'attendee_name': 'Asha Rao',
                'attendee_email': 'asha@example.com',
                'purchased_at': '2026-11-02T10:15:00Z',
                'scanned_at': None,
                'tier_name': 'General',
                'tier_price': '1499.00',
                'currency': 'INR',
                'event_id': '0192f1c4-7a3e-7c1a-9d2b-5f8e3a1b2c4d',
                'event_name': 'Sunburn Arena',
                'event_venue': 'Jio World Garden',
                'event_start_date': '2026-12-20T18:00:00Z',
            }
        }
