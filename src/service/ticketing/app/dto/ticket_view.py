from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.ticketing.domain.entity.entry_scan_entity import EntryScan
from src.service.ticketing.domain.entity.ticket_entity import Ticket


@attrs.define(frozen=True)
class TicketWithEvent:
    """A purchaser's ticket joined with its tier and event."""

    ticket: Ticket
    tier_name: str
    tier_price: Decimal
    currency: str
    event_id: str
    event_name: str
    event_venue: str
    event_start_date: datetime


@attrs.define(frozen=True)
class RecentScan:
    scan: EntryScan
    ticket_code: str
    attendee_name: Optional[str] = None
