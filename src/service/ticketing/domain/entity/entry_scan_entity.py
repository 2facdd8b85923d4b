from datetime import datetime
from typing import Optional

import attrs

from src.platform.types.id_generator import new_id
from src.service.ticketing.domain.enum.scan_result import ScanResult


@attrs.define(frozen=True)
class EntryScan:
    """Audit row for a scan that resolved to a ticket. Append-only."""

    ticket_id: str
    scanned_by_user_id: str
    event_id: str
    scan_result: ScanResult
    scanned_at: datetime
    gate_name: Optional[str] = None
    device_info: Optional[str] = None
    id: str = attrs.field(factory=new_id)


@attrs.define(frozen=True)
class UnmatchedScan:
    """A presented code that matched no ticket, kept by its raw value."""

    raw_code: str
    event_id: str
    scanned_by_user_id: str
    scanned_at: datetime
    gate_name: Optional[str] = None
    device_info: Optional[str] = None
    id: str = attrs.field(factory=new_id)
