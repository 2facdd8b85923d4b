from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.types.id_generator import new_id
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


@attrs.define
class Ticket:
    ticket_tier_id: str
    user_id: str
    ticket_code: str
    status: TicketStatus
    payment_id: Optional[str] = None
    attendee_name: Optional[str] = None
    attendee_email: Optional[str] = None
    attendee_phone: Optional[str] = None
    scanned_at: Optional[datetime] = None
    scanned_by_user_id: Optional[str] = None
    purchased_at: Optional[datetime] = None
    id: str = attrs.field(factory=new_id)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def issue(
        cls,
        *,
        ticket_tier_id: str,
        user_id: str,
        payment_id: str,
        ticket_code: str,
        purchased_at: datetime,
        attendee_name: Optional[str] = None,
        attendee_email: Optional[str] = None,
    ) -> 'Ticket':
        """A confirmed ticket for one paid unit of a tier."""
        return cls(
            ticket_tier_id=ticket_tier_id,
            user_id=user_id,
            payment_id=payment_id,
            ticket_code=ticket_code,
            status=TicketStatus.CONFIRMED,
            attendee_name=attendee_name,
            attendee_email=attendee_email,
            purchased_at=purchased_at,
            created_at=purchased_at,
            updated_at=purchased_at,
        )

    def ensure_can_transition_to(self, target: TicketStatus) -> None:
        if not self.status.can_transition_to(target):
            raise DomainError(f'Cannot change ticket status from {self.status} to {target}')

    def mark_scanned(self, *, scanned_by_user_id: str, scanned_at: datetime) -> 'Ticket':
        self.ensure_can_transition_to(TicketStatus.SCANNED)
        return attrs.evolve(
            self,
            status=TicketStatus.SCANNED,
            scanned_at=scanned_at,
            scanned_by_user_id=scanned_by_user_id,
            updated_at=datetime.now(timezone.utc),
        )
