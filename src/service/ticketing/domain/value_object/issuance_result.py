from enum import StrEnum
from typing import Optional

import attrs

from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.value_object.reservation_result import ReservationResult


class IssuanceStatus(StrEnum):
    ISSUED = 'issued'
    ALREADY_ISSUED = 'already_issued'
    CAPACITY_EXCEEDED = 'capacity_exceeded'


@attrs.define(frozen=True)
class IssuanceResult:
    """
    Outcome of converting a completed payment into tickets.

    ALREADY_ISSUED carries the tickets of the earlier run, so a repeated
    confirmation answers with the same ticket set. CAPACITY_EXCEEDED carries no
    tickets; the payment is left flagged for reconciliation.
    """

    status: IssuanceStatus
    payment_id: str
    tickets: tuple[Ticket, ...] = attrs.field(default=(), converter=tuple)
    failed_tier_id: Optional[str] = None
    reservation_result: Optional[ReservationResult] = None

    @property
    def has_tickets(self) -> bool:
        return self.status in (IssuanceStatus.ISSUED, IssuanceStatus.ALREADY_ISSUED)

    @classmethod
    def issued(cls, *, payment_id: str, tickets: list[Ticket]) -> 'IssuanceResult':
        return cls(status=IssuanceStatus.ISSUED, payment_id=payment_id, tickets=tickets)

    @classmethod
    def already_issued(cls, *, payment_id: str, tickets: list[Ticket]) -> 'IssuanceResult':
        return cls(status=IssuanceStatus.ALREADY_ISSUED, payment_id=payment_id, tickets=tickets)

    @classmethod
    def capacity_exceeded(
        cls,
        *,
        payment_id: str,
        failed_tier_id: Optional[str],
        reservation_result: Optional[ReservationResult],
    ) -> 'IssuanceResult':
        return cls(
            status=IssuanceStatus.CAPACITY_EXCEEDED,
            payment_id=payment_id,
            failed_tier_id=failed_tier_id,
            reservation_result=reservation_result,
        )
