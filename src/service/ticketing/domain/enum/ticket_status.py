from enum import StrEnum


class TicketStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'
    SCANNED = 'scanned'

    def can_transition_to(self, target: 'TicketStatus') -> bool:
        return target in TICKET_STATUS_TRANSITIONS[self]


# scanned, cancelled and refunded are terminal
TICKET_STATUS_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    TicketStatus.PENDING: frozenset({TicketStatus.CONFIRMED, TicketStatus.CANCELLED}),
    TicketStatus.CONFIRMED: frozenset(
        {TicketStatus.SCANNED, TicketStatus.CANCELLED, TicketStatus.REFUNDED}
    ),
    TicketStatus.CANCELLED: frozenset(),
    TicketStatus.REFUNDED: frozenset(),
    TicketStatus.SCANNED: frozenset(),
}
