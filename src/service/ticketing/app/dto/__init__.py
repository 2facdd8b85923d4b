"""Application layer DTOs"""

from src.service.ticketing.app.dto.event_view import EventWithTiers, TicketTierDraft
from src.service.ticketing.app.dto.order_dto import CartItem, OrderCreated, PaymentConfirmation
from src.service.ticketing.app.dto.ticket_view import RecentScan, TicketWithEvent

__all__ = [
    'CartItem',
    'EventWithTiers',
    'OrderCreated',
    'PaymentConfirmation',
    'RecentScan',
    'TicketTierDraft',
    'TicketWithEvent',
]
