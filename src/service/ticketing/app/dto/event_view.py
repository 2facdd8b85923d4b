from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity


UNKNOWN_ORGANIZER = 'Unknown Organizer'


@attrs.define(frozen=True)
class EventWithTiers:
    event: EventEntity
    tiers: tuple[TicketTierEntity, ...] = attrs.field(converter=tuple)
    organization_name: Optional[str] = None

    @property
    def tickets_sold(self) -> int:
        return sum(tier.sold_count for tier in self.tiers)

    @property
    def lowest_price(self) -> Decimal:
        """Cheapest active tier; 0 when nothing is on offer."""
        prices = [tier.price for tier in self.tiers if tier.is_active]
        return min(prices) if prices else Decimal('0')

    @property
    def organizer_name(self) -> str:
        return self.organization_name or UNKNOWN_ORGANIZER


@attrs.define(frozen=True)
class TicketTierDraft:
    """Tier fields as submitted with a new event; the list position becomes sort_order."""

    name: str
    price: Decimal
    quantity: int
    description: Optional[str] = None
    currency: Optional[str] = None
    max_per_order: int = 10
    sales_start_date: Optional[datetime] = None
    sales_end_date: Optional[datetime] = None
