"""
Event Ticketing Command Repository Interface

Write side for organizations, events and their ticket tiers. Tier capacity is
not written here; see ICapacityLedger.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.organization_entity import Organization
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.enum.event_status import EventStatus


class IEventTicketingCommandRepo(ABC):
    @abstractmethod
    async def create_organization(self, *, organization: Organization) -> Organization:
        pass

    @abstractmethod
    async def slug_exists(self, *, slug: str) -> bool:
        pass

    @abstractmethod
    async def create_event_with_tiers(
        self, *, event: EventEntity, tiers: List[TicketTierEntity]
    ) -> tuple[EventEntity, List[TicketTierEntity]]:
        pass

    @abstractmethod
    async def get_event_for_update(self, *, event_id: str) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def update_event_status(
        self, *, event_id: str, from_status: EventStatus, to_status: EventStatus
    ) -> bool:
        """Compare-and-set on status; False when the event left `from_status` meanwhile."""
        pass
