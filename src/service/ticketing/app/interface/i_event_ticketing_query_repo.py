from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.ticketing.app.dto.event_view import EventWithTiers
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.enum.event_status import EventStatus


class IEventTicketingQueryRepo(ABC):
    """Event Ticketing Query Repository Interface - CQRS Read Side"""

    @abstractmethod
    async def get_event_by_id(self, *, event_id: str) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def get_event_with_tiers(self, *, event_id: str) -> Optional[EventWithTiers]:
        pass

    @abstractmethod
    async def list_events_with_tiers(
        self, *, status: Optional[EventStatus] = None
    ) -> List[EventWithTiers]:
        pass

    @abstractmethod
    async def get_tier_by_id(self, *, tier_id: str) -> Optional[TicketTierEntity]:
        pass

    @abstractmethod
    async def get_tiers_by_ids(self, *, tier_ids: List[str]) -> List[TicketTierEntity]:
        pass
