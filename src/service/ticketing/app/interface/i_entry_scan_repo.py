from abc import ABC, abstractmethod
from typing import List

from src.service.ticketing.app.dto.ticket_view import RecentScan
from src.service.ticketing.domain.entity.entry_scan_entity import EntryScan, UnmatchedScan


class IEntryScanRepo(ABC):
    """Append-only scan audit trail."""

    @abstractmethod
    async def append(self, *, entry_scan: EntryScan) -> EntryScan:
        pass

    @abstractmethod
    async def append_unmatched(self, *, unmatched_scan: UnmatchedScan) -> UnmatchedScan:
        pass

    @abstractmethod
    async def list_recent(self, *, event_id: str, limit: int) -> List[RecentScan]:
        pass
