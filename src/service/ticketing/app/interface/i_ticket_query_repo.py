from abc import ABC, abstractmethod
from typing import List

from src.service.ticketing.app.dto.ticket_view import TicketWithEvent


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def list_by_user(self, *, user_id: str) -> List[TicketWithEvent]:
        """Newest purchase first."""
        pass
