from abc import ABC, abstractmethod
from typing import List

from src.service.ticketing.domain.entity.payment_entity import Payment


class IPaymentQueryRepo(ABC):
    @abstractmethod
    async def list_by_event(self, *, event_id: str) -> List[Payment]:
        """Newest first."""
        pass
