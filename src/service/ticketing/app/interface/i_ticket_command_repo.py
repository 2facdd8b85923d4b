from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from src.service.ticketing.domain.entity.ticket_entity import Ticket


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def find_existing_codes(self, *, codes: Iterable[str]) -> set[str]:
        pass

    @abstractmethod
    async def create_batch(self, *, tickets: List[Ticket]) -> List[Ticket]:
        """
        Insert tickets.

        Raises:
            TicketCodeCollisionError: a code lost a race on the unique index
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, ticket_id: str) -> Optional[Ticket]:
        pass

    @abstractmethod
    async def get_by_code(self, *, ticket_code: str) -> Optional[Ticket]:
        pass

    @abstractmethod
    async def list_by_payment(self, *, payment_id: str) -> List[Ticket]:
        pass

    @abstractmethod
    async def mark_scanned_if_confirmed(
        self, *, ticket_id: str, scanned_by_user_id: str, scanned_at: datetime
    ) -> bool:
        pass

    @abstractmethod
    async def refund_confirmed_by_payment(self, *, payment_id: str) -> int:
        """Move the payment's confirmed tickets to refunded; returns how many moved."""
        pass
