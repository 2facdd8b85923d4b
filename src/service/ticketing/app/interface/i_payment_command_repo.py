"""
Payment Command Repository Interface

Every status change is a conditional update guarded by the expected current
state; the boolean result says whether this caller won the transition.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.service.ticketing.domain.entity.payment_entity import Payment


class IPaymentCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def set_external_order_id(self, *, payment_id: str, external_order_id: str) -> None:
        pass

    @abstractmethod
    async def get_by_id(self, *, payment_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def get_by_external_order_id(self, *, external_order_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def complete_if_pending(
        self, *, payment_id: str, external_payment_id: str, completed_at: datetime
    ) -> bool:
        pass

    @abstractmethod
    async def fail_if_pending(self, *, payment_id: str, failure_reason: str) -> bool:
        pass

    @abstractmethod
    async def claim_issuance(self, *, payment_id: str, issued_at: datetime) -> bool:
        """Set the issuance marker on a completed, unclaimed, unflagged payment."""
        pass

    @abstractmethod
    async def flag_for_reconciliation(self, *, payment_id: str, failure_reason: str) -> None:
        pass

    @abstractmethod
    async def refund_if_completed(self, *, payment_id: str, reason: str) -> bool:
        pass
