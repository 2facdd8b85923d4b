"""
Capacity Ledger Interface

Per-tier bookkeeping of `sold_count` against `quantity`. Implementations must
advance the counter with a single conditional statement in the store so that
concurrent reservations can never push `sold_count` past `quantity`.
"""

from abc import ABC, abstractmethod

from src.service.ticketing.domain.value_object.reservation_result import ReservationResult


class ICapacityLedger(ABC):
    @abstractmethod
    async def reserve(self, *, tier_id: str, quantity: int) -> ReservationResult:
        """
        Take `quantity` units of a tier.

        Returns RESERVED after advancing sold_count, otherwise the reason the
        tier could not supply the units (nothing is written in that case).
        """
        pass
