from abc import ABC, abstractmethod
from decimal import Decimal


class IPaymentGateway(ABC):
    """Outbound port to the payment provider."""

    @abstractmethod
    async def create_order(self, *, payment_id: str, amount: Decimal, currency: str) -> str:
        """Register the order with the provider and return its order id."""
        pass
