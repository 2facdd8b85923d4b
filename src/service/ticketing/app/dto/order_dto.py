from decimal import Decimal
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.value_object.issuance_result import IssuanceResult


@attrs.define(frozen=True)
class CartItem:
    """One requested line of a cart, as sent by the client."""

    tier_id: str
    quantity: int


@attrs.define(frozen=True)
class OrderCreated:
    payment_id: str
    external_order_id: str
    amount: Decimal
    currency: str


@attrs.define(frozen=True)
class PaymentConfirmation:
    payment_id: str
    payment_status: PaymentStatus
    issuance: Optional[IssuanceResult] = None
