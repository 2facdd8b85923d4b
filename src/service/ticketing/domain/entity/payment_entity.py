from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Tuple

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.id_generator import new_id
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.value_object.cart_snapshot import CartSnapshot
from src.service.ticketing.domain.value_object.reservation_result import ReservationResult


CAPACITY_EXCEEDED_REASON_PREFIX = 'capacity_exceeded'


@attrs.define
class Payment:
    """
    An order and its settlement.

    `tickets_issued_at` is the idempotency marker of issuance: once set, the
    payment's tickets exist and a repeated confirmation only reads them back.
    """

    user_id: str
    event_id: str
    amount: Decimal
    currency: str
    ticket_quantity: int
    cart_snapshot: CartSnapshot
    status: PaymentStatus = PaymentStatus.PENDING
    external_order_id: Optional[str] = None
    external_payment_id: Optional[str] = None
    failure_reason: Optional[str] = None
    tickets_issued_at: Optional[datetime] = None
    requires_reconciliation: bool = False
    completed_at: Optional[datetime] = None
    id: str = attrs.field(factory=new_id)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create_pending(
        cls, *, user_id: str, event_id: str, cart_snapshot: CartSnapshot
    ) -> 'Payment':
        now = datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            event_id=event_id,
            amount=cart_snapshot.total_amount,
            currency=cart_snapshot.currency,
            ticket_quantity=cart_snapshot.total_quantity,
            cart_snapshot=cart_snapshot,
            status=PaymentStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_issued(self) -> bool:
        return self.tickets_issued_at is not None

    def ensure_can_transition_to(self, target: PaymentStatus) -> None:
        if not self.status.can_transition_to(target):
            raise DomainError(f'Cannot change payment status from {self.status} to {target}')

    @staticmethod
    def capacity_failure_reason(*, tier_id: Optional[str], reason: str) -> str:
        return f'{CAPACITY_EXCEEDED_REASON_PREFIX}:{tier_id}:{reason}'

    def capacity_failure(self) -> Optional[Tuple[Optional[str], ReservationResult]]:
        """Tier and reservation outcome recorded when issuance ran out of capacity."""
        if not self.failure_reason or not self.failure_reason.startswith(
            f'{CAPACITY_EXCEEDED_REASON_PREFIX}:'
        ):
            return None
        _, tier_id, reason = self.failure_reason.split(':', 2)
        try:
            result = ReservationResult(reason)
        except ValueError:
            result = ReservationResult.SOLD_OUT
        return (None if tier_id == 'None' else tier_id), result
