from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.value_object.issuance_result import IssuanceStatus
from src.service.ticketing.domain.value_object.reservation_result import ReservationResult
from src.service.ticketing.driving_adapter.schema.ticket_schema import TicketResponse


class CartItemRequest(BaseModel):
    tier_id: str
    quantity: int = Field(ge=1)


class CreateOrderRequest(BaseModel):
    event_id: str
    items: List[CartItemRequest] = Field(min_length=1)

    class Config:
        json_schema_extra = {
            'example': {
                'event_id': '0192f1c4-7a3e-7c1a-9d2b-5f8e3a1b2c4d',
                'items': [
                    {'tier_id': '0192f1c4-7b00-7000-8000-00000000000a', 'quantity': 2},
                    {'tier_id': '0192f1c4-7b00-7000-8000-00000000000b', 'quantity': 1},
                ],
            }
        }


class CreateOrderResponse(BaseModel):
    payment_id: str
    order_id: str
    amount: Decimal
    currency: str


class VerifyPaymentRequest(BaseModel):
    order_id: str
    payment_id: str
    verified: bool = True

    class Config:
        json_schema_extra = {
            'example': {
                'order_id': 'order_0192f1c4-7c00-7000-8000-000000000001',
                'payment_id': 'pay_NXq1f8aB3cD9',
                'verified': True,
            }
        }


class VerifyPaymentResponse(BaseModel):
    success: bool
    payment_id: str
    payment_status: PaymentStatus
    issuance_status: Optional[IssuanceStatus] = None
    tickets: List[TicketResponse] = []


class CapacityExceededResponse(BaseModel):
    success: bool = False
    payment_id: str
    issuance_status: IssuanceStatus = IssuanceStatus.CAPACITY_EXCEEDED
    failed_tier_id: Optional[str]
    reservation_result: Optional[ReservationResult]
    detail: str = 'Not enough tickets left; the payment is queued for a refund'


class RefundPaymentRequest(BaseModel):
    reason: str = Field(min_length=1, max_length=500)


class PaymentResponse(BaseModel):
    id: str
    user_id: str
    event_id: str
    amount: Decimal
    currency: str
    ticket_quantity: int
    status: PaymentStatus
    external_order_id: Optional[str]
    external_payment_id: Optional[str]
    failure_reason: Optional[str]
    requires_reconciliation: bool
    tickets_issued_at: Optional[datetime]
    completed_at: Optional[datetime]
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, payment: Payment) -> 'PaymentResponse':
        return cls(
            id=payment.id,
            user_id=payment.user_id,
            event_id=payment.event_id,
            amount=payment.amount,
            currency=payment.currency,
            ticket_quantity=payment.ticket_quantity,
            status=payment.status,
            external_order_id=payment.external_order_id,
            external_payment_id=payment.external_payment_id,
            failure_reason=payment.failure_reason,
            requires_reconciliation=payment.requires_reconciliation,
            tickets_issued_at=payment.tickets_issued_at,
            completed_at=payment.completed_at,
            created_at=payment.created_at,
        )
