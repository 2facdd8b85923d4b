from typing import List, Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.ticketing.app.command.create_order_use_case import CreateOrderUseCase
from src.service.ticketing.app.command.refund_payment_use_case import RefundPaymentUseCase
from src.service.ticketing.app.dto.order_dto import CartItem
from src.service.ticketing.app.query.list_event_payments_use_case import (
    ListEventPaymentsUseCase,
)
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.value_object.issuance_result import IssuanceStatus
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_event_manager,
)
from src.service.ticketing.driving_adapter.schema.payment_schema import (
    CapacityExceededResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    PaymentResponse,
    RefundPaymentRequest,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from src.service.ticketing.driving_adapter.schema.ticket_schema import TicketResponse


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/order', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_order(
    request: CreateOrderRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateOrderUseCase = Depends(CreateOrderUseCase.depends),
) -> CreateOrderResponse:
    with tracer.start_as_current_span('controller.create_order') as span:
        span.set_attribute('event.id', request.event_id)
        span.set_attribute('user.id', current_user.id)

        order = await use_case.execute(
            user=current_user,
            event_id=request.event_id,
            cart_items=[
                CartItem(tier_id=item.tier_id, quantity=item.quantity) for item in request.items
            ],
        )

        span.set_attribute('payment.id', order.payment_id)
        return CreateOrderResponse(
            payment_id=order.payment_id,
            order_id=order.external_order_id,
            amount=order.amount,
            currency=order.currency,
        )


@router.post(
    '/verify',
    status_code=status.HTTP_200_OK,
    response_model=VerifyPaymentResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': VerifyPaymentResponse},
        status.HTTP_409_CONFLICT: {'model': CapacityExceededResponse},
    },
)
@Logger.io
async def verify_payment(
    request: VerifyPaymentRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
) -> Union[VerifyPaymentResponse, JSONResponse]:
    with tracer.start_as_current_span('controller.verify_payment') as span:
        span.set_attribute('order.id', request.order_id)
        span.set_attribute('payment.verified', request.verified)

        confirmation = await use_case.execute(
            external_order_id=request.order_id,
            external_payment_id=request.payment_id,
            verified=request.verified,
        )
        issuance = confirmation.issuance

        if confirmation.payment_status == PaymentStatus.FAILED or issuance is None:
            body = VerifyPaymentResponse(
                success=False,
                payment_id=confirmation.payment_id,
                payment_status=confirmation.payment_status,
            )
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode='json')
            )

        span.set_attribute('issuance.status', issuance.status.value)
        if issuance.status == IssuanceStatus.CAPACITY_EXCEEDED:
            body = CapacityExceededResponse(
                payment_id=confirmation.payment_id,
                failed_tier_id=issuance.failed_tier_id,
                reservation_result=issuance.reservation_result,
            )
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT, content=body.model_dump(mode='json')
            )

        return VerifyPaymentResponse(
            success=True,
            payment_id=confirmation.payment_id,
            payment_status=confirmation.payment_status,
            issuance_status=issuance.status,
            tickets=[TicketResponse.from_entity(ticket) for ticket in issuance.tickets],
        )


@router.post('/{payment_id}/refund', status_code=status.HTTP_200_OK)
@Logger.io
async def refund_payment(
    payment_id: str,
    request: RefundPaymentRequest,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: RefundPaymentUseCase = Depends(RefundPaymentUseCase.depends),
) -> PaymentResponse:
    with tracer.start_as_current_span('controller.refund_payment') as span:
        span.set_attribute('payment.id', payment_id)
        span.set_attribute('user.id', current_user.id)

        payment = await use_case.execute(payment_id=payment_id, reason=request.reason)
        return PaymentResponse.from_entity(payment)


@router.get('/event/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def list_event_payments(
    event_id: str,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: ListEventPaymentsUseCase = Depends(ListEventPaymentsUseCase.depends),
) -> List[PaymentResponse]:
    payments = await use_case.execute(event_id=event_id)
    return [PaymentResponse.from_entity(payment) for payment in payments]
