"""
Payment Command Repository Implementation

Status changes are compare-and-set UPDATEs keyed on the expected current
status, so a payment is completed, failed, claimed for issuance or refunded
by at most one concurrent caller.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_payment_command_repo import IPaymentCommandRepo
from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.driven_adapter.model.payment_model import PaymentModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_payment


class PaymentCommandRepoImpl(IPaymentCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, payment: Payment) -> Payment:
        self.session.add(
            PaymentModel(
                id=payment.id,
                user_id=payment.user_id,
                event_id=payment.event_id,
                amount=payment.amount,
                currency=payment.currency,
                ticket_quantity=payment.ticket_quantity,
                status=payment.status.value,
                cart_snapshot=payment.cart_snapshot.to_dict(),
                external_order_id=payment.external_order_id,
                requires_reconciliation=payment.requires_reconciliation,
                created_at=payment.created_at,
                updated_at=payment.updated_at,
            )
        )
        await self.session.flush()
        return payment

    async def set_external_order_id(self, *, payment_id: str, external_order_id: str) -> None:
        await self._conditional_update(
            PaymentModel.id == payment_id, external_order_id=external_order_id
        )

    async def get_by_id(self, *, payment_id: str) -> Optional[Payment]:
        return await self._get_one(PaymentModel.id == payment_id)

    async def get_by_external_order_id(self, *, external_order_id: str) -> Optional[Payment]:
        return await self._get_one(PaymentModel.external_order_id == external_order_id)

    @Logger.io
    async def complete_if_pending(
        self, *, payment_id: str, external_payment_id: str, completed_at: datetime
    ) -> bool:
        return await self._conditional_update(
            PaymentModel.id == payment_id,
            PaymentModel.status == PaymentStatus.PENDING.value,
            status=PaymentStatus.COMPLETED.value,
            external_payment_id=external_payment_id,
            completed_at=completed_at,
        )

    @Logger.io
    async def fail_if_pending(self, *, payment_id: str, failure_reason: str) -> bool:
        return await self._conditional_update(
            PaymentModel.id == payment_id,
            PaymentModel.status == PaymentStatus.PENDING.value,
            status=PaymentStatus.FAILED.value,
            failure_reason=failure_reason,
        )

    @Logger.io
    async def claim_issuance(self, *, payment_id: str, issued_at: datetime) -> bool:
        return await self._conditional_update(
            PaymentModel.id == payment_id,
            PaymentModel.status == PaymentStatus.COMPLETED.value,
            PaymentModel.tickets_issued_at.is_(None),
            PaymentModel.requires_reconciliation.is_(False),
            tickets_issued_at=issued_at,
        )

    @Logger.io
    async def flag_for_reconciliation(self, *, payment_id: str, failure_reason: str) -> None:
        await self._conditional_update(
            PaymentModel.id == payment_id,
            requires_reconciliation=True,
            failure_reason=failure_reason,
        )

    @Logger.io
    async def refund_if_completed(self, *, payment_id: str, reason: str) -> bool:
        return await self._conditional_update(
            PaymentModel.id == payment_id,
            PaymentModel.status == PaymentStatus.COMPLETED.value,
            status=PaymentStatus.REFUNDED.value,
            failure_reason=reason,
        )

    async def _get_one(self, *criteria) -> Optional[Payment]:
        row = (
            await self.session.execute(
                select(PaymentModel)
                .where(*criteria)
                .execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()
        return to_payment(row) if row else None

    async def _conditional_update(self, *criteria, **values) -> bool:
        result = await self.session.execute(
            update(PaymentModel)
            .where(*criteria)
            .values(**values, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
