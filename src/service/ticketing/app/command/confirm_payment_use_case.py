"""
Confirm Payment Use Case

Entry point for the gateway's verdict on an order.

Flow:
1. Transaction 1: pending -> completed (or -> failed when unverified)
2. Transaction 2: issuance, which is idempotent per payment

Confirming the same order again re-runs step 2 and gets the original tickets
back, so a client retrying after a timeout never double-issues.
"""

from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.issue_tickets_use_case import IssueTicketsUseCase
from src.service.ticketing.app.dto.order_dto import PaymentConfirmation
from src.service.ticketing.domain.enum.payment_status import PaymentStatus


VERIFICATION_FAILED_REASON = 'Payment verification failed'


class ConfirmPaymentUseCase:
    def __init__(
        self, *, uow: AbstractUnitOfWork, issue_tickets_use_case: IssueTicketsUseCase
    ) -> None:
        self.uow = uow
        self.issue_tickets_use_case = issue_tickets_use_case

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        issue_tickets_use_case: IssueTicketsUseCase = Depends(IssueTicketsUseCase.depends),
    ) -> Self:
        return cls(uow=uow, issue_tickets_use_case=issue_tickets_use_case)

    @Logger.io
    async def execute(
        self, *, external_order_id: str, external_payment_id: str, verified: bool
    ) -> PaymentConfirmation:
        if not verified:
            return await self._reject(external_order_id=external_order_id)

        payment_id = await self._complete(
            external_order_id=external_order_id, external_payment_id=external_payment_id
        )
        issuance = await self.issue_tickets_use_case.execute(payment_id=payment_id)
        return PaymentConfirmation(
            payment_id=payment_id,
            payment_status=PaymentStatus.COMPLETED,
            issuance=issuance,
        )

    async def _complete(self, *, external_order_id: str, external_payment_id: str) -> str:
        async with self.uow:
            payment = await self.uow.payment_command_repo.get_by_external_order_id(
                external_order_id=external_order_id
            )
            if payment is None:
                raise NotFoundError('Payment not found')

            completed = await self.uow.payment_command_repo.complete_if_pending(
                payment_id=payment.id,
                external_payment_id=external_payment_id,
                completed_at=datetime.now(timezone.utc),
            )
            if completed:
                await self.uow.commit()
                Logger.base.info(f'[PAYMENT] payment={payment.id} completed')
                return payment.id

            current = await self.uow.payment_command_repo.get_by_id(payment_id=payment.id)
            if current is None:
                raise NotFoundError('Payment not found')
            if current.status != PaymentStatus.COMPLETED:
                raise ConflictError(f'Payment is {current.status} and cannot be completed')

            Logger.base.info(f'[PAYMENT] payment={payment.id} already completed')
            return payment.id

    async def _reject(self, *, external_order_id: str) -> PaymentConfirmation:
        async with self.uow:
            payment = await self.uow.payment_command_repo.get_by_external_order_id(
                external_order_id=external_order_id
            )
            if payment is None:
                raise NotFoundError('Payment not found')

            failed = await self.uow.payment_command_repo.fail_if_pending(
                payment_id=payment.id, failure_reason=VERIFICATION_FAILED_REASON
            )
            if failed:
                await self.uow.commit()
                Logger.base.warning(f'[PAYMENT] payment={payment.id} failed verification')
                return PaymentConfirmation(
                    payment_id=payment.id, payment_status=PaymentStatus.FAILED
                )

            current = await self.uow.payment_command_repo.get_by_id(payment_id=payment.id)
            if current is None:
                raise NotFoundError('Payment not found')
            if current.status != PaymentStatus.FAILED:
                raise ConflictError(f'Payment is {current.status} and cannot be failed')

            return PaymentConfirmation(payment_id=payment.id, payment_status=PaymentStatus.FAILED)
