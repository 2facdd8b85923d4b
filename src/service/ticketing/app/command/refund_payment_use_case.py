from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.domain.enum.payment_status import PaymentStatus


class RefundPaymentUseCase:
    """
    completed -> refunded, together with every still-confirmed ticket of the payment.

    Scanned tickets stay scanned. Tier sold counts are not given back.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, payment_id: str, reason: str) -> Payment:
        async with self.uow:
            payment = await self.uow.payment_command_repo.get_by_id(payment_id=payment_id)
            if payment is None:
                raise NotFoundError('Payment not found')
            payment.ensure_can_transition_to(PaymentStatus.REFUNDED)

            refunded = await self.uow.payment_command_repo.refund_if_completed(
                payment_id=payment_id, reason=reason
            )
            if not refunded:
                raise ConflictError('Payment status changed concurrently, reload and retry')

            ticket_count = await self.uow.ticket_command_repo.refund_confirmed_by_payment(
                payment_id=payment_id
            )
            updated = await self.uow.payment_command_repo.get_by_id(payment_id=payment_id)
            await self.uow.commit()

        Logger.base.info(f'[REFUND] payment={payment_id} refunded, {ticket_count} tickets voided')
        return updated or payment
