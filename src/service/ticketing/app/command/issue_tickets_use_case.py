"""
Issue Tickets Use Case

Turns a completed payment into one confirmed ticket per purchased unit.

Flow (one transaction):
1. Claim the payment's issuance marker (conditional update)
2. Reserve capacity for every cart line, in snapshot order
3. Insert the tickets with fresh codes
4. Commit

A capacity failure rolls the whole transaction back, marker included, and a
second transaction flags the payment for reconciliation. A lost race on the
ticket_code index retries the transaction with new codes.
"""

from datetime import datetime, timezone
import time
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    DomainError,
    NotFoundError,
    TicketCodeCollisionError,
    TicketCodeExhaustedError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.ticket_code_generator import TicketCodeGenerator
from src.service.ticketing.domain.value_object.issuance_result import (
    IssuanceResult,
    IssuanceStatus,
)
from src.service.ticketing.domain.value_object.reservation_result import ReservationResult


class IssueTicketsUseCase:
    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        code_generator: TicketCodeGenerator,
        max_code_attempts: int = 5,
    ) -> None:
        self.uow = uow
        self.code_generator = code_generator
        self.max_code_attempts = max_code_attempts

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        code_generator: TicketCodeGenerator = Depends(Provide[Container.ticket_code_generator]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow=uow,
            code_generator=code_generator,
            max_code_attempts=settings.TICKET_CODE_MAX_ATTEMPTS,
        )

    @Logger.io
    async def execute(self, *, payment_id: str) -> IssuanceResult:
        started = time.perf_counter()

        for attempt in range(1, self.max_code_attempts + 1):
            try:
                result = await self._issue_once(payment_id=payment_id)
            except TicketCodeCollisionError:
                metrics.ticket_code_collisions.inc()
                Logger.base.warning(
                    f'[ISSUANCE] payment={payment_id} ticket code collision '
                    f'(attempt {attempt}/{self.max_code_attempts}), retrying'
                )
                continue

            metrics.record_issuance(
                result=result.status,
                ticket_count=len(result.tickets) if result.status == IssuanceStatus.ISSUED else 0,
                duration=time.perf_counter() - started,
            )
            return result

        raise TicketCodeExhaustedError(self.max_code_attempts)

    async def _issue_once(self, *, payment_id: str) -> IssuanceResult:
        issued_at = datetime.now(timezone.utc)
        failed_tier_id: Optional[str] = None
        failed_reservation: Optional[ReservationResult] = None

        async with self.uow:
            claimed = await self.uow.payment_command_repo.claim_issuance(
                payment_id=payment_id, issued_at=issued_at
            )
            if not claimed:
                return await self._resolve_unclaimed(payment_id=payment_id)

            payment = await self.uow.payment_command_repo.get_by_id(payment_id=payment_id)
            if payment is None:
                raise NotFoundError('Payment not found')

            for line in payment.cart_snapshot.lines:
                reservation = await self.uow.capacity_ledger.reserve(
                    tier_id=line.tier_id, quantity=line.quantity
                )
                if not reservation.is_reserved:
                    failed_tier_id, failed_reservation = line.tier_id, reservation
                    break

            if failed_reservation is None:
                tickets = await self._create_tickets(payment=payment, issued_at=issued_at)
                await self.uow.commit()
                Logger.base.info(
                    f'[ISSUANCE] payment={payment_id} issued {len(tickets)} tickets'
                )
                return IssuanceResult.issued(payment_id=payment_id, tickets=tickets)

        # Leaving the block above rolled back the marker and every reservation
        await self._flag_for_reconciliation(
            payment_id=payment_id, tier_id=failed_tier_id, reservation=failed_reservation
        )
        return IssuanceResult.capacity_exceeded(
            payment_id=payment_id,
            failed_tier_id=failed_tier_id,
            reservation_result=failed_reservation,
        )

    async def _resolve_unclaimed(self, *, payment_id: str) -> IssuanceResult:
        payment = await self.uow.payment_command_repo.get_by_id(payment_id=payment_id)
        if payment is None:
            raise NotFoundError('Payment not found')

        if payment.is_issued:
            tickets = await self.uow.ticket_command_repo.list_by_payment(payment_id=payment_id)
            Logger.base.info(f'[ISSUANCE] payment={payment_id} already issued, replaying')
            return IssuanceResult.already_issued(payment_id=payment_id, tickets=tickets)

        if payment.requires_reconciliation:
            tier_id, reservation = payment.capacity_failure() or (None, None)
            return IssuanceResult.capacity_exceeded(
                payment_id=payment_id, failed_tier_id=tier_id, reservation_result=reservation
            )

        if payment.status != PaymentStatus.COMPLETED:
            raise DomainError(
                f'Payment is {payment.status}; tickets are issued only for completed payments'
            )

        # Completed, unclaimed and unflagged, yet the claim matched nothing
        raise DomainError('Payment could not be claimed for issuance')

    async def _create_tickets(self, *, payment: Payment, issued_at: datetime) -> List[Ticket]:
        codes = iter(await self._allocate_codes(count=payment.cart_snapshot.total_quantity))
        attendee = await self.uow.user_command_repo.get_by_id(user_id=payment.user_id)

        tickets = [
            Ticket.issue(
                ticket_tier_id=line.tier_id,
                user_id=payment.user_id,
                payment_id=payment.id,
                ticket_code=next(codes),
                purchased_at=issued_at,
                attendee_name=attendee.name if attendee else None,
                attendee_email=attendee.email if attendee else None,
            )
            for line in payment.cart_snapshot.lines
            for _ in range(line.quantity)
        ]
        return await self.uow.ticket_command_repo.create_batch(tickets=tickets)

    async def _allocate_codes(self, *, count: int) -> List[str]:
        codes = self.code_generator.generate_batch(count)
        for _ in range(self.max_code_attempts):
            taken = await self.uow.ticket_command_repo.find_existing_codes(codes=codes)
            if not taken:
                return codes
            fresh = iter(self.code_generator.generate_batch(len(taken), exclude=set(codes) | taken))
            codes = [next(fresh) if code in taken else code for code in codes]
        raise TicketCodeCollisionError()

    async def _flag_for_reconciliation(
        self,
        *,
        payment_id: str,
        tier_id: Optional[str],
        reservation: Optional[ReservationResult],
    ) -> None:
        reason = Payment.capacity_failure_reason(
            tier_id=tier_id, reason=reservation or ReservationResult.SOLD_OUT
        )
        async with self.uow:
            await self.uow.payment_command_repo.flag_for_reconciliation(
                payment_id=payment_id, failure_reason=reason
            )
            await self.uow.commit()
        Logger.base.warning(f'[ISSUANCE] payment={payment_id} needs reconciliation: {reason}')
