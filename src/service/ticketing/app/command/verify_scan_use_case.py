"""
Verify Scan Use Case

Classifies a code presented at a gate and admits each ticket at most once.

Resolution order (first match wins):
1. Malformed or unknown code         -> invalid (no EntryScan)
2. Ticket belongs to another event   -> wrong_event
3. Already scanned                   -> already_scanned
4. Cancelled or refunded             -> expired
5. Pending                           -> invalid
6. Confirmed, event not published    -> expired
7. Confirmed                         -> conditional confirmed -> scanned

When step 7 matches no row another gate admitted the ticket first; the ticket
is read again and classified from step 3, never retried. Every scan that
resolves a ticket leaves exactly one EntryScan row.
"""

from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.domain.entity.entry_scan_entity import EntryScan, UnmatchedScan
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.enum.scan_result import ScanResult
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.ticket_code_generator import (
    TicketCodeGenerator,
    normalize_ticket_code,
)
from src.service.ticketing.domain.value_object.scan_outcome import ScanOutcome, ScannedTicketView


class VerifyScanUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, log_unmatched_scans: bool = True) -> None:
        self.uow = uow
        self.log_unmatched_scans = log_unmatched_scans

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, log_unmatched_scans=settings.LOG_UNMATCHED_SCANS)

    @Logger.io
    async def execute(
        self,
        *,
        ticket_code: str,
        event_id: str,
        scanner_user_id: str,
        gate_name: Optional[str] = None,
        device_info: Optional[str] = None,
    ) -> ScanOutcome:
        code = normalize_ticket_code(ticket_code)
        scanned_at = datetime.now(timezone.utc)

        async with self.uow:
            ticket = (
                await self.uow.ticket_command_repo.get_by_code(ticket_code=code)
                if TicketCodeGenerator.is_well_formed(code)
                else None
            )
            if ticket is None:
                outcome = ScanOutcome.rejected(ScanResult.INVALID, 'Invalid ticket code')
                if self.log_unmatched_scans and code:
                    await self.uow.entry_scan_repo.append_unmatched(
                        unmatched_scan=UnmatchedScan(
                            raw_code=code,
                            event_id=event_id,
                            scanned_by_user_id=scanner_user_id,
                            scanned_at=scanned_at,
                            gate_name=gate_name,
                            device_info=device_info,
                        )
                    )
                    await self.uow.commit()
                return self._finish(outcome=outcome, code=code, event_id=event_id)

            tier = await self.uow.event_ticketing_query_repo.get_tier_by_id(
                tier_id=ticket.ticket_tier_id
            )
            event = (
                await self.uow.event_ticketing_query_repo.get_event_by_id(event_id=tier.event_id)
                if tier
                else None
            )

            if tier is None or tier.event_id != event_id:
                outcome = ScanOutcome.rejected(
                    ScanResult.WRONG_EVENT, 'This ticket is for a different event'
                )
            else:
                outcome = await self._admit(
                    ticket=ticket,
                    tier=tier,
                    event=event,
                    scanner_user_id=scanner_user_id,
                    scanned_at=scanned_at,
                )

            await self.uow.entry_scan_repo.append(
                entry_scan=EntryScan(
                    ticket_id=ticket.id,
                    scanned_by_user_id=scanner_user_id,
                    event_id=event_id,
                    scan_result=outcome.scan_result,
                    scanned_at=scanned_at,
                    gate_name=gate_name,
                    device_info=device_info,
                )
            )
            await self.uow.commit()

        return self._finish(outcome=outcome, code=code, event_id=event_id)

    async def _admit(
        self,
        *,
        ticket: Ticket,
        tier: TicketTierEntity,
        event: Optional[EventEntity],
        scanner_user_id: str,
        scanned_at: datetime,
    ) -> ScanOutcome:
        if ticket.status != TicketStatus.CONFIRMED:
            return self._classify(ticket=ticket, tier=tier, event=event)
        if event is not None and not event.is_published:
            return ScanOutcome.rejected(
                ScanResult.EXPIRED, f'Event is {event.status}, entry is closed'
            )

        admitted = await self.uow.ticket_command_repo.mark_scanned_if_confirmed(
            ticket_id=ticket.id, scanned_by_user_id=scanner_user_id, scanned_at=scanned_at
        )
        if admitted:
            scanned = ticket.mark_scanned(
                scanned_by_user_id=scanner_user_id, scanned_at=scanned_at
            )
            return ScanOutcome.approved(self._view(ticket=scanned, tier=tier, event=event))

        metrics.scan_conflicts.inc()
        Logger.base.warning(f'[SCAN] ticket={ticket.id} lost the admission race, re-classifying')
        current = await self.uow.ticket_command_repo.get_by_id(ticket_id=ticket.id)
        if current is None or current.status == TicketStatus.CONFIRMED:
            return ScanOutcome.rejected(ScanResult.INVALID, 'Ticket could not be verified')
        return self._classify(ticket=current, tier=tier, event=event)

    def _classify(
        self, *, ticket: Ticket, tier: TicketTierEntity, event: Optional[EventEntity]
    ) -> ScanOutcome:
        if ticket.status == TicketStatus.SCANNED:
            scanned_at = ticket.scanned_at.isoformat() if ticket.scanned_at else 'an earlier time'
            return ScanOutcome.rejected(
                ScanResult.ALREADY_SCANNED,
                f'Already scanned at {scanned_at}',
                self._view(ticket=ticket, tier=tier, event=event),
            )
        if ticket.status in (TicketStatus.CANCELLED, TicketStatus.REFUNDED):
            return ScanOutcome.rejected(ScanResult.EXPIRED, 'Ticket has been cancelled or refunded')
        return ScanOutcome.rejected(ScanResult.INVALID, 'Ticket payment has not been confirmed')

    @staticmethod
    def _view(
        *, ticket: Ticket, tier: TicketTierEntity, event: Optional[EventEntity]
    ) -> ScannedTicketView:
        return ScannedTicketView(
            id=ticket.id,
            ticket_code=ticket.ticket_code,
            status=ticket.status,
            tier_name=tier.name,
            event_id=tier.event_id,
            event_name=event.name if event else '',
            attendee_name=ticket.attendee_name,
            attendee_email=ticket.attendee_email,
            scanned_at=ticket.scanned_at,
        )

    @staticmethod
    def _finish(*, outcome: ScanOutcome, code: str, event_id: str) -> ScanOutcome:
        metrics.record_scan(result=outcome.scan_result)
        Logger.base.info(f'[SCAN] code={code} event={event_id} result={outcome.scan_result}')
        return outcome
