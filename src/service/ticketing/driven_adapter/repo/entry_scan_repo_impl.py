from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.ticket_view import RecentScan
from src.service.ticketing.app.interface.i_entry_scan_repo import IEntryScanRepo
from src.service.ticketing.domain.entity.entry_scan_entity import EntryScan, UnmatchedScan
from src.service.ticketing.driven_adapter.model.entry_scan_model import (
    EntryScanModel,
    UnmatchedScanModel,
)
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_entry_scan


class EntryScanRepoImpl(IEntryScanRepo):
    """Insert-only access to the scan audit tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def append(self, *, entry_scan: EntryScan) -> EntryScan:
        self.session.add(
            EntryScanModel(
                id=entry_scan.id,
                ticket_id=entry_scan.ticket_id,
                scanned_by_user_id=entry_scan.scanned_by_user_id,
                event_id=entry_scan.event_id,
                scan_result=entry_scan.scan_result.value,
                gate_name=entry_scan.gate_name,
                device_info=entry_scan.device_info,
                scanned_at=entry_scan.scanned_at,
            )
        )
        await self.session.flush()
        return entry_scan

    @Logger.io
    async def append_unmatched(self, *, unmatched_scan: UnmatchedScan) -> UnmatchedScan:
        self.session.add(
            UnmatchedScanModel(
                id=unmatched_scan.id,
                raw_code=unmatched_scan.raw_code,
                event_id=unmatched_scan.event_id,
                scanned_by_user_id=unmatched_scan.scanned_by_user_id,
                gate_name=unmatched_scan.gate_name,
                device_info=unmatched_scan.device_info,
                scanned_at=unmatched_scan.scanned_at,
            )
        )
        await self.session.flush()
        return unmatched_scan

    @Logger.io
    async def list_recent(self, *, event_id: str, limit: int) -> List[RecentScan]:
        rows = (
            await self.session.execute(
                select(EntryScanModel, TicketModel.ticket_code, TicketModel.attendee_name)
                .join(TicketModel, TicketModel.id == EntryScanModel.ticket_id)
                .where(EntryScanModel.event_id == event_id)
                .order_by(EntryScanModel.scanned_at.desc(), EntryScanModel.id.desc())
                .limit(limit)
            )
        ).all()

        return [
            RecentScan(
                scan=to_entry_scan(scan_row),
                ticket_code=ticket_code,
                attendee_name=attendee_name,
            )
            for scan_row, ticket_code, attendee_name in rows
        ]
