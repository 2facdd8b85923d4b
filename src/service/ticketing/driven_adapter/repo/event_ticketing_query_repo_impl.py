from collections import defaultdict
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.event_view import EventWithTiers
from src.service.ticketing.app.interface.i_event_ticketing_query_repo import (
    IEventTicketingQueryRepo,
)
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.organization_model import OrganizationModel
from src.service.ticketing.driven_adapter.model.ticket_tier_model import TicketTierModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_event, to_tier


class EventTicketingQueryRepoImpl(IEventTicketingQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_event_by_id(self, *, event_id: str) -> Optional[EventEntity]:
        row = (
            await self.session.execute(
                select(EventModel)
                .where(EventModel.id == event_id)
                .execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()
        return to_event(row) if row else None

    @Logger.io
    async def get_event_with_tiers(self, *, event_id: str) -> Optional[EventWithTiers]:
        found = (
            await self.session.execute(
                select(EventModel, OrganizationModel.name)
                .outerjoin(OrganizationModel, OrganizationModel.id == EventModel.organization_id)
                .where(EventModel.id == event_id)
            )
        ).first()
        if found is None:
            return None

        event_row, organization_name = found
        tiers = await self._tiers_by_event([event_id])
        return EventWithTiers(
            event=to_event(event_row),
            tiers=tiers.get(event_id, []),
            organization_name=organization_name,
        )

    @Logger.io
    async def list_events_with_tiers(
        self, *, status: Optional[EventStatus] = None
    ) -> List[EventWithTiers]:
        stmt = (
            select(EventModel, OrganizationModel.name)
            .outerjoin(OrganizationModel, OrganizationModel.id == EventModel.organization_id)
            .order_by(EventModel.start_date.asc())
        )
        if status is not None:
            stmt = stmt.where(EventModel.status == status.value)

        rows = (await self.session.execute(stmt)).all()
        tiers = await self._tiers_by_event([event_row.id for event_row, _ in rows])
        return [
            EventWithTiers(
                event=to_event(event_row),
                tiers=tiers.get(event_row.id, []),
                organization_name=organization_name,
            )
            for event_row, organization_name in rows
        ]

    async def get_tier_by_id(self, *, tier_id: str) -> Optional[TicketTierEntity]:
        row = (
            await self.session.execute(
                select(TicketTierModel)
                .where(TicketTierModel.id == tier_id)
                .execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()
        return to_tier(row) if row else None

    async def get_tiers_by_ids(self, *, tier_ids: List[str]) -> List[TicketTierEntity]:
        if not tier_ids:
            return []
        rows = (
            await self.session.execute(
                select(TicketTierModel)
                .where(TicketTierModel.id.in_(tier_ids))
                .execution_options(populate_existing=True)
            )
        ).scalars()
        return [to_tier(row) for row in rows]

    async def _tiers_by_event(self, event_ids: List[str]) -> dict[str, List[TicketTierEntity]]:
        if not event_ids:
            return {}
        rows = (
            await self.session.execute(
                select(TicketTierModel)
                .where(TicketTierModel.event_id.in_(event_ids))
                .order_by(TicketTierModel.sort_order.asc())
                .execution_options(populate_existing=True)
            )
        ).scalars()

        grouped: dict[str, List[TicketTierEntity]] = defaultdict(list)
        for row in rows:
            grouped[row.event_id].append(to_tier(row))
        return grouped
