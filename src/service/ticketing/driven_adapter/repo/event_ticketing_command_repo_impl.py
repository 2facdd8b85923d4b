"""
Event Ticketing Command Repository Implementation - CQRS Write Side

Writes through the unit of work's session; the caller commits.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_ticketing_command_repo import (
    IEventTicketingCommandRepo,
)
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.organization_entity import Organization
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.organization_model import OrganizationModel
from src.service.ticketing.driven_adapter.model.ticket_tier_model import TicketTierModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_event


class EventTicketingCommandRepoImpl(IEventTicketingCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create_organization(self, *, organization: Organization) -> Organization:
        self.session.add(
            OrganizationModel(
                id=organization.id,
                name=organization.name,
                slug=organization.slug,
                description=organization.description,
                primary_color=organization.primary_color,
                is_active=organization.is_active,
                created_at=organization.created_at,
                updated_at=organization.updated_at,
            )
        )
        await self.session.flush()
        return organization

    async def slug_exists(self, *, slug: str) -> bool:
        found = await self.session.execute(
            select(OrganizationModel.id).where(OrganizationModel.slug == slug)
        )
        return found.first() is not None

    @Logger.io
    async def create_event_with_tiers(
        self, *, event: EventEntity, tiers: List[TicketTierEntity]
    ) -> tuple[EventEntity, List[TicketTierEntity]]:
        self.session.add(
            EventModel(
                id=event.id,
                organization_id=event.organization_id,
                created_by_user_id=event.created_by_user_id,
                name=event.name,
                description=event.description,
                venue=event.venue,
                city=event.city,
                start_date=event.start_date,
                end_date=event.end_date,
                total_capacity=event.total_capacity,
                status=event.status.value,
                is_public=event.is_public,
                created_at=event.created_at,
                updated_at=event.updated_at,
            )
        )
        # Tiers reference the event row
        await self.session.flush()

        self.session.add_all(
            [
                TicketTierModel(
                    id=tier.id,
                    event_id=event.id,
                    name=tier.name,
                    description=tier.description,
                    price=tier.price,
                    currency=tier.currency,
                    quantity=tier.quantity,
                    sold_count=tier.sold_count,
                    max_per_order=tier.max_per_order,
                    sales_start_date=tier.sales_start_date,
                    sales_end_date=tier.sales_end_date,
                    is_active=tier.is_active,
                    sort_order=tier.sort_order,
                    created_at=tier.created_at,
                    updated_at=tier.updated_at,
                )
                for tier in tiers
            ]
        )
        await self.session.flush()
        Logger.base.info(f'[EVENT] Created event {event.id} with {len(tiers)} tiers')
        return event, tiers

    async def get_event_for_update(self, *, event_id: str) -> Optional[EventEntity]:
        row = (
            await self.session.execute(
                select(EventModel)
                .where(EventModel.id == event_id)
                .execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()
        return to_event(row) if row else None

    @Logger.io
    async def update_event_status(
        self, *, event_id: str, from_status: EventStatus, to_status: EventStatus
    ) -> bool:
        result = await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event_id, EventModel.status == from_status.value)
            .values(status=to_status.value, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
