"""
Create Event Use Case

Flow (one transaction):
1. Persist the caller's profile from token claims
2. Bootstrap an organization when the caller has none yet
3. Insert the draft event and its tiers (sort_order = list position)
"""

from datetime import datetime
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.id_generator import new_id
from src.service.ticketing.app.dto.event_view import EventWithTiers, TicketTierDraft
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.organization_entity import Organization
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.entity.user_entity import UserEntity


class CreateEventAndTicketTiersUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, default_currency: str = 'INR') -> None:
        self.uow = uow
        self.default_currency = default_currency

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, default_currency=settings.DEFAULT_CURRENCY)

    @Logger.io
    async def execute(
        self,
        *,
        user: UserEntity,
        name: str,
        venue: str,
        start_date: datetime,
        total_capacity: int,
        tiers: List[TicketTierDraft],
        description: Optional[str] = None,
        city: Optional[str] = None,
        end_date: Optional[datetime] = None,
        is_public: bool = True,
    ) -> EventWithTiers:
        if not tiers:
            raise DomainError('An event needs at least one ticket tier')

        async with self.uow:
            owner = await self.uow.user_command_repo.upsert(user_entity=user)
            organization = await self._ensure_organization(owner)

            event = EventEntity.create(
                organization_id=organization.id if organization else owner.organization_id,
                created_by_user_id=owner.id,
                name=name,
                venue=venue,
                start_date=start_date,
                total_capacity=total_capacity,
                description=description,
                city=city,
                end_date=end_date,
                is_public=is_public,
            )
            tier_entities = [
                TicketTierEntity.create(
                    event_id=event.id,
                    name=draft.name,
                    price=draft.price,
                    quantity=draft.quantity,
                    currency=draft.currency or self.default_currency,
                    sort_order=index,
                    description=draft.description,
                    max_per_order=draft.max_per_order,
                    sales_start_date=draft.sales_start_date,
                    sales_end_date=draft.sales_end_date,
                )
                for index, draft in enumerate(tiers)
            ]

            event, tier_entities = await self.uow.event_ticketing_command_repo.create_event_with_tiers(
                event=event, tiers=tier_entities
            )
            created = await self.uow.event_ticketing_query_repo.get_event_with_tiers(
                event_id=event.id
            )
            await self.uow.commit()

        Logger.base.info(
            f'[CREATE_EVENT] event={event.id} org={event.organization_id} tiers={len(tier_entities)}'
        )
        return created or EventWithTiers(
            event=event,
            tiers=tier_entities,
            organization_name=organization.name if organization else None,
        )

    async def _ensure_organization(self, owner: UserEntity) -> Optional[Organization]:
        """New organization for a first-time organiser; None when the owner already has one."""
        if owner.organization_id:
            return None

        organization = Organization.bootstrap_for(owner)
        if await self.uow.event_ticketing_command_repo.slug_exists(slug=organization.slug):
            organization.slug = f'{organization.slug}-{new_id()[-4:]}'

        organization = await self.uow.event_ticketing_command_repo.create_organization(
            organization=organization
        )
        await self.uow.user_command_repo.assign_organization(
            user_id=owner.id, organization_id=organization.id
        )
        Logger.base.info(f'[CREATE_EVENT] bootstrapped organization {organization.slug}')
        return organization
