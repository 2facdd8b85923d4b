from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.event_view import EventWithTiers
from src.service.ticketing.domain.enum.event_status import EventStatus


class ListEventsUseCase:
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
    async def execute(self, *, status: Optional[EventStatus] = None) -> List[EventWithTiers]:
        """Events with their tiers, soonest first; all statuses when `status` is None."""
        async with self.uow:
            events = await self.uow.event_ticketing_query_repo.list_events_with_tiers(
                status=status
            )

        Logger.base.info(f'[LIST_EVENTS] status={status or "any"} found {len(events)}')
        return events
