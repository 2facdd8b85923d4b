from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.event_view import EventWithTiers


class GetEventUseCase:
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
    async def execute(self, *, event_id: str) -> EventWithTiers:
        async with self.uow:
            event = await self.uow.event_ticketing_query_repo.get_event_with_tiers(
                event_id=event_id
            )

        if event is None:
            Logger.base.warning(f'[GET_EVENT] Event {event_id} not found')
            raise NotFoundError('Event not found')
        return event
