from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.user_role import UserRole


class UpdateEventStatusUseCase:
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
    async def execute(self, *, user: UserEntity, event_id: str, status: EventStatus) -> EventEntity:
        """
        Move an event along draft -> published -> completed (or -> cancelled).

        Admins may change any event; organisers only events of their own
        organization.
        """
        async with self.uow:
            event = await self.uow.event_ticketing_command_repo.get_event_for_update(
                event_id=event_id
            )
            if event is None:
                raise NotFoundError('Event not found')

            if not user.is_admin:
                owner = await self.uow.user_command_repo.get_by_id(user_id=user.id)
                if (
                    not user.has_any_role(UserRole.ORGANISER)
                    or owner is None
                    or owner.organization_id != event.organization_id
                ):
                    raise ForbiddenError('Only organisers of this event may change its status')

            updated = event.transition_to(status)
            changed = await self.uow.event_ticketing_command_repo.update_event_status(
                event_id=event_id, from_status=event.status, to_status=updated.status
            )
            if not changed:
                raise ConflictError('Event status changed concurrently, reload and retry')

            await self.uow.commit()

        Logger.base.info(f'[EVENT_STATUS] event={event_id} {event.status} -> {updated.status}')
        return updated
