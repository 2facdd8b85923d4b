from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.payment_entity import Payment


class ListEventPaymentsUseCase:
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
    async def execute(self, *, event_id: str) -> List[Payment]:
        async with self.uow:
            payments = await self.uow.payment_query_repo.list_by_event(event_id=event_id)

        Logger.base.info(f'[LIST_PAYMENTS] event={event_id} found {len(payments)}')
        return payments
