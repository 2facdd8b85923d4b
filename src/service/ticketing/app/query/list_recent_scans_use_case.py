from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.ticket_view import RecentScan


class ListRecentScansUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, default_limit: int = 20) -> None:
        self.uow = uow
        self.default_limit = default_limit

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, default_limit=settings.RECENT_SCANS_LIMIT)

    @Logger.io
    async def execute(self, *, event_id: str, limit: Optional[int] = None) -> List[RecentScan]:
        """Latest gate activity for an event, newest first."""
        limit = self.default_limit if limit is None else limit
        if limit < 1:
            raise DomainError('limit must be at least 1')

        async with self.uow:
            return await self.uow.entry_scan_repo.list_recent(event_id=event_id, limit=limit)
