from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User Command Repository Abstract Interface - Handles write operations"""

    @abstractmethod
    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def upsert(self, *, user_entity: UserEntity) -> UserEntity:
        """Insert the user or refresh its profile columns; organization_id is kept."""
        pass

    @abstractmethod
    async def assign_organization(self, *, user_id: str, organization_id: str) -> None:
        pass
