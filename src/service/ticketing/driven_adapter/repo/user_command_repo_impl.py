from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driven_adapter.model.user_model import UserModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_user


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, *, user_id: str) -> Optional[UserEntity]:
        row = (
            await self.session.execute(
                select(UserModel)
                .where(UserModel.id == user_id)
                .execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()
        return to_user(row) if row else None

    @Logger.io
    async def upsert(self, *, user_entity: UserEntity) -> UserEntity:
        """
        Insert the user or refresh its token claims in one statement.

        Concurrent first requests of a new user race on the primary key; the
        loser updates instead of failing. `organization_id` is only set on insert.
        """
        now = datetime.now(timezone.utc)
        dialect = self.session.get_bind().dialect.name
        insert = pg_insert if dialect == 'postgresql' else sqlite_insert
        statement = insert(UserModel).values(
            id=user_entity.id,
            email=user_entity.email,
            name=user_entity.name,
            role=user_entity.role.value,
            organization_id=user_entity.organization_id,
            is_active=user_entity.is_active,
            created_at=now,
            updated_at=now,
        )
        statement = statement.on_conflict_do_update(
            index_elements=[UserModel.id],
            set_={
                'email': statement.excluded.email,
                'name': statement.excluded.name,
                'role': statement.excluded.role,
                'is_active': statement.excluded.is_active,
                'updated_at': statement.excluded.updated_at,
            },
        )
        await self.session.execute(statement)

        stored = await self.get_by_id(user_id=user_entity.id)
        return stored if stored else user_entity

    @Logger.io
    async def assign_organization(self, *, user_id: str, organization_id: str) -> None:
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(organization_id=organization_id, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
