"""
Users are projected from token claims on first need; the projection must
tolerate concurrent first requests and never drop an assigned organization.
"""

import asyncio

import pytest

from src.service.ticketing.domain.enum.user_role import UserRole


@pytest.mark.integration
class TestUserProjection:
    async def test_concurrent_first_upserts_leave_one_row(self, uow_factory, make_user) -> None:
        # Arrange
        newcomer = make_user(user_id='buyer_new', name='Meera Iyer')

        async def _upsert(name: str):
            async with uow_factory() as uow:
                stored = await uow.user_command_repo.upsert(
                    user_entity=make_user(user_id=newcomer.id, name=name)
                )
                await uow.commit()
                return stored

        # Act
        results = await asyncio.gather(*(_upsert(f'Meera Iyer {n}') for n in range(4)))

        # Assert
        assert {stored.id for stored in results} == {newcomer.id}
        async with uow_factory() as uow:
            stored = await uow.user_command_repo.get_by_id(user_id=newcomer.id)
        assert stored is not None
        assert stored.name in {f'Meera Iyer {n}' for n in range(4)}

    async def test_refresh_updates_claims_and_keeps_organization(
        self, uow_factory, create_published_event, organiser, make_user
    ) -> None:
        # Arrange: creating an event bootstraps the organiser's organization
        await create_published_event(('General', '500.00', 10))
        async with uow_factory() as uow:
            before = await uow.user_command_repo.get_by_id(user_id=organiser.id)
        renamed = make_user(
            UserRole.ORGANISER, user_id=organiser.id, name='Priya S.', email='priya@example.com'
        )

        # Act
        async with uow_factory() as uow:
            refreshed = await uow.user_command_repo.upsert(user_entity=renamed)
            await uow.commit()

        # Assert
        assert before.organization_id is not None
        assert refreshed.organization_id == before.organization_id
        assert refreshed.name == 'Priya S.'
        assert refreshed.email == 'priya@example.com'
