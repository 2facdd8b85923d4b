from typing import Optional

import attrs

from src.platform.exception.exceptions import ForbiddenError
from src.service.ticketing.domain.enum.user_role import UserRole


@attrs.define
class UserEntity:
    """
    Thin projection of the identity provider's user.

    Built from token claims on every request; persisted only once the user
    needs an organization of their own.
    """

    id: str
    email: str = ''
    name: str = ''
    role: UserRole = UserRole.USER
    organization_id: Optional[str] = None
    is_active: bool = True

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else ''

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    def has_any_role(self, *roles: UserRole) -> bool:
        return self.role in roles
