from typing import Awaitable, Callable, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Caller rebuilt from the bearer token (stateless, no DB query)."""
    return jwt_auth.get_current_user_info_from_jwt(
        credentials.credentials if credentials else None
    )


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[UserEntity]]:
    allowed = ', '.join(role.value for role in roles)

    async def _require_roles(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
        tracer = trace.get_tracer(__name__)
        with tracer.start_as_current_span(
            'auth.require_roles',
            attributes={
                'user.id': current_user.id,
                'user.role': current_user.role.value,
                'auth.allowed_roles': allowed,
            },
        ):
            if not current_user.has_any_role(*roles):
                raise ForbiddenError(f'This action requires one of the roles: {allowed}')
            return current_user

    return _require_roles


require_event_manager = require_roles(UserRole.ADMIN, UserRole.ORGANISER)
require_gate_staff = require_roles(UserRole.ADMIN, UserRole.ORGANISER, UserRole.GATEKEEPER)
