from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.types.id_generator import new_id
from src.service.ticketing.domain.entity.user_entity import UserEntity


DEFAULT_PRIMARY_COLOR = '#1a56db'


@attrs.define
class Organization:
    name: str
    slug: str
    id: str = attrs.field(factory=new_id)
    description: Optional[str] = None
    primary_color: str = DEFAULT_PRIMARY_COLOR
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def bootstrap_for(cls, user: UserEntity) -> 'Organization':
        """Default organization created the first time a user creates an event."""
        now = datetime.now(timezone.utc)
        owner = user.first_name or 'My'
        return cls(
            name=f"{owner}'s Organization",
            slug=f'org-{user.id[:8]}',
            created_at=now,
            updated_at=now,
        )
