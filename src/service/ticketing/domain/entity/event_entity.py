from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.id_generator import new_id
from src.service.ticketing.domain.enum.event_status import EventStatus


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Event {attribute.name} cannot be empty')


@attrs.define
class EventEntity:
    organization_id: str
    created_by_user_id: str
    name: str = attrs.field(validator=_validate_non_empty_string)
    venue: str = attrs.field(validator=_validate_non_empty_string)
    start_date: datetime
    total_capacity: int
    description: Optional[str] = None
    city: Optional[str] = None
    end_date: Optional[datetime] = None
    status: EventStatus = EventStatus.DRAFT
    is_public: bool = True
    id: str = attrs.field(factory=new_id)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        organization_id: str,
        created_by_user_id: str,
        name: str,
        venue: str,
        start_date: datetime,
        total_capacity: int,
        description: Optional[str] = None,
        city: Optional[str] = None,
        end_date: Optional[datetime] = None,
        is_public: bool = True,
    ) -> 'EventEntity':
        if total_capacity < 1:
            raise DomainError('Event total_capacity must be at least 1')
        if end_date is not None and end_date < start_date:
            raise DomainError('Event end_date must not be before start_date')

        now = datetime.now(timezone.utc)
        return cls(
            organization_id=organization_id,
            created_by_user_id=created_by_user_id,
            name=name,
            venue=venue,
            start_date=start_date,
            total_capacity=total_capacity,
            description=description,
            city=city,
            end_date=end_date,
            status=EventStatus.DRAFT,
            is_public=is_public,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_published(self) -> bool:
        return self.status == EventStatus.PUBLISHED

    def transition_to(self, target: EventStatus) -> 'EventEntity':
        if not self.status.can_transition_to(target):
            raise DomainError(f'Cannot change event status from {self.status} to {target}')
        return attrs.evolve(self, status=target, updated_at=datetime.now(timezone.utc))
