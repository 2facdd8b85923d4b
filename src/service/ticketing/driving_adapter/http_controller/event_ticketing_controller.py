from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.create_event_and_ticket_tiers_use_case import (
    CreateEventAndTicketTiersUseCase,
)
from src.service.ticketing.app.command.update_event_status_use_case import (
    UpdateEventStatusUseCase,
)
from src.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from src.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    require_event_manager,
)
from src.service.ticketing.driving_adapter.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
    EventStatusResponse,
    EventStatusUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    event_status: Optional[EventStatus] = Query(default=None, alias='status'),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.execute(status=event_status)
    return [EventResponse.from_view(view) for view in events]


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: str,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    return EventResponse.from_view(await use_case.execute(event_id=event_id))


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: CreateEventAndTicketTiersUseCase = Depends(CreateEventAndTicketTiersUseCase.depends),
) -> EventResponse:
    with tracer.start_as_current_span('controller.create_event') as span:
        span.set_attribute('user.id', current_user.id)
        span.set_attribute('tier_count', len(request.tiers))

        created = await use_case.execute(
            user=current_user,
            name=request.name,
            venue=request.venue,
            start_date=request.start_date,
            total_capacity=request.total_capacity,
            tiers=[tier.to_draft() for tier in request.tiers],
            description=request.description,
            city=request.city,
            end_date=request.end_date,
            is_public=request.is_public,
        )

        span.set_attribute('event.id', created.event.id)
        return EventResponse.from_view(created)


@router.patch('/{event_id}/status', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event_status(
    event_id: str,
    request: EventStatusUpdateRequest,
    current_user: UserEntity = Depends(require_event_manager),
    use_case: UpdateEventStatusUseCase = Depends(UpdateEventStatusUseCase.depends),
) -> EventStatusResponse:
    with tracer.start_as_current_span('controller.update_event_status') as span:
        span.set_attribute('event.id', event_id)
        span.set_attribute('event.status', request.status.value)

        event = await use_case.execute(user=current_user, event_id=event_id, status=request.status)
        return EventStatusResponse(id=event.id, status=event.status)
