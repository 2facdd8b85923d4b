from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.query.list_my_tickets_use_case import ListMyTicketsUseCase
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.ticketing.driving_adapter.schema.ticket_schema import MyTicketResponse


router = APIRouter()


@router.get('/my', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_tickets(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListMyTicketsUseCase = Depends(ListMyTicketsUseCase.depends),
) -> List[MyTicketResponse]:
    tickets = await use_case.execute(user_id=current_user.id)
    return [MyTicketResponse.from_view(view) for view in tickets]
