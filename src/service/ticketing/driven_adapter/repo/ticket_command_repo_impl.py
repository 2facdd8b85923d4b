from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import TicketCodeCollisionError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_ticket


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_existing_codes(self, *, codes: Iterable[str]) -> set[str]:
        code_list = list(codes)
        if not code_list:
            return set()
        rows = await self.session.execute(
            select(TicketModel.ticket_code).where(TicketModel.ticket_code.in_(code_list))
        )
        return set(rows.scalars())

    @Logger.io
    async def create_batch(self, *, tickets: List[Ticket]) -> List[Ticket]:
        self.session.add_all(
            [
                TicketModel(
                    id=ticket.id,
                    ticket_tier_id=ticket.ticket_tier_id,
                    user_id=ticket.user_id,
                    payment_id=ticket.payment_id,
                    ticket_code=ticket.ticket_code,
                    status=ticket.status.value,
                    attendee_name=ticket.attendee_name,
                    attendee_email=ticket.attendee_email,
                    attendee_phone=ticket.attendee_phone,
                    purchased_at=ticket.purchased_at,
                    created_at=ticket.created_at,
                    updated_at=ticket.updated_at,
                )
                for ticket in tickets
            ]
        )
        try:
            await self.session.flush()
        except IntegrityError as e:
            if 'ticket_code' in str(e.orig):
                raise TicketCodeCollisionError() from e
            raise
        return tickets

    async def get_by_id(self, *, ticket_id: str) -> Optional[Ticket]:
        return await self._get_one(TicketModel.id == ticket_id)

    async def get_by_code(self, *, ticket_code: str) -> Optional[Ticket]:
        return await self._get_one(TicketModel.ticket_code == ticket_code)

    async def list_by_payment(self, *, payment_id: str) -> List[Ticket]:
        rows = (
            await self.session.execute(
                select(TicketModel)
                .where(TicketModel.payment_id == payment_id)
                .order_by(TicketModel.created_at.asc(), TicketModel.id.asc())
                .execution_options(populate_existing=True)
            )
        ).scalars()
        return [to_ticket(row) for row in rows]

    @Logger.io
    async def mark_scanned_if_confirmed(
        self, *, ticket_id: str, scanned_by_user_id: str, scanned_at: datetime
    ) -> bool:
        result = await self.session.execute(
            update(TicketModel)
            .where(
                TicketModel.id == ticket_id,
                TicketModel.status == TicketStatus.CONFIRMED.value,
            )
            .values(
                status=TicketStatus.SCANNED.value,
                scanned_at=scanned_at,
                scanned_by_user_id=scanned_by_user_id,
                updated_at=scanned_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @Logger.io
    async def refund_confirmed_by_payment(self, *, payment_id: str) -> int:
        result = await self.session.execute(
            update(TicketModel)
            .where(
                TicketModel.payment_id == payment_id,
                TicketModel.status == TicketStatus.CONFIRMED.value,
            )
            .values(status=TicketStatus.REFUNDED.value, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def _get_one(self, *criteria) -> Optional[Ticket]:
        row = (
            await self.session.execute(
                select(TicketModel).where(*criteria).execution_options(populate_existing=True)
            )
        ).scalar_one_or_none()
        return to_ticket(row) if row else None
