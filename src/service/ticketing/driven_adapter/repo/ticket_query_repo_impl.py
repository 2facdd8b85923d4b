from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.ticket_view import TicketWithEvent
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.model.ticket_tier_model import TicketTierModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_ticket


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def list_by_user(self, *, user_id: str) -> List[TicketWithEvent]:
        rows = (
            await self.session.execute(
                select(TicketModel, TicketTierModel, EventModel)
                .join(TicketTierModel, TicketTierModel.id == TicketModel.ticket_tier_id)
                .join(EventModel, EventModel.id == TicketTierModel.event_id)
                .where(TicketModel.user_id == user_id)
                .order_by(TicketModel.purchased_at.desc(), TicketModel.id.desc())
            )
        ).all()

        return [
            TicketWithEvent(
                ticket=to_ticket(ticket_row),
                tier_name=tier_row.name,
                tier_price=tier_row.price,
                currency=tier_row.currency,
                event_id=event_row.id,
                event_name=event_row.name,
                event_venue=event_row.venue,
                event_start_date=event_row.start_date,
            )
            for ticket_row, tier_row, event_row in rows
        ]
