from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_payment_query_repo import IPaymentQueryRepo
from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.driven_adapter.model.payment_model import PaymentModel
from src.service.ticketing.driven_adapter.repo.entity_mapper import to_payment


class PaymentQueryRepoImpl(IPaymentQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def list_by_event(self, *, event_id: str) -> List[Payment]:
        rows = (
            await self.session.execute(
                select(PaymentModel)
                .where(PaymentModel.event_id == event_id)
                .order_by(PaymentModel.created_at.desc(), PaymentModel.id.desc())
            )
        ).scalars()
        return [to_payment(row) for row in rows]
