from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.interface.i_capacity_ledger import ICapacityLedger
from src.service.ticketing.domain.value_object.reservation_result import ReservationResult
from src.service.ticketing.driven_adapter.model.ticket_tier_model import TicketTierModel


class CapacityLedgerImpl(ICapacityLedger):
    """
    sold_count bookkeeping as one conditional UPDATE.

    The guard `sold_count + q <= quantity` is evaluated by the database under
    its row lock, so two transactions racing for the last unit cannot both
    match. The CHECK constraint on ticket_tier backs the same invariant.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def reserve(self, *, tier_id: str, quantity: int) -> ReservationResult:
        if quantity < 1:
            raise DomainError('Reservation quantity must be at least 1')

        result = await self.session.execute(
            update(TicketTierModel)
            .where(
                TicketTierModel.id == tier_id,
                TicketTierModel.is_active.is_(True),
                TicketTierModel.sold_count + quantity <= TicketTierModel.quantity,
            )
            .values(sold_count=TicketTierModel.sold_count + quantity)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 1:
            outcome = ReservationResult.RESERVED
        else:
            outcome = await self._classify_failure(tier_id=tier_id)
            Logger.base.info(f'[CAPACITY] tier={tier_id} qty={quantity} rejected: {outcome}')

        metrics.record_reservation(result=outcome)
        return outcome

    async def _classify_failure(self, *, tier_id: str) -> ReservationResult:
        is_active = (
            await self.session.execute(
                select(TicketTierModel.is_active).where(TicketTierModel.id == tier_id)
            )
        ).scalar_one_or_none()

        if is_active is None:
            return ReservationResult.TIER_NOT_FOUND
        if not is_active:
            return ReservationResult.TIER_INACTIVE
        return ReservationResult.SOLD_OUT
