"""
Create Order Use Case

Validates a cart against the live event and tiers, freezes it into a priced
CartSnapshot, and records a pending payment with the gateway's order id.

Nothing is reserved here: the availability check is advisory and the
capacity ledger decides at issuance time.
"""

from datetime import datetime, timezone
from typing import Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.order_dto import CartItem, OrderCreated
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.value_object.cart_snapshot import CartLine, CartSnapshot


class CreateOrderUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, payment_gateway: IPaymentGateway) -> None:
        self.uow = uow
        self.payment_gateway = payment_gateway

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
    ) -> Self:
        return cls(uow=uow, payment_gateway=payment_gateway)

    @Logger.io
    async def execute(
        self, *, user: UserEntity, event_id: str, cart_items: List[CartItem]
    ) -> OrderCreated:
        user.validate_active()
        if not cart_items:
            raise DomainError('Cart is empty')

        async with self.uow:
            event = await self.uow.event_ticketing_query_repo.get_event_by_id(event_id=event_id)
            if event is None:
                raise NotFoundError('Event not found')

            tier_ids = [item.tier_id for item in cart_items]
            tiers = await self.uow.event_ticketing_query_repo.get_tiers_by_ids(tier_ids=tier_ids)
            snapshot = self._build_snapshot(
                event=event,
                tiers={tier.id: tier for tier in tiers},
                cart_items=cart_items,
            )

            await self.uow.user_command_repo.upsert(user_entity=user)
            payment = await self.uow.payment_command_repo.create(
                payment=Payment.create_pending(
                    user_id=user.id, event_id=event.id, cart_snapshot=snapshot
                )
            )

            external_order_id = await self.payment_gateway.create_order(
                payment_id=payment.id, amount=payment.amount, currency=payment.currency
            )
            await self.uow.payment_command_repo.set_external_order_id(
                payment_id=payment.id, external_order_id=external_order_id
            )
            await self.uow.commit()

        Logger.base.info(
            f'[ORDER] payment={payment.id} event={event_id} '
            f'units={snapshot.total_quantity} amount={payment.amount} {payment.currency}'
        )
        return OrderCreated(
            payment_id=payment.id,
            external_order_id=external_order_id,
            amount=payment.amount,
            currency=payment.currency,
        )

    @staticmethod
    def _build_snapshot(
        *,
        event: EventEntity,
        tiers: Dict[str, TicketTierEntity],
        cart_items: List[CartItem],
    ) -> CartSnapshot:
        if not event.is_published:
            raise DomainError('Event is not open for sales')

        now = datetime.now(timezone.utc)
        seen: set[str] = set()
        lines: List[CartLine] = []
        currencies: set[str] = set()

        for item in cart_items:
            if item.tier_id in seen:
                raise DomainError(f'Ticket tier {item.tier_id} appears more than once in the cart')
            seen.add(item.tier_id)

            tier = tiers.get(item.tier_id)
            if tier is None or tier.event_id != event.id:
                raise DomainError(f'Ticket tier {item.tier_id} does not belong to this event')
            if not tier.is_active:
                raise DomainError(f'Ticket tier {tier.name} is not available')
            if not tier.is_on_sale(now):
                raise DomainError(f'Ticket tier {tier.name} is not on sale')
            if item.quantity < 1 or item.quantity > tier.max_per_order:
                raise DomainError(
                    f'Quantity for {tier.name} must be between 1 and {tier.max_per_order}'
                )
            if item.quantity > tier.available:
                raise DomainError(f'Only {tier.available} tickets left for {tier.name}')

            currencies.add(tier.currency)
            lines.append(
                CartLine(tier_id=tier.id, quantity=item.quantity, unit_price=tier.price)
            )

        if len(currencies) > 1:
            raise DomainError('All tickets in one order must share a currency')

        return CartSnapshot(lines=lines, currency=currencies.pop())
