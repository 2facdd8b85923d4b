from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.types.id_generator import new_id


DEFAULT_MAX_PER_ORDER = 10


def _to_decimal(value: object) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


@attrs.define
class TicketTierEntity:
    """
    Named price/quantity bucket of an event.

    `sold_count` only ever grows, and only through the capacity ledger's
    conditional update; this entity never writes it back.
    """

    event_id: str
    name: str
    price: Decimal = attrs.field(converter=_to_decimal)
    quantity: int = attrs.field()
    currency: str = 'INR'
    sold_count: int = 0
    max_per_order: int = DEFAULT_MAX_PER_ORDER
    description: Optional[str] = None
    sales_start_date: Optional[datetime] = None
    sales_end_date: Optional[datetime] = None
    is_active: bool = True
    sort_order: int = 0
    id: str = attrs.field(factory=new_id)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @price.validator
    def _check_price(self, _attribute: attrs.Attribute, value: Decimal) -> None:
        if value < 0:
            raise DomainError('Ticket tier price cannot be negative')

    @quantity.validator
    def _check_quantity(self, _attribute: attrs.Attribute, value: int) -> None:
        if value < 1:
            raise DomainError('Ticket tier quantity must be at least 1')

    @classmethod
    def create(
        cls,
        *,
        event_id: str,
        name: str,
        price: Decimal,
        quantity: int,
        currency: str,
        sort_order: int,
        description: Optional[str] = None,
        max_per_order: int = DEFAULT_MAX_PER_ORDER,
        sales_start_date: Optional[datetime] = None,
        sales_end_date: Optional[datetime] = None,
    ) -> 'TicketTierEntity':
        if not name or not name.strip():
            raise DomainError('Ticket tier name cannot be empty')
        if max_per_order < 1:
            raise DomainError('Ticket tier max_per_order must be at least 1')
        if len(currency) != 3:
            raise DomainError('Currency must be a 3-letter code')
        if sales_start_date and sales_end_date and sales_end_date < sales_start_date:
            raise DomainError('Ticket tier sales window ends before it starts')

        now = datetime.now(timezone.utc)
        return cls(
            event_id=event_id,
            name=name,
            price=price,
            quantity=quantity,
            currency=currency.upper(),
            max_per_order=max_per_order,
            description=description,
            sales_start_date=sales_start_date,
            sales_end_date=sales_end_date,
            sort_order=sort_order,
            created_at=now,
            updated_at=now,
        )

    @property
    def available(self) -> int:
        return max(self.quantity - self.sold_count, 0)

    def is_on_sale(self, now: datetime) -> bool:
        if self.sales_start_date is not None and now < self.sales_start_date:
            return False
        if self.sales_end_date is not None and now > self.sales_end_date:
            return False
        return True
