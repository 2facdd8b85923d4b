"""
Cart snapshot

The tier selections of an order, frozen at order creation together with the
unit price each tier had at that moment. Issuance replays the snapshot line by
line; nothing downstream re-reads prices from the live tiers.
"""

from decimal import Decimal
from typing import Any, ClassVar

import attrs

from src.platform.exception.exceptions import DomainError


def _to_decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


@attrs.define(frozen=True)
class CartLine:
    tier_id: str
    quantity: int = attrs.field()
    unit_price: Decimal = attrs.field(converter=_to_decimal)

    @quantity.validator
    def _check_quantity(self, _attribute: attrs.Attribute, value: int) -> None:
        if value < 1:
            raise DomainError('Cart line quantity must be at least 1')

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@attrs.define(frozen=True)
class CartSnapshot:
    CURRENT_VERSION: ClassVar[int] = 1

    lines: tuple[CartLine, ...] = attrs.field(converter=tuple)
    currency: str
    version: int = CURRENT_VERSION

    @lines.validator
    def _check_lines(self, _attribute: attrs.Attribute, value: tuple[CartLine, ...]) -> None:
        if not value:
            raise DomainError('Cart must contain at least one item')
        tier_ids = [line.tier_id for line in value]
        if len(tier_ids) != len(set(tier_ids)):
            raise DomainError('Each ticket tier may appear only once per order')

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total_amount(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal('0'))

    def to_dict(self) -> dict[str, Any]:
        return {
            'version': self.version,
            'currency': self.currency,
            'lines': [
                {
                    'tier_id': line.tier_id,
                    'quantity': line.quantity,
                    'unit_price': str(line.unit_price),
                }
                for line in self.lines
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'CartSnapshot':
        version = data.get('version')
        if version != cls.CURRENT_VERSION:
            raise DomainError(f'Unsupported cart snapshot version: {version}')
        return cls(
            lines=tuple(
                CartLine(
                    tier_id=line['tier_id'],
                    quantity=int(line['quantity']),
                    unit_price=line['unit_price'],
                )
                for line in data['lines']
            ),
            currency=data['currency'],
            version=version,
        )
