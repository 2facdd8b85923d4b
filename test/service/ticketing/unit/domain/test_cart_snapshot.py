from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.ticketing.domain.value_object.cart_snapshot import CartLine, CartSnapshot


@pytest.mark.unit
class TestCartSnapshot:
    def test_totals_follow_frozen_unit_prices(self) -> None:
        # Arrange
        snapshot = CartSnapshot(
            lines=[
                CartLine(tier_id='tier_ga', quantity=2, unit_price='499.50'),
                CartLine(tier_id='tier_vip', quantity=1, unit_price=Decimal('2000')),
            ],
            currency='INR',
        )

        # Assert
        assert snapshot.total_quantity == 3
        assert snapshot.total_amount == Decimal('2999.00')
        assert snapshot.version == CartSnapshot.CURRENT_VERSION

    def test_serialised_form_keeps_prices_as_strings(self) -> None:
        snapshot = CartSnapshot(
            lines=[CartLine(tier_id='tier_ga', quantity=2, unit_price='499.50')],
            currency='INR',
        )

        data = snapshot.to_dict()

        assert data == {
            'version': 1,
            'currency': 'INR',
            'lines': [{'tier_id': 'tier_ga', 'quantity': 2, 'unit_price': '499.50'}],
        }
        assert CartSnapshot.from_dict(data) == snapshot

    def test_unknown_version_is_rejected(self) -> None:
        data = {'version': 2, 'currency': 'INR', 'lines': []}

        with pytest.raises(DomainError, match='Unsupported cart snapshot version'):
            CartSnapshot.from_dict(data)

    def test_empty_cart_is_rejected(self) -> None:
        with pytest.raises(DomainError, match='at least one item'):
            CartSnapshot(lines=[], currency='INR')

    def test_duplicate_tier_lines_are_rejected(self) -> None:
        with pytest.raises(DomainError, match='only once per order'):
            CartSnapshot(
                lines=[
                    CartLine(tier_id='tier_ga', quantity=1, unit_price='10'),
                    CartLine(tier_id='tier_ga', quantity=2, unit_price='10'),
                ],
                currency='INR',
            )

    def test_line_quantity_must_be_positive(self) -> None:
        with pytest.raises(DomainError):
            CartLine(tier_id='tier_ga', quantity=0, unit_price='10')
