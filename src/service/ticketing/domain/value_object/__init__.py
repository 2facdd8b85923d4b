"""Ticketing Domain Value Objects"""

from src.service.ticketing.domain.value_object.cart_snapshot import CartLine, CartSnapshot
from src.service.ticketing.domain.value_object.reservation_result import ReservationResult

__all__ = ['CartLine', 'CartSnapshot', 'ReservationResult']
