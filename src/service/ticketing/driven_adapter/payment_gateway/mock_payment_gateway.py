from decimal import Decimal

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway


class MockPaymentGateway(IPaymentGateway):
    """
    Stand-in provider for local runs and tests.

    Order ids are derived from the payment id, so confirmations can be
    replayed without any provider state.
    """

    ORDER_ID_PREFIX = 'order_'

    @Logger.io
    async def create_order(self, *, payment_id: str, amount: Decimal, currency: str) -> str:
        return f'{self.ORDER_ID_PREFIX}{payment_id}'
