"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_capacity_ledger import ICapacityLedger
from src.service.ticketing.app.interface.i_entry_scan_repo import IEntryScanRepo
from src.service.ticketing.app.interface.i_event_ticketing_command_repo import (
    IEventTicketingCommandRepo,
)
from src.service.ticketing.app.interface.i_event_ticketing_query_repo import (
    IEventTicketingQueryRepo,
)
from src.service.ticketing.app.interface.i_payment_command_repo import IPaymentCommandRepo
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.app.interface.i_payment_query_repo import IPaymentQueryRepo
from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo

__all__ = [
    'ICapacityLedger',
    'IEntryScanRepo',
    'IEventTicketingCommandRepo',
    'IEventTicketingQueryRepo',
    'IPaymentCommandRepo',
    'IPaymentGateway',
    'IPaymentQueryRepo',
    'ITicketCommandRepo',
    'ITicketQueryRepo',
    'IUserCommandRepo',
]
