"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.ticketing.driven_adapter.model.entry_scan_model import (
    EntryScanModel,
    UnmatchedScanModel,
)
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.organization_model import OrganizationModel
from src.service.ticketing.driven_adapter.model.payment_model import PaymentModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.model.ticket_tier_model import TicketTierModel
from src.service.ticketing.driven_adapter.model.user_model import UserModel

__all__ = [
    'EntryScanModel',
    'EventModel',
    'OrganizationModel',
    'PaymentModel',
    'TicketModel',
    'TicketTierModel',
    'UnmatchedScanModel',
    'UserModel',
]
