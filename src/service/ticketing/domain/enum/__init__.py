"""Ticketing Domain Enums"""

from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.enum.scan_result import ScanResult
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.enum.user_role import UserRole

__all__ = ['EventStatus', 'PaymentStatus', 'ScanResult', 'TicketStatus', 'UserRole']
