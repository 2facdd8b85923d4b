"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.ticketing.app.command import (
    confirm_payment_use_case,
    create_event_and_ticket_tiers_use_case,
    create_order_use_case,
    issue_tickets_use_case,
    refund_payment_use_case,
    update_event_status_use_case,
    verify_scan_use_case,
)
from src.service.ticketing.app.query import (
    get_event_use_case,
    list_event_payments_use_case,
    list_events_use_case,
    list_my_tickets_use_case,
    list_recent_scans_use_case,
)
from src.service.ticketing.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_event_and_ticket_tiers_use_case,
    update_event_status_use_case,
    create_order_use_case,
    confirm_payment_use_case,
    issue_tickets_use_case,
    refund_payment_use_case,
    verify_scan_use_case,
    list_events_use_case,
    get_event_use_case,
    list_my_tickets_use_case,
    list_recent_scans_use_case,
    list_event_payments_use_case,
    role_auth,
]
