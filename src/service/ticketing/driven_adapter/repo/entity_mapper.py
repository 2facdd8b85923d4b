"""ORM row <-> domain entity conversion shared by the SQLAlchemy repositories."""

from src.service.ticketing.domain.entity.entry_scan_entity import EntryScan
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.organization_entity import Organization
from src.service.ticketing.domain.entity.payment_entity import Payment
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.enum.payment_status import PaymentStatus
from src.service.ticketing.domain.enum.scan_result import ScanResult
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.cart_snapshot import CartSnapshot
from src.service.ticketing.driven_adapter.model.entry_scan_model import EntryScanModel
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.model.organization_model import OrganizationModel
from src.service.ticketing.driven_adapter.model.payment_model import PaymentModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.model.ticket_tier_model import TicketTierModel
from src.service.ticketing.driven_adapter.model.user_model import UserModel


def to_organization(row: OrganizationModel) -> Organization:
    return Organization(
        id=row.id,
        name=row.name,
        slug=row.slug,
        description=row.description,
        primary_color=row.primary_color,
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_user(row: UserModel) -> UserEntity:
    return UserEntity(
        id=row.id,
        email=row.email,
        name=row.name,
        role=UserRole(row.role),
        organization_id=row.organization_id,
        is_active=row.is_active,
    )


def to_event(row: EventModel) -> EventEntity:
    return EventEntity(
        id=row.id,
        organization_id=row.organization_id,
        created_by_user_id=row.created_by_user_id,
        name=row.name,
        description=row.description,
        venue=row.venue,
        city=row.city,
        start_date=row.start_date,
        end_date=row.end_date,
        total_capacity=row.total_capacity,
        status=EventStatus(row.status),
        is_public=row.is_public,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_tier(row: TicketTierModel) -> TicketTierEntity:
    return TicketTierEntity(
        id=row.id,
        event_id=row.event_id,
        name=row.name,
        description=row.description,
        price=row.price,
        currency=row.currency,
        quantity=row.quantity,
        sold_count=row.sold_count,
        max_per_order=row.max_per_order,
        sales_start_date=row.sales_start_date,
        sales_end_date=row.sales_end_date,
        is_active=row.is_active,
        sort_order=row.sort_order,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_ticket(row: TicketModel) -> Ticket:
    return Ticket(
        id=row.id,
        ticket_tier_id=row.ticket_tier_id,
        user_id=row.user_id,
        payment_id=row.payment_id,
        ticket_code=row.ticket_code,
        status=TicketStatus(row.status),
        attendee_name=row.attendee_name,
        attendee_email=row.attendee_email,
        attendee_phone=row.attendee_phone,
        scanned_at=row.scanned_at,
        scanned_by_user_id=row.scanned_by_user_id,
        purchased_at=row.purchased_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_payment(row: PaymentModel) -> Payment:
    return Payment(
        id=row.id,
        user_id=row.user_id,
        event_id=row.event_id,
        amount=row.amount,
        currency=row.currency,
        ticket_quantity=row.ticket_quantity,
        status=PaymentStatus(row.status),
        cart_snapshot=CartSnapshot.from_dict(row.cart_snapshot),
        external_order_id=row.external_order_id,
        external_payment_id=row.external_payment_id,
        failure_reason=row.failure_reason,
        tickets_issued_at=row.tickets_issued_at,
        requires_reconciliation=row.requires_reconciliation,
        completed_at=row.completed_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_entry_scan(row: EntryScanModel) -> EntryScan:
    return EntryScan(
        id=row.id,
        ticket_id=row.ticket_id,
        scanned_by_user_id=row.scanned_by_user_id,
        event_id=row.event_id,
        scan_result=ScanResult(row.scan_result),
        gate_name=row.gate_name,
        device_info=row.device_info,
        scanned_at=row.scanned_at,
    )
