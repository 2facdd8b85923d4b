from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from src.service.ticketing.app.dto.event_view import EventWithTiers, TicketTierDraft
from src.service.ticketing.domain.entity.ticket_tier_entity import TicketTierEntity
from src.service.ticketing.domain.enum.event_status import EventStatus


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps from clients are taken as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TicketTierCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    quantity: int = Field(ge=1)
    max_per_order: int = Field(default=10, ge=1)
    sales_start_date: Optional[datetime] = None
    sales_end_date: Optional[datetime] = None

    @field_validator('sales_start_date', 'sales_end_date')
    @classmethod
    def normalize_sales_window(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    def to_draft(self) -> TicketTierDraft:
        return TicketTierDraft(
            name=self.name,
            price=self.price,
            quantity=self.quantity,
            description=self.description,
            currency=self.currency,
            max_per_order=self.max_per_order,
            sales_start_date=self.sales_start_date,
            sales_end_date=self.sales_end_date,
        )


class EventCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    venue: str = Field(min_length=1, max_length=200)
    city: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    total_capacity: int = Field(ge=1)
    is_public: bool = True
    tiers: List[TicketTierCreateRequest] = Field(min_length=1)

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    class Config:
        json_schema_extra = {
            'example': {
                'name': 'Sunburn Arena',
                'description': 'Open air EDM night',
                'venue': 'Jio World Garden',
                'city': 'Mumbai',
                'start_date': '2026-12-20T18:00:00Z',
                'end_date': '2026-12-20T23:30:00Z',
                'total_capacity': 3000,
                'is_public': True,
                'tiers': [
                    {'name': 'General', 'price': '1499.00', 'quantity': 2500},
                    {'name': 'VIP', 'price': '4999.00', 'quantity': 500, 'max_per_order': 4},
                ],
            }
        }


class EventStatusUpdateRequest(BaseModel):
    status: EventStatus

    class Config:
        json_schema_extra = {'example': {'status': 'published'}}


class TicketTierResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    price: Decimal
    currency: str
    quantity: int
    sold_count: int
    available: int
    max_per_order: int
    sales_start_date: Optional[datetime]
    sales_end_date: Optional[datetime]
    is_active: bool
    sort_order: int

    @classmethod
    def from_entity(cls, tier: TicketTierEntity) -> 'TicketTierResponse':
        return cls(
            id=tier.id,
            name=tier.name,
            description=tier.description,
            price=tier.price,
            currency=tier.currency,
            quantity=tier.quantity,
            sold_count=tier.sold_count,
            available=tier.available,
            max_per_order=tier.max_per_order,
            sales_start_date=tier.sales_start_date,
            sales_end_date=tier.sales_end_date,
            is_active=tier.is_active,
            sort_order=tier.sort_order,
        )


class EventResponse(BaseModel):
    id: str
    organization_id: str
    organizer_name: str
    name: str
    description: Optional[str]
    venue: str
    city: Optional[str]
    start_date: datetime
    end_date: Optional[datetime]
    total_capacity: int
    status: EventStatus
    is_public: bool
    tickets_sold: int
    lowest_price: Decimal
    tiers: List[TicketTierResponse]

    @classmethod
    def from_view(cls, view: EventWithTiers) -> 'EventResponse':
        event = view.event
        return cls(
            id=event.id,
            organization_id=event.organization_id,
            organizer_name=view.organizer_name,
            name=event.name,
            description=event.description,
            venue=event.venue,
            city=event.city,
            start_date=event.start_date,
            end_date=event.end_date,
            total_capacity=event.total_capacity,
            status=event.status,
            is_public=event.is_public,
            tickets_sold=view.tickets_sold,
            lowest_price=view.lowest_price,
            tiers=[TicketTierResponse.from_entity(tier) for tier in view.tiers],
        )

    class Config:
        json_schema_extra = {
            'example': {
                'id': '0192f1c4-7a3e-7c1a-9d2b-5f8e3a1b2c4d',
                'organization_id': '0192f1c4-7a3e-7c1a-9d2b-000000000001',
                'organizer_name': "Asha's Organization",
                'name': 'Sunburn Arena',
                'description': 'Open air EDM night',
                'venue': 'Jio World Garden',
                'city': 'Mumbai',
                'start_date': '2026-12-20T18:00:00Z',
                'end_date': '2026-12-20T23:30:00Z',
                'total_capacity': 3000,
                'status': 'published',
                'is_public': True,
                'tickets_sold': 120,
                'lowest_price': '1499.00',
                'tiers': [],
            }
        }


class EventStatusResponse(BaseModel):
    id: str
    status: EventStatus
