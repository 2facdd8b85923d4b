from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UTCDateTime
from src.platform.database.db_setting import Base


class TicketModel(Base):
    __tablename__ = 'ticket'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    ticket_tier_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('ticket_tier.id'), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    payment_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey('payment.id'), nullable=True, index=True
    )
    ticket_code: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending')
    attendee_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    attendee_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    attendee_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    scanned_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    scanned_by_user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    purchased_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), onupdate=func.now(), nullable=False
    )
