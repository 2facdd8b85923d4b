from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UTCDateTime
from src.platform.database.db_setting import Base


class PaymentModel(Base):
    __tablename__ = 'payment'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('event.id'), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default='INR')
    ticket_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending')
    # `metadata` is reserved on declarative classes
    cart_snapshot: Mapped[dict] = mapped_column('metadata', JSON, nullable=False)
    external_order_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, unique=True
    )
    external_payment_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, unique=True
    )
    failure_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tickets_issued_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    requires_reconciliation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), onupdate=func.now(), nullable=False
    )
