from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UTCDateTime
from src.platform.database.db_setting import Base


class EntryScanModel(Base):
    """Scan audit trail; rows are inserted and never updated."""

    __tablename__ = 'entry_scan'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    ticket_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('ticket.id'), nullable=False, index=True
    )
    scanned_by_user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    # The requested gate event, which need not be the ticket's own
    event_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    scan_result: Mapped[str] = mapped_column(String(20), nullable=False)
    gate_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    device_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    scanned_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, index=True)


class UnmatchedScanModel(Base):
    __tablename__ = 'unmatched_scan'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    raw_code: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    event_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    scanned_by_user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    gate_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    device_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    scanned_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
