"""init_ticketing_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- organization: Tenants, one per organiser team
- user: Identity provider projection (id issued by the IdP)
- event: Events owned by an organization
- ticket_tier: Price/quantity buckets with the sold_count <= quantity CHECK
- payment: Orders, cart snapshot (column `metadata`) and issuance marker
- ticket: One row per admitted unit, unique ticket_code
- entry_scan: Append-only gate audit trail
- unmatched_scan: Codes that resolved to no ticket
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'organization',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('primary_color', sa.String(length=7), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_organization_slug'), 'organization', ['slug'], unique=True)

    op.create_table(
        'user',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('organization_id', sa.String(length=36), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organization.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=False)
    op.create_index(op.f('ix_user_organization_id'), 'user', ['organization_id'], unique=False)

    op.create_table(
        'event',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(length=36), nullable=False),
        sa.Column('created_by_user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('venue', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('total_capacity', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['organization_id'], ['organization.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_event_organization_id'), 'event', ['organization_id'], unique=False)
    op.create_index(op.f('ix_event_status'), 'event', ['status'], unique=False)

    op.create_table(
        'ticket_tier',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('sold_count', sa.Integer(), nullable=False),
        sa.Column('max_per_order', sa.Integer(), nullable=False),
        sa.Column('sales_start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sales_end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            'sold_count >= 0 AND sold_count <= quantity',
            name='ck_ticket_tier_sold_count_within_quantity',
        ),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_ticket_tier_event_id'), 'ticket_tier', ['event_id'], unique=False)

    op.create_table(
        'payment',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('ticket_quantity', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.Column('external_order_id', sa.String(length=255), nullable=True),
        sa.Column('external_payment_id', sa.String(length=255), nullable=True),
        sa.Column('failure_reason', sa.Text(), nullable=True),
        sa.Column('tickets_issued_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('requires_reconciliation', sa.Boolean(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('external_order_id'),
        sa.UniqueConstraint('external_payment_id'),
    )
    op.create_index(op.f('ix_payment_user_id'), 'payment', ['user_id'], unique=False)
    op.create_index(op.f('ix_payment_event_id'), 'payment', ['event_id'], unique=False)

    op.create_table(
        'ticket',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('ticket_tier_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('payment_id', sa.String(length=36), nullable=True),
        sa.Column('ticket_code', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('attendee_name', sa.String(length=255), nullable=True),
        sa.Column('attendee_email', sa.String(length=255), nullable=True),
        sa.Column('attendee_phone', sa.String(length=20), nullable=True),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('scanned_by_user_id', sa.String(length=64), nullable=True),
        sa.Column('purchased_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['ticket_tier_id'], ['ticket_tier.id']),
        sa.ForeignKeyConstraint(['payment_id'], ['payment.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_ticket_ticket_code'), 'ticket', ['ticket_code'], unique=True)
    op.create_index(op.f('ix_ticket_ticket_tier_id'), 'ticket', ['ticket_tier_id'], unique=False)
    op.create_index(op.f('ix_ticket_user_id'), 'ticket', ['user_id'], unique=False)
    op.create_index(op.f('ix_ticket_payment_id'), 'ticket', ['payment_id'], unique=False)

    op.create_table(
        'entry_scan',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('ticket_id', sa.String(length=36), nullable=False),
        sa.Column('scanned_by_user_id', sa.String(length=64), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('scan_result', sa.String(length=20), nullable=False),
        sa.Column('gate_name', sa.String(length=100), nullable=True),
        sa.Column('device_info', sa.Text(), nullable=True),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['ticket_id'], ['ticket.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_entry_scan_ticket_id'), 'entry_scan', ['ticket_id'], unique=False)
    op.create_index(op.f('ix_entry_scan_event_id'), 'entry_scan', ['event_id'], unique=False)
    op.create_index(op.f('ix_entry_scan_scanned_at'), 'entry_scan', ['scanned_at'], unique=False)

    op.create_table(
        'unmatched_scan',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('raw_code', sa.String(length=255), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('scanned_by_user_id', sa.String(length=64), nullable=False),
        sa.Column('gate_name', sa.String(length=100), nullable=True),
        sa.Column('device_info', sa.Text(), nullable=True),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_unmatched_scan_raw_code'), 'unmatched_scan', ['raw_code'], unique=False)
    op.create_index(op.f('ix_unmatched_scan_event_id'), 'unmatched_scan', ['event_id'], unique=False)


def downgrade() -> None:
    """Drop all tables in reverse order of creation (indexes dropped automatically)."""
    op.drop_table('unmatched_scan')
    op.drop_table('entry_scan')
    op.drop_table('ticket')
    op.drop_table('payment')
    op.drop_table('ticket_tier')
    op.drop_table('event')
    op.drop_table('user')
    op.drop_table('organization')
