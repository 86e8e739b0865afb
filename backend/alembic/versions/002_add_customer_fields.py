"""Add customer columns to invoices table.

Revision ID: 002_customer_fields
Revises: 001_initial
Create Date: 2026-10-14

Adds customer_name (string, default '') plus nullable customer_address and
customer_vat. Existing invoices get an empty customer name until their next update.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_customer_fields'
down_revision: Union[str, None] = '001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        'invoices',
        sa.Column('customer_name', sa.String(200), nullable=False, server_default=''),
    )
    op.add_column(
        'invoices',
        sa.Column('customer_address', sa.String(500), nullable=True),
    )
    op.add_column(
        'invoices',
        sa.Column('customer_vat', sa.String(50), nullable=True),
    )


def downgrade() -> None:
    op.drop_column('invoices', 'customer_vat')
    op.drop_column('invoices', 'customer_address')
    op.drop_column('invoices', 'customer_name')
