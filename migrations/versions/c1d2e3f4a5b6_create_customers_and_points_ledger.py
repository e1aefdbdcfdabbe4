"""Create customers and points_ledger tables

Revision ID: c1d2e3f4a5b6
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c1d2e3f4a5b6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create customers and the append-only points ledger."""
    op.create_table(
        'customers',
        sa.Column('customer_id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('version_id', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('customer_id'),
    )
    op.create_index('ix_customers_is_deleted', 'customers', ['is_deleted'])

    # No foreign key to customers: history outlives soft deletes
    op.create_table(
        'points_ledger',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('customer_id', sa.String(64), nullable=False),
        sa.Column('change_type', sa.String(16), nullable=False),
        sa.Column('point_change', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('transaction_id', sa.String(100), nullable=False),
        sa.Column('campaign_applied', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('transaction_id'),
    )
    op.create_index('ix_points_ledger_customer_id', 'points_ledger', ['customer_id'])
    op.create_index(
        'ix_points_ledger_customer_type_ts',
        'points_ledger',
        ['customer_id', 'change_type', 'timestamp']
    )


def downgrade():
    """Drop loyalty tables."""
    op.drop_index('ix_points_ledger_customer_type_ts', table_name='points_ledger')
    op.drop_index('ix_points_ledger_customer_id', table_name='points_ledger')
    op.drop_table('points_ledger')
    op.drop_index('ix_customers_is_deleted', table_name='customers')
    op.drop_table('customers')
