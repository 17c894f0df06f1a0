"""create users and farmers tables

Revision ID: 001_create_farmer_tables
Revises:
Create Date: 2025-01-15
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '001_create_farmer_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- Users ---
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(as_uuid=False), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('username', sa.Text(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('auth_user_id', sa.UUID(as_uuid=False), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.UniqueConstraint('auth_user_id', name='uq_users_auth_user_id'),
        sa.CheckConstraint("role IN ('admin', 'user')", name='ck_users_role'),
    )
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    # --- Farmers ---
    op.create_table(
        'farmers',
        sa.Column('id', sa.UUID(as_uuid=False), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('middle_initial', sa.String(5), nullable=True),
        sa.Column('location_group', sa.Text(), nullable=False, server_default=''),
        sa.Column('barangay', sa.Text(), nullable=False),
        sa.Column('town', sa.Text(), nullable=False),
        sa.Column('contact_number', sa.Text(), nullable=False, server_default=''),
        sa.Column('land_area', sa.Float(), nullable=True),
        sa.Column('planted_date', sa.Date(), nullable=True),
        sa.Column('harvest_date', sa.Date(), nullable=True),
        sa.Column('user_id', sa.UUID(as_uuid=False), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.CheckConstraint('land_area IS NULL OR land_area >= 0', name='ck_farmers_land_area'),
    )
    op.create_index('ix_farmers_user_id', 'farmers', ['user_id'])
    op.create_index('ix_farmers_created_at', 'farmers', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_farmers_created_at', table_name='farmers')
    op.drop_index('ix_farmers_user_id', table_name='farmers')
    op.drop_table('farmers')
    op.drop_index('ix_users_created_at', table_name='users')
    op.drop_table('users')
