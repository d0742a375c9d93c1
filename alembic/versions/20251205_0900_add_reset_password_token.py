"""add reset password token to users

Revision ID: 20251205_0900_add_reset_password_token
Revises: 20251201_1000_initial_schema
Create Date: 2025-12-05 09:00:00
"""
from alembic import op
import sqlalchemy as sa

from app.core.migrations import add_column_if_not_exists, column_exists, drop_column_if_exists

revision = '20251205_0900_add_reset_password_token'
down_revision = '20251201_1000_initial_schema'
branch_labels = None
depends_on = None


def upgrade() -> None:
    if add_column_if_not_exists('users', sa.Column('reset_password_token', sa.String(255), nullable=True)):
        op.create_index('ix_users_reset_password_token', 'users', ['reset_password_token'])
    add_column_if_not_exists('users', sa.Column('reset_password_expires', sa.DateTime(), nullable=True))


def downgrade() -> None:
    if column_exists('users', 'reset_password_token'):
        op.drop_index('ix_users_reset_password_token', table_name='users')
    drop_column_if_exists('users', 'reset_password_expires')
    drop_column_if_exists('users', 'reset_password_token')
