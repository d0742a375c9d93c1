"""add image_url to cities, routes, locations and events

Revision ID: 20251210_1100_add_image_url_fields
Revises: 20251205_0900_add_reset_password_token
Create Date: 2025-12-10 11:00:00
"""
import sqlalchemy as sa

from app.core.migrations import add_column_if_not_exists, drop_column_if_exists

revision = '20251210_1100_add_image_url_fields'
down_revision = '20251205_0900_add_reset_password_token'
branch_labels = None
depends_on = None

TABLES = ('cities', 'routes', 'locations', 'events')


def upgrade() -> None:
    for table in TABLES:
        add_column_if_not_exists(table, sa.Column('image_url', sa.String(500), nullable=True))


def downgrade() -> None:
    for table in TABLES:
        drop_column_if_exists(table, 'image_url')
