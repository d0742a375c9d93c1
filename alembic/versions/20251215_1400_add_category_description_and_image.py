"""add description and image to categories

Revision ID: 20251215_1400_add_category_description_and_image
Revises: 20251210_1100_add_image_url_fields
Create Date: 2025-12-15 14:00:00
"""
import sqlalchemy as sa

from app.core.migrations import add_column_if_not_exists, drop_column_if_exists

revision = '20251215_1400_add_category_description_and_image'
down_revision = '20251210_1100_add_image_url_fields'
branch_labels = None
depends_on = None


def upgrade() -> None:
    add_column_if_not_exists('categories', sa.Column('description_text_ref_id', sa.Integer(), nullable=True))
    add_column_if_not_exists('categories', sa.Column('image_url', sa.String(500), nullable=True))


def downgrade() -> None:
    drop_column_if_exists('categories', 'image_url')
    drop_column_if_exists('categories', 'description_text_ref_id')
