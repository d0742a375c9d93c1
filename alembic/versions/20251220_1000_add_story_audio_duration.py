"""add audio duration to stories

Revision ID: 20251220_1000_add_story_audio_duration
Revises: 20251215_1400_add_category_description_and_image
Create Date: 2025-12-20 10:00:00
"""
import sqlalchemy as sa

from app.core.migrations import add_column_if_not_exists, drop_column_if_exists

revision = '20251220_1000_add_story_audio_duration'
down_revision = '20251215_1400_add_category_description_and_image'
branch_labels = None
depends_on = None

STORY_TABLES = ('story_cities', 'story_routes', 'story_locations', 'story_events')


def upgrade() -> None:
    for table in STORY_TABLES:
        add_column_if_not_exists(table, sa.Column('audio_duration_seconds', sa.Integer(), nullable=True))


def downgrade() -> None:
    for table in STORY_TABLES:
        drop_column_if_exists(table, 'audio_duration_seconds')
