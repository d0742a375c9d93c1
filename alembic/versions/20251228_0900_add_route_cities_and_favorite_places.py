"""add route cities and favorite events / locations

Revision ID: 20251228_0900_add_route_cities_and_favorite_places
Revises: 20251220_1000_add_story_audio_duration
Create Date: 2025-12-28 09:00:00
"""
from alembic import op
import sqlalchemy as sa

from app.core.migrations import table_exists

revision = '20251228_0900_add_route_cities_and_favorite_places'
down_revision = '20251220_1000_add_story_audio_duration'
branch_labels = None
depends_on = None


def _favorite(table, target_table, target_column):
    if table_exists(table):
        return
    op.create_table(
        table,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.user_id', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column(target_column, sa.Integer(), sa.ForeignKey(f'{target_table}.{target_column}', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', target_column, name=f'uq_{table}_pair'),
    )


def upgrade() -> None:
    if not table_exists('route_cities'):
        op.create_table(
            'route_cities',
            sa.Column('route_city_id', sa.Integer(), primary_key=True),
            sa.Column('route_id', sa.Integer(), sa.ForeignKey('routes.route_id', ondelete='CASCADE'),
                      nullable=False, index=True),
            sa.Column('city_id', sa.Integer(), sa.ForeignKey('cities.city_id', ondelete='CASCADE'),
                      nullable=False, index=True),
            sa.Column('order', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint('route_id', 'city_id', name='uq_route_cities_pair'),
        )

    _favorite('user_favorite_events', 'events', 'event_id')
    _favorite('user_favorite_locations', 'locations', 'location_id')


def downgrade() -> None:
    for table in ('user_favorite_locations', 'user_favorite_events', 'route_cities'):
        if table_exists(table):
            op.drop_table(table)
