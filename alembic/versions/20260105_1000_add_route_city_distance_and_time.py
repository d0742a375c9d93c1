"""add distance and travel time to route cities

Revision ID: 20260105_1000_add_route_city_distance_and_time
Revises: 20251228_0900_add_route_cities_and_favorite_places
Create Date: 2026-01-05 10:00:00
"""
import sqlalchemy as sa

from app.core.migrations import add_column_if_not_exists, drop_column_if_exists

revision = '20260105_1000_add_route_city_distance_and_time'
down_revision = '20251228_0900_add_route_cities_and_favorite_places'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # both measured from the previous city on the route
    add_column_if_not_exists('route_cities', sa.Column('distance_km', sa.Numeric(8, 3), nullable=True))
    add_column_if_not_exists('route_cities', sa.Column('travel_time_minutes', sa.Integer(), nullable=True))


def downgrade() -> None:
    drop_column_if_exists('route_cities', 'travel_time_minutes')
    drop_column_if_exists('route_cities', 'distance_km')
