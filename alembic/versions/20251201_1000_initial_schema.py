"""initial schema

Revision ID: 20251201_1000_initial_schema
Revises:
Create Date: 2025-12-01 10:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20251201_1000_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def _soft_delete():
    return [
        sa.Column('is_deleted', sa.Boolean(), server_default=sa.false(), nullable=False, index=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    ]


def _category_link(table, owner_table, owner_column):
    op.create_table(
        table,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(owner_column, sa.Integer(), sa.ForeignKey(f'{owner_table}.{owner_column}', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.category_id', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(owner_column, 'category_id', name=f'uq_{table}_pair'),
    )


def _stories(table, id_column, owner_table, owner_column):
    op.create_table(
        table,
        sa.Column(id_column, sa.Integer(), primary_key=True),
        sa.Column(owner_column, sa.Integer(), sa.ForeignKey(f'{owner_table}.{owner_column}', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('name_text_ref_id', sa.Integer(), nullable=False),
        sa.Column('description_text_ref_id', sa.Integer(), nullable=True),
        sa.Column('play_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('audio_url_ref_id', sa.Integer(), nullable=True),
        *_timestamps(),
    )


def _user_link(table, target_table, target_column, created_column='created_at'):
    op.create_table(
        table,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.user_id', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column(target_column, sa.Integer(), sa.ForeignKey(f'{target_table}.{target_column}', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column(created_column, sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', target_column, name=f'uq_{table}_pair'),
    )


def upgrade() -> None:
    op.create_table(
        'localized_texts',
        sa.Column('text_id', sa.Integer(), primary_key=True),
        sa.Column('reference_id', sa.Integer(), nullable=False, index=True),
        sa.Column('language_code', sa.String(10), nullable=False),
        sa.Column('text_content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('reference_id', 'language_code', name='uq_localized_texts_reference_language'),
    )
    op.create_table(
        'categories',
        sa.Column('category_id', sa.Integer(), primary_key=True),
        sa.Column('name_text_ref_id', sa.Integer(), nullable=False),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'types',
        sa.Column('type_id', sa.Integer(), primary_key=True),
        sa.Column('name_text_ref_id', sa.Integer(), nullable=False),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'faq',
        sa.Column('faq_id', sa.Integer(), primary_key=True),
        sa.Column('question_text_ref_id', sa.Integer(), nullable=False),
        sa.Column('answer_text_ref_id', sa.Integer(), nullable=False),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'cities',
        sa.Column('city_id', sa.Integer(), primary_key=True),
        sa.Column('name_text_ref_id', sa.Integer(), nullable=False),
        sa.Column('description_text_ref_id', sa.Integer(), nullable=True),
        sa.Column('what_to_observe_text_ref_id', sa.Integer(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('state', sa.String(100), nullable=False),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'routes',
        sa.Column('route_id', sa.Integer(), primary_key=True),
        sa.Column('title_text_ref_id', sa.Integer(), nullable=False),
        sa.Column('description_text_ref_id', sa.Integer(), nullable=True),
        sa.Column('what_to_observe_text_ref_id', sa.Integer(), nullable=True),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'locations',
        sa.Column('location_id', sa.Integer(), primary_key=True),
        sa.Column('city_id', sa.Integer(), sa.ForeignKey('cities.city_id', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('type_id', sa.Integer(), sa.ForeignKey('types.type_id', ondelete='SET NULL'),
                  nullable=True, index=True),
        sa.Column('name_text_ref_id', sa.Integer(), nullable=False),
        sa.Column('description_text_ref_id', sa.Integer(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_table(
        'events',
        sa.Column('event_id', sa.Integer(), primary_key=True),
        sa.Column('city_id', sa.Integer(), sa.ForeignKey('cities.city_id', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('name_text_ref_id', sa.Integer(), nullable=False),
        sa.Column('description_text_ref_id', sa.Integer(), nullable=True),
        sa.Column('location_text_ref_id', sa.Integer(), nullable=True),
        sa.Column('event_date', sa.Date(), nullable=False, index=True),
        sa.Column('event_time', sa.Time(), nullable=False),
        *_timestamps(),
        *_soft_delete(),
    )

    _category_link('city_categories', 'cities', 'city_id')
    _category_link('route_categories', 'routes', 'route_id')
    _category_link('location_categories', 'locations', 'location_id')
    _category_link('event_categories', 'events', 'event_id')

    _stories('story_cities', 'story_city_id', 'cities', 'city_id')
    _stories('story_routes', 'story_route_id', 'routes', 'route_id')
    _stories('story_locations', 'story_location_id', 'locations', 'location_id')
    _stories('story_events', 'story_event_id', 'events', 'event_id')

    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(100), nullable=False, unique=True, index=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('profile_picture_url', sa.String(500), nullable=True),
        sa.Column('is_admin', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'user_push_settings',
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('active_route_notifications', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('travel_tips_notifications', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('nearby_events_notifications', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('available_narratives_notifications', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('local_offers_notifications', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.user_id', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('token_hash', sa.String(64), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('revoked', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    _user_link('user_favorite_cities', 'cities', 'city_id')
    _user_link('user_favorite_routes', 'routes', 'route_id')
    _user_link('user_visited_routes', 'routes', 'route_id', created_column='visited_at')


def downgrade() -> None:
    for table in (
        'user_visited_routes', 'user_favorite_routes', 'user_favorite_cities',
        'refresh_tokens', 'user_push_settings', 'users',
        'story_events', 'story_locations', 'story_routes', 'story_cities',
        'event_categories', 'location_categories', 'route_categories', 'city_categories',
        'events', 'locations', 'routes', 'cities', 'faq', 'types', 'categories', 'localized_texts',
    ):
        op.drop_table(table)
