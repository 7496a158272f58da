"""create users, events, event_participants and newsletter_subscriptions

Revision ID: c001_create_community_tables
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c001_create_community_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('profile_image', sa.String(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('role', sa.String(length=20), server_default='member', nullable=False),
        sa.Column('newsletter_subscribed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'events',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('subtitle', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('rsvp_deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('going_count', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('is_published', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('is_online', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('online_url', sa.String(), nullable=True),
        sa.Column('poster_image', sa.String(), nullable=True),
        sa.Column('price', sa.Float(), server_default=sa.text('0'), nullable=False),
        sa.Column('organizer_user_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['organizer_user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('capacity IS NULL OR capacity >= 0', name='check_capacity_non_negative'),
        sa.CheckConstraint('going_count >= 0', name='check_going_count_non_negative'),
        sa.CheckConstraint(
            'capacity IS NULL OR going_count <= capacity',
            name='check_going_count_lte_capacity',
        ),
    )
    op.create_index('ix_events_date', 'events', ['date'])
    op.create_index('ix_events_organizer_user_id', 'events', ['organizer_user_id'])

    op.create_table(
        'event_participants',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('event_id', sa.String(), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='going', nullable=False),
        sa.Column('is_checked_in', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('rsvp_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'event_id', name='unique_event_participant_user'),
    )
    op.create_index('ix_event_participants_user_id', 'event_participants', ['user_id'])
    op.create_index('ix_event_participants_event_id', 'event_participants', ['event_id'])
    op.create_index(
        'idx_event_participants_queue',
        'event_participants',
        ['event_id', 'status', 'rsvp_at'],
    )

    op.create_table(
        'newsletter_subscriptions',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='subscribed', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_newsletter_subscriptions_email', 'newsletter_subscriptions', ['email'], unique=True
    )


def downgrade() -> None:
    op.drop_index('ix_newsletter_subscriptions_email', table_name='newsletter_subscriptions')
    op.drop_table('newsletter_subscriptions')
    op.drop_index('idx_event_participants_queue', table_name='event_participants')
    op.drop_index('ix_event_participants_event_id', table_name='event_participants')
    op.drop_index('ix_event_participants_user_id', table_name='event_participants')
    op.drop_table('event_participants')
    op.drop_index('ix_events_organizer_user_id', table_name='events')
    op.drop_index('ix_events_date', table_name='events')
    op.drop_table('events')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
