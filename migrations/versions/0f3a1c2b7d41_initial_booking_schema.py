"""initial_booking_schema

Revision ID: 0f3a1c2b7d41
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0f3a1c2b7d41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'languages',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('user_type', sa.String(20), nullable=False),
        sa.Column('mobile', sa.String(30), nullable=True),
        sa.Column('consumer_type', sa.String(30), nullable=True),
        sa.Column('customer_type', sa.String(30), nullable=True),
        sa.Column('translator_type', sa.String(30), nullable=True),
        sa.Column('translator_level', sa.String(100), nullable=True),
        sa.Column('gender', sa.String(10), nullable=True),
        sa.Column('city', sa.String(255), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('instructions', sa.String(1000), nullable=True),
        sa.Column('not_get_emergency', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('not_get_nighttime', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('not_get_notification', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_user_type', 'users', ['user_type'])
    op.create_index('ix_users_translator_type', 'users', ['translator_type'])

    op.create_table(
        'user_languages',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('language_id', sa.UUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['language_id'], ['languages.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'idx_user_languages_unique', 'user_languages', ['user_id', 'language_id'], unique=True
    )
    op.create_index('idx_user_languages_language', 'user_languages', ['language_id'])

    op.create_table(
        'user_blacklist',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('customer_user_id', sa.UUID(), nullable=False),
        sa.Column('translator_user_id', sa.UUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['customer_user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['translator_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_blacklist_customer_user_id', 'user_blacklist', ['customer_user_id'])
    op.create_index(
        'idx_user_blacklist_unique',
        'user_blacklist',
        ['customer_user_id', 'translator_user_id'],
        unique=True,
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('from_language_id', sa.UUID(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('job_type', sa.String(20), nullable=False),
        sa.Column('due', sa.DateTime(timezone=True), nullable=False),
        sa.Column('immediate', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('gender', sa.String(10), nullable=True),
        sa.Column('certified', sa.String(20), nullable=True),
        sa.Column('customer_phone_type', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('customer_physical_type', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('admin_comments', sa.Text(), nullable=True),
        sa.Column('reference', sa.String(255), nullable=True),
        sa.Column('session_time', sa.String(20), nullable=True),
        sa.Column('user_email', sa.String(255), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('town', sa.String(255), nullable=True),
        sa.Column('specific_translator_id', sa.UUID(), nullable=True),
        sa.Column('end_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('will_expire_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('withdraw_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ignore', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('ignore_expired', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('ignore_feedback', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('flagged', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('manually_handled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('by_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('cust_16_hour_email', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('cust_48_hour_email', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['from_language_id'], ['languages.id']),
        sa.ForeignKeyConstraint(['specific_translator_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_jobs_user_id', 'jobs', ['user_id'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])
    op.create_index('ix_jobs_due', 'jobs', ['due'])
    op.create_index('ix_jobs_will_expire_at', 'jobs', ['will_expire_at'])
    op.create_index(
        'idx_jobs_status_type_language', 'jobs', ['status', 'job_type', 'from_language_id']
    )
    op.create_index('idx_jobs_status_expiry', 'jobs', ['status', 'will_expire_at'])

    op.create_table(
        'translator_assignments',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('job_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancel_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_by', sa.UUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['completed_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_translator_assignments_job_id', 'translator_assignments', ['job_id'])
    op.create_index('ix_translator_assignments_user_id', 'translator_assignments', ['user_id'])
    op.create_index(
        'idx_translator_assignments_user_open',
        'translator_assignments',
        ['user_id', 'completed_at', 'cancel_at'],
    )
    # At most one active assignment per job
    op.create_index(
        'uq_translator_assignments_active_job',
        'translator_assignments',
        ['job_id'],
        unique=True,
        postgresql_where=sa.text('completed_at IS NULL AND cancel_at IS NULL'),
    )

    op.create_table(
        'distances',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('job_id', sa.UUID(), nullable=False),
        sa.Column('distance', sa.String(50), nullable=True),
        sa.Column('time', sa.String(50), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_id'),
    )

    op.create_table(
        'outbox_events',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('event_type', sa.String(50), nullable=False),
        sa.Column('aggregate_id', sa.String(64), nullable=False),
        sa.Column('event_data', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('retry_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('max_retries', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_outbox_events_aggregate_id', 'outbox_events', ['aggregate_id'])
    op.create_index(
        'idx_outbox_events_status_created', 'outbox_events', ['status', 'created_at']
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('outbox_events')
    op.drop_table('distances')
    op.drop_index('uq_translator_assignments_active_job', table_name='translator_assignments')
    op.drop_table('translator_assignments')
    op.drop_table('jobs')
    op.drop_table('user_blacklist')
    op.drop_table('user_languages')
    op.drop_table('users')
    op.drop_table('languages')
