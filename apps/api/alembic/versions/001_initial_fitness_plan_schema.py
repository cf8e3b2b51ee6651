"""initial fitness plan schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'subscribers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('has_used_trial', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('trial_started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('subscribed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('subscription_tier', sa.Text(), nullable=True),
        sa.Column('subscription_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('plan_duration', sa.Integer(), nullable=True),
        sa.Column('amount_paid', sa.Integer(), nullable=True),
        sa.Column('currency', sa.Text(), nullable=True),
        sa.Column('payment_reference', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('payment_reference', name='uq_subscribers_payment_reference'),
    )
    op.create_index('ix_subscribers_user_id', 'subscribers', ['user_id'], unique=True)

    op.create_table(
        'user_plans',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('subscription_tier', sa.Text(), nullable=False, server_default='free-trial'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('current_day', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('content', postgresql.JSONB(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('duration > 0', name='ck_user_plans_duration_positive'),
    )
    op.create_index('ix_user_plans_user_id', 'user_plans', ['user_id'])
    op.create_index('ix_user_plans_user_active', 'user_plans', ['user_id', 'is_active'])

    op.create_table(
        'daily_progress',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('user_plan_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('day_number', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('workout_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('meal_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('calories_burned', sa.Float(), nullable=False, server_default='0'),
        sa.Column('workout_duration_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('exercises', postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_plan_id'], ['user_plans.id'], ),
        sa.UniqueConstraint('user_plan_id', 'day_number', name='uq_daily_progress_plan_day'),
        sa.CheckConstraint('day_number > 0', name='ck_daily_progress_day_positive'),
    )
    op.create_index('ix_daily_progress_user_id', 'daily_progress', ['user_id'])
    op.create_index('ix_daily_progress_user_plan_id', 'daily_progress', ['user_plan_id'])


def downgrade() -> None:
    op.drop_index('ix_daily_progress_user_plan_id', table_name='daily_progress')
    op.drop_index('ix_daily_progress_user_id', table_name='daily_progress')
    op.drop_table('daily_progress')
    op.drop_index('ix_user_plans_user_active', table_name='user_plans')
    op.drop_index('ix_user_plans_user_id', table_name='user_plans')
    op.drop_table('user_plans')
    op.drop_index('ix_subscribers_user_id', table_name='subscribers')
    op.drop_table('subscribers')
