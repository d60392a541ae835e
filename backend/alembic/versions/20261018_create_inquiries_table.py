"""create_inquiries_table

Revision ID: 20261018_01
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = '20261018_01'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_STATUSES = (
    'NEW',
    'CONTACTED',
    'IN_DISCUSSION',
    'QUOTED',
    'ACCEPTED',
    'REJECTED',
    'CONVERTED',
    'ARCHIVED',
)


def upgrade() -> None:
    op.create_table(
        'inquiries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('project_type', sa.String(), nullable=False),
        sa.Column('business_type', sa.String(), nullable=True),
        sa.Column('current_challenge', sa.Text(), nullable=True),
        sa.Column('project_goal', sa.Text(), nullable=False),
        sa.Column('target_audience', sa.String(), nullable=True),
        sa.Column('has_existing_website', sa.String(), nullable=True),
        sa.Column('selected_features', sa.JSON(), nullable=False),
        sa.Column('selected_additional_services', sa.JSON(), nullable=False),
        sa.Column('design_preference', sa.String(), nullable=True),
        sa.Column('needs_maintenance', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('maintenance_level', sa.String(), nullable=True),
        sa.Column('timeline', sa.String(), nullable=False),
        sa.Column('content_ready', sa.String(), nullable=True),
        sa.Column('budget', sa.String(), nullable=True),
        sa.Column('estimate_min', sa.Integer(), nullable=True),
        sa.Column('estimate_max', sa.Integer(), nullable=True),
        sa.Column('breakdown', sa.JSON(), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('hear_about_us', sa.String(), nullable=True),
        sa.Column('status', sa.Enum(*_STATUSES, name='inquirystatus'), nullable=False, server_default='NEW'),
        sa.Column('priority', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('follow_up_date', sa.DateTime(), nullable=True),
        sa.Column('final_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('quoted_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_inquiries_id', 'inquiries', ['id'])
    op.create_index('ix_inquiries_email', 'inquiries', ['email'])
    op.create_index('ix_inquiries_status', 'inquiries', ['status'])


def downgrade() -> None:
    op.drop_index('ix_inquiries_status', table_name='inquiries')
    op.drop_index('ix_inquiries_email', table_name='inquiries')
    op.drop_index('ix_inquiries_id', table_name='inquiries')
    op.drop_table('inquiries')
    op.execute("DROP TYPE IF EXISTS inquirystatus")
