"""Community and volunteer registries

Revision ID: 0002_communities_volunteers
Revises: 0001_baseline
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002_communities_volunteers'
down_revision: Union[str, Sequence[str], None] = '0001_baseline'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

HEADCOUNT_COLUMNS = (
    'early_childhood_women', 'early_childhood_men',
    'childhood_3_5_women', 'childhood_3_5_men',
    'youth_6_10_women', 'youth_6_10_men',
    'adults_11_18_women', 'adults_11_18_men',
    'adults_19_60_women', 'adults_19_60_men',
    'seniors_61_plus_women', 'seniors_61_plus_men',
    'pregnant_women', 'lactating_women',
)


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column(
            'created_by', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'communities',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('registration_date', sa.Date(), nullable=True),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('municipality', sa.String(100), nullable=False),
        sa.Column('villages', sa.Text(), nullable=True),
        sa.Column('hamlets_served', sa.Text(), nullable=True),
        sa.Column('hamlets_count', sa.Integer(), nullable=True),
        sa.Column('google_maps_url', sa.String(1000), nullable=True),
        sa.Column('leader_name', sa.String(255), nullable=True),
        sa.Column('leader_phone', sa.String(50), nullable=True),
        sa.Column('is_in_leaders_group', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('community_committee', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), server_default='activa', nullable=False),
        sa.Column('inactive_reason', sa.Text(), nullable=True),
        sa.Column('total_families', sa.Integer(), nullable=True),
        sa.Column('families_in_ra', sa.Integer(), nullable=True),
        *[
            sa.Column(name, sa.Integer(), server_default='0', nullable=False)
            for name in HEADCOUNT_COLUMNS
        ],
        sa.Column('placement_type', sa.String(255), nullable=True),
        sa.Column('has_whatsapp_group', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('classification', sa.String(20), nullable=True),
        sa.Column('storage_capacity', sa.String(255), nullable=True),
        sa.Column('placement_methods', sa.Text(), nullable=True),
        sa.Column('termination_date', sa.Date(), nullable=True),
        sa.Column('termination_reason', sa.Text(), nullable=True),
        sa.Column('photo_reference_url', sa.String(1000), nullable=True),
        *_audit_columns(),
        sa.CheckConstraint(
            "status IN ('activa', 'inactiva', 'suspendida')", name='ck_communities_status'
        ),
    )
    op.create_index('idx_communities_department', 'communities', ['department'])
    op.create_index('idx_communities_status', 'communities', ['status'])
    op.create_index('idx_communities_deleted_at', 'communities', ['deleted_at'])

    op.create_table(
        'volunteers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('volunteer_type', sa.String(50), nullable=False),
        sa.Column('organization', sa.String(255), nullable=True),
        sa.Column('shift', sa.String(50), nullable=False),
        sa.Column('entry_time', sa.Time(), nullable=False),
        sa.Column('exit_time', sa.Time(), nullable=False),
        sa.Column('total_hours', sa.Numeric(5, 2), nullable=False),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('receives_benefit', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('benefit_number', sa.String(100), nullable=True),
        sa.Column('agricultural_pounds', sa.Numeric(10, 2), server_default='0', nullable=False),
        sa.Column('unit_cost_q', sa.Numeric(10, 2), nullable=True),
        sa.Column('unit_cost_usd', sa.Numeric(10, 2), nullable=True),
        sa.Column('viveres_bags', sa.Integer(), nullable=True),
        sa.Column('average_cost_30lbs', sa.Numeric(10, 2), nullable=True),
        sa.Column('picking_gtq', sa.Numeric(10, 2), nullable=True),
        sa.Column('picking_5lbs', sa.Numeric(10, 2), nullable=True),
        sa.Column('total_amount_q', sa.Numeric(12, 2), nullable=True),
        sa.Column('group_number', sa.Integer(), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('municipality', sa.String(100), nullable=True),
        sa.Column('village', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_audit_columns(),
    )
    op.create_index('idx_volunteers_work_date', 'volunteers', ['work_date'])
    op.create_index('idx_volunteers_deleted_at', 'volunteers', ['deleted_at'])


def downgrade() -> None:
    op.drop_table('volunteers')
    op.drop_table('communities')
