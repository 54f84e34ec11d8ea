"""Baseline migration - users, forms, submissions, extras, beneficiaries

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates every table of the dashboard API.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*names: str) -> list[sa.Column]:
    return [
        sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        for name in names
    ]


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Users, roles, section permissions
    # ==========================================================================
    op.create_table(
        'roles',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('permissions', sa.JSON(), nullable=False),
        *_timestamps('created_at'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column(
            'role_id', sa.Uuid(),
            sa.ForeignKey('roles.id', ondelete='RESTRICT'), nullable=False,
        ),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('token_version', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps('created_at', 'updated_at'),
    )

    op.create_table(
        'user_section_permissions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'user_id', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('section_key', sa.String(100), nullable=False),
        sa.Column(
            'created_by', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        *_timestamps('created_at'),
        sa.UniqueConstraint('user_id', 'section_key', name='uq_user_section_permission'),
    )
    op.create_index('idx_user_section_permissions_user', 'user_section_permissions', ['user_id'])

    # ==========================================================================
    # Form templates
    # ==========================================================================
    op.create_table(
        'question_types',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('code', sa.String(50), nullable=False, unique=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('validation_schema', sa.JSON(), nullable=True),
    )

    op.create_table(
        'form_templates',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('section_location', sa.String(50), nullable=False),
        sa.Column('version', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('is_public', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            'created_by', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        *_timestamps('created_at', 'updated_at'),
    )
    op.create_index('idx_form_templates_section', 'form_templates', ['section_location'])
    op.create_index('idx_form_templates_active', 'form_templates', ['is_active'])

    op.create_table(
        'form_sections',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'form_template_id', sa.Uuid(),
            sa.ForeignKey('form_templates.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order_index', sa.Integer(), server_default=sa.text('0'), nullable=False),
    )
    op.create_index('idx_form_sections_template', 'form_sections', ['form_template_id'])

    op.create_table(
        'questions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'form_template_id', sa.Uuid(),
            sa.ForeignKey('form_templates.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'section_id', sa.Uuid(),
            sa.ForeignKey('form_sections.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'question_type_id', sa.Uuid(),
            sa.ForeignKey('question_types.id', ondelete='RESTRICT'), nullable=False,
        ),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('help_text', sa.Text(), nullable=True),
        sa.Column('is_required', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('order_index', sa.Integer(), server_default=sa.text('0'), nullable=False),
        sa.Column('config', sa.JSON(), nullable=True),
    )
    op.create_index('idx_questions_template', 'questions', ['form_template_id'])
    op.create_index('idx_questions_section', 'questions', ['section_id'])

    op.create_table(
        'question_options',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'question_id', sa.Uuid(),
            sa.ForeignKey('questions.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('label', sa.String(500), nullable=False),
        sa.Column('value', sa.String(500), nullable=False),
        sa.Column('order_index', sa.Integer(), server_default=sa.text('0'), nullable=False),
    )
    op.create_index('idx_question_options_question', 'question_options', ['question_id'])

    # ==========================================================================
    # Submissions
    # ==========================================================================
    op.create_table(
        'form_submissions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'form_template_id', sa.Uuid(),
            sa.ForeignKey('form_templates.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('section_location', sa.String(50), nullable=False),
        sa.Column(
            'user_id', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('time_spent_seconds', sa.Integer(), nullable=True),
        *_timestamps('submitted_at', 'updated_at'),
    )
    op.create_index('idx_form_submissions_template', 'form_submissions', ['form_template_id'])
    op.create_index('idx_form_submissions_section', 'form_submissions', ['section_location'])
    op.create_index('idx_form_submissions_submitted', 'form_submissions', ['submitted_at'])

    op.create_table(
        'submission_answers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'submission_id', sa.Uuid(),
            sa.ForeignKey('form_submissions.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'question_id', sa.Uuid(),
            sa.ForeignKey('questions.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('answer_value', sa.JSON(), nullable=False),
        *_timestamps('created_at', 'updated_at'),
        sa.UniqueConstraint('submission_id', 'question_id', name='uq_submission_answer'),
    )
    op.create_index('idx_submission_answers_question', 'submission_answers', ['question_id'])

    # ==========================================================================
    # Section extras (1:1 with submissions)
    # ==========================================================================
    op.create_table(
        'volunteer_extras',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'submission_id', sa.Uuid(),
            sa.ForeignKey('form_submissions.id', ondelete='CASCADE'),
            nullable=False, unique=True,
        ),
        sa.Column('total_hours', sa.Numeric(5, 2), nullable=False),
        sa.Column('receives_benefit', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('benefit_number', sa.String(100), nullable=True),
        sa.Column('agricultural_pounds', sa.Numeric(10, 2), nullable=False),
        sa.Column('unit_cost_q', sa.Numeric(10, 2), nullable=True),
        sa.Column('unit_cost_usd', sa.Numeric(10, 2), nullable=True),
        sa.Column('viveres_bags', sa.Integer(), nullable=True),
        sa.Column('average_cost_30lbs', sa.Numeric(10, 2), nullable=True),
        sa.Column('picking_gtq', sa.Numeric(10, 2), nullable=True),
        sa.Column('picking_5lbs', sa.Numeric(10, 2), nullable=True),
        sa.Column('total_amount_q', sa.Numeric(12, 2), nullable=True),
        sa.Column('group_number', sa.Integer(), nullable=True),
        *_timestamps('created_at', 'updated_at'),
    )

    op.create_table(
        'consolidated_board_extras',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column(
            'submission_id', sa.Uuid(),
            sa.ForeignKey('form_submissions.id', ondelete='CASCADE'),
            nullable=False, unique=True,
        ),
        sa.Column('traffic_light', sa.String(20), nullable=True),
        sa.Column('recommendations', sa.Text(), nullable=True),
        sa.Column('follow_up_given', sa.String(20), nullable=True),
        sa.Column('follow_up_date', sa.Date(), nullable=True),
        sa.Column('concluded_result_red_or_no', sa.String(5), nullable=True),
        sa.Column('solutions', sa.Text(), nullable=True),
        sa.Column('preliminary_report', sa.String(1000), nullable=True),
        sa.Column('full_report', sa.String(1000), nullable=True),
        *_timestamps('created_at', 'updated_at'),
    )

    # ==========================================================================
    # Beneficiaries
    # ==========================================================================
    op.create_table(
        'beneficiaries',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('gender', sa.String(20), nullable=False),
        sa.Column('dpi', sa.String(13), nullable=True),
        sa.Column('program', sa.String(255), nullable=False),
        sa.Column('photo_url', sa.String(1000), nullable=True),
        sa.Column('admission_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('municipality', sa.String(100), nullable=False),
        sa.Column('village', sa.String(255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('google_maps_url', sa.String(1000), nullable=True),
        sa.Column('personal_contact', sa.String(255), nullable=True),
        sa.Column('personal_number', sa.String(50), nullable=True),
        sa.Column('community_contact', sa.String(255), nullable=True),
        sa.Column('community_number', sa.String(50), nullable=True),
        sa.Column(
            'created_by', sa.Uuid(),
            sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True,
        ),
        *_timestamps('created_at', 'updated_at'),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('age > 0 AND age <= 120', name='ck_beneficiaries_age'),
    )
    op.create_index('idx_beneficiaries_department', 'beneficiaries', ['department'])
    op.create_index('idx_beneficiaries_program', 'beneficiaries', ['program'])
    op.create_index('idx_beneficiaries_deleted_at', 'beneficiaries', ['deleted_at'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        'beneficiaries',
        'consolidated_board_extras',
        'volunteer_extras',
        'submission_answers',
        'form_submissions',
        'question_options',
        'questions',
        'form_sections',
        'form_templates',
        'question_types',
        'user_section_permissions',
        'users',
        'roles',
    ):
        op.drop_table(table)
