"""create_division_admin_tables

Revision ID: 3f9c1a2b7d40
Revises:
Create Date: 2026-10-19 10:12:31.418207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f9c1a2b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create divisions, admins, programs, form questions, panchayaths and agents."""
    op.create_table(
        'divisions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_divisions_id', 'divisions', ['id'])

    op.create_table(
        'admins',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('division_id', sa.Uuid(), sa.ForeignKey('divisions.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_admins_id', 'admins', ['id'])
    op.create_index('ix_admins_user_id', 'admins', ['user_id'])
    op.create_index('ix_admins_division_id', 'admins', ['division_id'])

    op.create_table(
        'programs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('division_id', sa.Uuid(), sa.ForeignKey('divisions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_programs_id', 'programs', ['id'])
    op.create_index('ix_programs_division_id', 'programs', ['division_id'])

    op.create_table(
        'program_form_questions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('program_id', sa.Uuid(), sa.ForeignKey('programs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('question_type', sa.String(length=50), nullable=False, server_default='text'),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('options', postgresql.JSONB(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_program_form_questions_id', 'program_form_questions', ['id'])
    op.create_index('ix_program_form_questions_program_id', 'program_form_questions', ['program_id'])

    op.create_table(
        'panchayaths',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('ward', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_panchayaths_id', 'panchayaths', ['id'])
    op.create_index('ix_panchayaths_name', 'panchayaths', ['name'])

    op.create_table(
        'pennyekart_agents',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('mobile', sa.String(length=10), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('panchayath_id', sa.Uuid(), sa.ForeignKey('panchayaths.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('ward', sa.String(length=50), nullable=False),
        sa.Column('parent_agent_id', sa.Uuid(), sa.ForeignKey('pennyekart_agents.id', ondelete='SET NULL'), nullable=True),
        sa.Column('customer_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('mobile', name='uq_pennyekart_agents_mobile'),
        sa.CheckConstraint(
            "role IN ('team_leader', 'coordinator', 'group_leader', 'pro')",
            name='ck_pennyekart_agents_role',
        ),
        sa.CheckConstraint("mobile ~ '^[0-9]{10}$'", name='ck_pennyekart_agents_mobile'),
        sa.CheckConstraint('customer_count >= 0', name='ck_pennyekart_agents_customer_count'),
    )
    op.create_index('ix_pennyekart_agents_id', 'pennyekart_agents', ['id'])
    op.create_index('ix_pennyekart_agents_name', 'pennyekart_agents', ['name'])
    op.create_index('ix_pennyekart_agents_role', 'pennyekart_agents', ['role'])
    op.create_index('ix_pennyekart_agents_panchayath_id', 'pennyekart_agents', ['panchayath_id'])
    op.create_index('ix_pennyekart_agents_parent_agent_id', 'pennyekart_agents', ['parent_agent_id'])


def downgrade() -> None:
    """Drop all division admin tables."""
    op.drop_table('pennyekart_agents')
    op.drop_table('panchayaths')
    op.drop_table('program_form_questions')
    op.drop_table('programs')
    op.drop_table('admins')
    op.drop_table('divisions')
