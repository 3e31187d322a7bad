"""create briefs and outreach_sessions tables

Revision ID: 5e1a7c2d9b40
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5e1a7c2d9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'briefs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('company_name', sa.String(), nullable=False),
        sa.Column('website', sa.String(), nullable=True),
        sa.Column('user_intent', sa.Text(), nullable=False),
        sa.Column('user_company', sa.JSON(), nullable=True),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('pitch_angle', sa.Text(), nullable=False),
        sa.Column('subject_line', sa.String(), nullable=False),
        sa.Column('what_not_to_pitch', sa.Text(), nullable=False),
        sa.Column('signal_tag', sa.String(), nullable=False),
        sa.Column('hiring_trends', sa.String(), nullable=True),
        sa.Column('news_trends', sa.String(), nullable=True),
        sa.Column('company_logo', sa.String(), nullable=True),
        sa.Column('outreach_copy', sa.Text(), nullable=True),
        sa.Column('news', sa.JSON(), nullable=False),
        sa.Column('job_signals', sa.JSON(), nullable=False),
        sa.Column('tech_stack', sa.JSON(), nullable=False),
        sa.Column('tech_stack_data', sa.JSON(), nullable=False),
        sa.Column('tone_insights', sa.JSON(), nullable=True),
        sa.Column('intelligence_sources', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_briefs_user_id'), 'briefs', ['user_id'], unique=False)

    op.create_table(
        'outreach_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('brief_id', sa.Uuid(), nullable=False),
        sa.Column('session_name', sa.String(), nullable=False),
        sa.Column('messages', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['brief_id'], ['briefs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_outreach_sessions_user_id'), 'outreach_sessions', ['user_id'], unique=False)
    op.create_index(op.f('ix_outreach_sessions_brief_id'), 'outreach_sessions', ['brief_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_outreach_sessions_brief_id'), table_name='outreach_sessions')
    op.drop_index(op.f('ix_outreach_sessions_user_id'), table_name='outreach_sessions')
    op.drop_table('outreach_sessions')
    op.drop_index(op.f('ix_briefs_user_id'), table_name='briefs')
    op.drop_table('briefs')
