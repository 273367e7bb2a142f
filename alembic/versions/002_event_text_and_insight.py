"""event text and tags, insight table

Revision ID: 002_event_text_and_insight
Revises: 001_initial
Create Date: 2026-10-17 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '002_event_text_and_insight'
down_revision = '001_initial'
branch_labels = None
depends_on = None

INSIGHT_TYPE = sa.Enum('PATTERN_RECOGNIZED', 'WEEKLY_SUMMARY', name='insighttypeenum')
INSIGHT_CATEGORY = sa.Enum('BEHAVIORAL', 'EMOTIONAL', 'RELATIONAL', 'SYSTEMIC', name='insightcategoryenum')
INSIGHT_STATUS = sa.Enum('ACTIVE', 'ARCHIVED', name='insightstatusenum')


def upgrade() -> None:
    op.add_column('event', sa.Column('description', sa.Text(), nullable=True))
    op.add_column('event', sa.Column('tags', sa.JSON(), nullable=True))

    op.create_table(
        'insight',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('type', INSIGHT_TYPE, nullable=False),
        sa.Column('category', INSIGHT_CATEGORY, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('source_event_ids', sa.JSON(), nullable=True),
        sa.Column('status', INSIGHT_STATUS, nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_insight_created_at'), 'insight', ['created_at'], unique=False)
    op.create_index('ix_insight_status_created', 'insight', ['status', 'created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_insight_status_created', table_name='insight')
    op.drop_index(op.f('ix_insight_created_at'), table_name='insight')
    op.drop_table('insight')
    INSIGHT_STATUS.drop(op.get_bind(), checkfirst=True)
    INSIGHT_CATEGORY.drop(op.get_bind(), checkfirst=True)
    INSIGHT_TYPE.drop(op.get_bind(), checkfirst=True)
    op.drop_column('event', 'tags')
    op.drop_column('event', 'description')
