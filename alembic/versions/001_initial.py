"""life areas and scoring inputs

Revision ID: 001_initial
Revises:
Create Date: 2026-10-01 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None

LIFE_AREA_STATUS = sa.Enum(
    'CRISIS', 'STRUGGLING', 'BALANCED', 'THRIVING', 'FLOURISHING',
    name='lifeareastatusenum',
)
EVENT_TYPE = sa.Enum(
    'BREAKTHROUGH', 'PROGRESS', 'SETBACK', 'UPSET', 'MILESTONE', 'PATTERN', 'LEARNING',
    name='eventtypeenum',
)
COMMITMENT_STATUS = sa.Enum(
    'ACTIVE', 'COMPLETED', 'INTEGRATED', 'PAUSED', 'ABANDONED',
    name='commitmentstatusenum',
)


def upgrade() -> None:
    op.create_table(
        'life_area',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('current_score', sa.Float(), nullable=False, server_default='50'),
        sa.Column('status', LIFE_AREA_STATUS, nullable=False, server_default='BALANCED'),
        sa.Column('last_calculated_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_life_area_is_active'), 'life_area', ['is_active'], unique=False)

    op.create_table(
        'event',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('life_area_id', sa.String(length=64), nullable=False),
        sa.Column('type', EVENT_TYPE, nullable=False),
        sa.Column('emotional_charge', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('title', sa.String(length=200), nullable=True),
        sa.Column('occurred_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['life_area_id'], ['life_area.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_event_life_area_occurred', 'event', ['life_area_id', 'occurred_at'], unique=False)

    op.create_table(
        'commitment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('life_area_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('status', COMMITMENT_STATUS, nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['life_area_id'], ['life_area.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_commitment_life_area_id'), 'commitment', ['life_area_id'], unique=False)

    op.create_table(
        'boundary',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('life_area_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('violation_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['life_area_id'], ['life_area.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('violation_count >= 0', name='ck_boundary_violation_count_non_negative'),
    )
    op.create_index(op.f('ix_boundary_life_area_id'), 'boundary', ['life_area_id'], unique=False)

    op.create_table(
        'metric_snapshot',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('life_area_id', sa.String(length=64), nullable=False),
        sa.Column('snapshot_date', sa.Date(), nullable=False),
        sa.Column('score', sa.Float(), nullable=False),
        sa.Column('status', LIFE_AREA_STATUS, nullable=False),
        sa.Column('event_count', sa.Integer(), nullable=False),
        sa.Column('commitment_count', sa.Integer(), nullable=False),
        sa.Column('commitment_completion_rate', sa.Float(), nullable=False),
        sa.Column('avg_emotional_charge', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['life_area_id'], ['life_area.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('life_area_id', 'snapshot_date', name='uq_metric_snapshot_area_date'),
    )
    op.create_index(op.f('ix_metric_snapshot_snapshot_date'), 'metric_snapshot', ['snapshot_date'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_metric_snapshot_snapshot_date'), table_name='metric_snapshot')
    op.drop_table('metric_snapshot')
    op.drop_index(op.f('ix_boundary_life_area_id'), table_name='boundary')
    op.drop_table('boundary')
    op.drop_index(op.f('ix_commitment_life_area_id'), table_name='commitment')
    op.drop_table('commitment')
    op.drop_index('ix_event_life_area_occurred', table_name='event')
    op.drop_table('event')
    op.drop_index(op.f('ix_life_area_is_active'), table_name='life_area')
    op.drop_table('life_area')
    COMMITMENT_STATUS.drop(op.get_bind(), checkfirst=True)
    EVENT_TYPE.drop(op.get_bind(), checkfirst=True)
    LIFE_AREA_STATUS.drop(op.get_bind(), checkfirst=True)
