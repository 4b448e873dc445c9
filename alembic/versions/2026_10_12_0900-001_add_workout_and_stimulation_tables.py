"""Add workout session and muscle stimulation tables

Revision ID: 001
Revises:
Create Date: 2026-10-12 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create workout_sessions and muscle_stimulations tables."""
    op.create_table('workout_sessions', sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('ended_at', sa.DateTime(), nullable=True),
        sa.Column('note', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_workout_sessions_started_at'), 'workout_sessions', ['started_at'], unique=False)
    op.create_index(op.f('ix_workout_sessions_ended_at'), 'workout_sessions', ['ended_at'], unique=False)

    op.create_table('muscle_stimulations', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('muscle', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('session_id', sa.Uuid(), nullable=False),
        sa.Column('occurred_at', sa.DateTime(), nullable=False),
        sa.Column('max_intensity', sa.Float(), nullable=False),
        sa.Column('total_sets', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['workout_sessions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('muscle', 'session_id', name='uq_stimulation_muscle_session'))
    op.create_index(op.f('ix_muscle_stimulations_muscle'), 'muscle_stimulations', ['muscle'], unique=False)
    op.create_index(op.f('ix_muscle_stimulations_session_id'), 'muscle_stimulations', ['session_id'], unique=False)
    op.create_index(op.f('ix_muscle_stimulations_occurred_at'), 'muscle_stimulations', ['occurred_at'], unique=False)


def downgrade() -> None:
    """Drop muscle_stimulations and workout_sessions tables."""
    op.drop_index(op.f('ix_muscle_stimulations_occurred_at'), table_name='muscle_stimulations')
    op.drop_index(op.f('ix_muscle_stimulations_session_id'), table_name='muscle_stimulations')
    op.drop_index(op.f('ix_muscle_stimulations_muscle'), table_name='muscle_stimulations')
    op.drop_table('muscle_stimulations')
    op.drop_index(op.f('ix_workout_sessions_ended_at'), table_name='workout_sessions')
    op.drop_index(op.f('ix_workout_sessions_started_at'), table_name='workout_sessions')
    op.drop_table('workout_sessions')
