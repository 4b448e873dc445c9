"""
Muscle stimulation database model.

One row per ``(muscle, session_id)``.  ``muscle`` is stored as its string
identifier so rows written by older taxonomies survive; readers convert it
back to :class:`~musclemap.taxonomy.muscles.Muscle` and skip unknown ids.
"""

import datetime
import uuid
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


class MuscleStimulation(SQLModel, table=True):
    """Stored stimulation event (see :class:`~musclemap.schemas.stimulation.StimulationEvent`)."""

    __tablename__ = "muscle_stimulations"
    __table_args__ = (
        UniqueConstraint("muscle", "session_id", name="uq_stimulation_muscle_session"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    muscle: str = Field(nullable=False, max_length=50, index=True)
    session_id: uuid.UUID = Field(foreign_key="workout_sessions.id", nullable=False, index=True)

    # Pinned to the first stimulation of this muscle in the session
    occurred_at: datetime.datetime = Field(sa_type=DateTime, nullable=False, index=True)

    max_intensity: float = Field(default=0.0, nullable=False)
    total_sets: int = Field(default=1, nullable=False)
