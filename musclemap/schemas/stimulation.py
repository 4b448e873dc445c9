"""
Stimulation event schema.

A stimulation event records that one muscle was trained in one workout
session.  There is at most one event per ``(muscle, session_id)``; while
the session is open the event is merged in place:

- ``max_intensity`` keeps the running maximum,
- ``total_sets`` is replaced with the latest count,
- ``occurred_at`` stays pinned to the muscle's *first* stimulation in the
  session.
"""

import datetime
import uuid

from pydantic import BaseModel, Field

from musclemap.taxonomy.muscles import Muscle


class StimulationEvent(BaseModel):
    """Most recent stimulation of a muscle within a session."""

    muscle: Muscle
    session_id: uuid.UUID
    occurred_at: datetime.datetime = Field(
        ...,
        description="First stimulation of this muscle in the session (never moved by merges)",
    )
    max_intensity: float = Field(
        ..., ge=0.0, le=1.0,
        description="Peak stimulation share of the exercises performed (0.0-1.0)",
    )
    total_sets: int = Field(
        ..., ge=1,
        description="Sets counted for the volume factor",
    )
