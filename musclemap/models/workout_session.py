"""
Workout session database model.

A session is open while ``ended_at`` is ``None``.  Only completed sessions
feed the balance diagnosis.  Timestamps are stored as naive
``DATETIME`` columns; callers use one clock (naive local or naive UTC)
throughout.
"""

import datetime
import uuid
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class WorkoutSession(SQLModel, table=True):
    """A single workout, from start to finish."""

    __tablename__ = "workout_sessions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    started_at: datetime.datetime = Field(sa_type=DateTime, nullable=False, index=True)
    ended_at: Optional[datetime.datetime] = Field(default=None, sa_type=DateTime, index=True)
    note: Optional[str] = Field(default=None, max_length=1000)

    @property
    def is_active(self) -> bool:
        return self.ended_at is None
