"""Database repositories."""

from musclemap.db.repositories.workout_session import WorkoutSessionRepository
from musclemap.db.repositories.stimulation import StimulationRepository

__all__ = [
    "WorkoutSessionRepository",
    "StimulationRepository",
]
