"""SQLModel database models."""

from musclemap.models.workout_session import WorkoutSession
from musclemap.models.muscle_stimulation import MuscleStimulation

__all__ = [
    "WorkoutSession",
    "MuscleStimulation",
]
