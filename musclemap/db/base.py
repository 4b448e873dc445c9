"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from musclemap.models.workout_session import WorkoutSession  # noqa: F401
from musclemap.models.muscle_stimulation import MuscleStimulation  # noqa: F401
