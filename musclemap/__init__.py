"""MuscleMap: per-muscle recovery tracking and training balance diagnosis."""

__version__ = "0.1.0"
