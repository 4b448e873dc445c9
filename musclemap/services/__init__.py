"""Business logic services."""

from musclemap.services.workout_service import WorkoutService
from musclemap.services.recovery_service import RecoveryService
from musclemap.services.balance_service import BalanceService

__all__ = [
    "WorkoutService",
    "RecoveryService",
    "BalanceService",
]
