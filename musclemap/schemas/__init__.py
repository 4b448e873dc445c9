"""Pydantic schemas shared by the engine, repositories and services."""

from musclemap.schemas.balance import BalanceAxis, BalanceDiagnosis, TrainerArchetype
from musclemap.schemas.recovery import (
    FullyRecovered,
    MuscleRecovery,
    Neglected,
    NeglectedSevere,
    RecoveryOverview,
    RecoveryStatus,
    Recovering,
)
from musclemap.schemas.snapshot import JourneyChangeSummary, JourneyComparison, MuscleStateSnapshot
from musclemap.schemas.stimulation import StimulationEvent

__all__ = [
    "BalanceAxis",
    "BalanceDiagnosis",
    "TrainerArchetype",
    "FullyRecovered",
    "MuscleRecovery",
    "Neglected",
    "NeglectedSevere",
    "RecoveryOverview",
    "RecoveryStatus",
    "Recovering",
    "JourneyChangeSummary",
    "JourneyComparison",
    "MuscleStateSnapshot",
    "StimulationEvent",
]
