"""Pure recovery and balance algorithms (no I/O, no shared state)."""

from musclemap.engine.balance import BalanceConfig, classify, compute_axes, diagnose
from musclemap.engine.recovery import (
    RecoveryConfig,
    adjusted_recovery_hours,
    days_since_stimulation,
    recovery_progress,
    recovery_status,
)
from musclemap.engine.snapshot import compare_snapshots, snapshot

__all__ = [
    "BalanceConfig",
    "classify",
    "compute_axes",
    "diagnose",
    "RecoveryConfig",
    "adjusted_recovery_hours",
    "days_since_stimulation",
    "recovery_progress",
    "recovery_status",
    "compare_snapshots",
    "snapshot",
]
