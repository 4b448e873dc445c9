"""
Per-muscle recovery model.

Recovery is modelled as a **linear ramp** from the moment of stimulation:

    progress(t) = clamp(t / adjusted_hours, 0, 1)

where ``t`` is hours elapsed since the muscle's last stimulation and
``adjusted_hours`` is the muscle's recovery tier scaled by a bounded
volume factor:

    volume_factor = min(1.5, 1.0 + 0.05 × (total_sets − 1))
    adjusted_hours = tier_hours × volume_factor

So one set recovers in exactly the tier time, and every extra set adds
5 % up to a 50 % ceiling (11 sets and beyond).

Design choices
--------------
1. **Memoryless**: only the single most recent stimulation matters.
   Older sessions for the same muscle are superseded, there is no
   cumulative fatigue.
2. **Neglect dominates**: after 7 (resp. 14) whole days without
   stimulation a muscle is ``neglected`` (resp. ``neglected_severe``)
   regardless of set count or progress.
3. **No silent coercion**: ``total_sets < 1`` is a caller bug and raises
   :class:`~musclemap.core.errors.InvalidInputError`.

All functions are pure.  ``occurred_at`` and ``now`` must both be naive or
both be timezone-aware.
"""

from __future__ import annotations

import datetime
import math
from typing import Optional, Self

from pydantic import BaseModel, Field, model_validator

from musclemap.core.errors import InvalidInputError
from musclemap.schemas.recovery import (
    FullyRecovered,
    MuscleRecovery,
    Neglected,
    NeglectedSevere,
    RecoveryStatus,
    Recovering,
)
from musclemap.schemas.stimulation import StimulationEvent
from musclemap.taxonomy.muscles import Muscle

# ======================================================================
# Configuration
# ======================================================================

_VOLUME_STEP = 0.05
_MAX_VOLUME_FACTOR = 1.5
_NEGLECT_DAYS = 7
_SEVERE_NEGLECT_DAYS = 14
_DISPLAY_WINDOW_DAYS = 7
# Decimals kept in adjusted hours; occurred_at + timedelta(hours=adjusted)
# must give progress exactly 1.0.
_HOURS_PRECISION = 9


class RecoveryConfig(BaseModel):
    """Tunables for the recovery model."""

    volume_step: float = Field(default=_VOLUME_STEP, ge=0.0)
    max_volume_factor: float = Field(default=_MAX_VOLUME_FACTOR, ge=1.0)
    neglect_days: int = Field(default=_NEGLECT_DAYS, ge=1)
    severe_neglect_days: int = Field(default=_SEVERE_NEGLECT_DAYS, ge=1)
    display_window_days: int = Field(
        default=_DISPLAY_WINDOW_DAYS, ge=1,
        description="Days after which a snapshot shows a muscle as faded (intensity 0)",
    )

    @model_validator(mode="after")
    def validate_neglect_order(self) -> Self:
        """``neglected`` must be reachable before ``neglected_severe``."""
        if self.severe_neglect_days < self.neglect_days:
            raise ValueError(
                f"severe_neglect_days ({self.severe_neglect_days}) must be >= "
                f"neglect_days ({self.neglect_days})"
            )
        return self


DEFAULT_RECOVERY_CONFIG = RecoveryConfig()


# ======================================================================
# Helpers
# ======================================================================


def _check_sets(total_sets: int) -> None:
    if total_sets < 1:
        raise InvalidInputError(f"total_sets must be >= 1, got {total_sets}")


def _elapsed_hours(occurred_at: datetime.datetime, now: datetime.datetime) -> float:
    """Hours from *occurred_at* to *now*, clamped to 0 for future events."""
    return max(0.0, (now - occurred_at).total_seconds() / 3600.0)


# ======================================================================
# Core computation
# ======================================================================


def volume_factor(total_sets: int, config: Optional[RecoveryConfig] = None) -> float:
    """Bounded linear volume multiplier for the recovery tier."""
    cfg = config or DEFAULT_RECOVERY_CONFIG
    _check_sets(total_sets)
    return min(cfg.max_volume_factor, 1.0 + cfg.volume_step * (total_sets - 1))


def adjusted_recovery_hours(
    muscle: Muscle,
    total_sets: int,
    config: Optional[RecoveryConfig] = None,
) -> float:
    """Hours needed for *muscle* to recover after *total_sets* sets.

    Monotonically non-decreasing in ``total_sets`` and bounded by
    ``[tier, max_volume_factor × tier]``.
    """
    return round(muscle.recovery_tier_hours * volume_factor(total_sets, config), _HOURS_PRECISION)


def recovery_progress(
    occurred_at: datetime.datetime,
    muscle: Muscle,
    total_sets: int,
    now: datetime.datetime,
    config: Optional[RecoveryConfig] = None,
) -> float:
    """Recovery progress in ``[0, 1]``: 0 right after training, 1 once recovered."""
    needed = adjusted_recovery_hours(muscle, total_sets, config)
    elapsed = _elapsed_hours(occurred_at, now)
    if elapsed >= needed:
        return 1.0
    return elapsed / needed


def days_since_stimulation(occurred_at: datetime.datetime, now: datetime.datetime) -> int:
    """Whole days elapsed since *occurred_at* (never negative)."""
    return int(math.floor(_elapsed_hours(occurred_at, now) / 24.0))


def recovery_status(
    occurred_at: datetime.datetime,
    muscle: Muscle,
    total_sets: int,
    now: datetime.datetime,
    config: Optional[RecoveryConfig] = None,
) -> RecoveryStatus:
    """Classify the recovery state of *muscle* at *now*.

    Neglect thresholds are checked first and do not depend on
    ``total_sets`` or progress.
    """
    cfg = config or DEFAULT_RECOVERY_CONFIG
    progress = recovery_progress(occurred_at, muscle, total_sets, now, cfg)
    days = days_since_stimulation(occurred_at, now)

    if days >= cfg.severe_neglect_days:
        return NeglectedSevere()
    if days >= cfg.neglect_days:
        return Neglected()
    if progress < 1.0:
        return Recovering(progress=progress)
    return FullyRecovered()


def remaining_recovery_hours(
    occurred_at: datetime.datetime,
    muscle: Muscle,
    total_sets: int,
    now: datetime.datetime,
    config: Optional[RecoveryConfig] = None,
) -> float | None:
    """Hours left until full recovery, or ``None`` if already recovered."""
    needed = adjusted_recovery_hours(muscle, total_sets, config)
    remaining = needed - _elapsed_hours(occurred_at, now)
    return remaining if remaining > 0 else None


def estimated_recovery_at(
    occurred_at: datetime.datetime,
    muscle: Muscle,
    total_sets: int,
    now: datetime.datetime,
    config: Optional[RecoveryConfig] = None,
) -> datetime.datetime | None:
    """Instant at which *muscle* becomes fully recovered, if still pending."""
    remaining = remaining_recovery_hours(occurred_at, muscle, total_sets, now, config)
    if remaining is None:
        return None
    return now + datetime.timedelta(hours=remaining)


# ======================================================================
# Per-muscle summary
# ======================================================================


def muscle_recovery(
    muscle: Muscle,
    event: StimulationEvent | None,
    now: datetime.datetime,
    config: Optional[RecoveryConfig] = None,
) -> MuscleRecovery:
    """Build the full :class:`MuscleRecovery` for one muscle.

    *event* is the muscle's most recent stimulation (``None`` if the
    muscle was never trained, which is reported as inactive and fully
    recovered).
    """
    if event is None:
        return MuscleRecovery(muscle=muscle, status=FullyRecovered(), progress=1.0)
    if event.muscle is not muscle:
        raise InvalidInputError(
            f"Event for {event.muscle.value} passed as the latest stimulation of {muscle.value}"
        )

    return MuscleRecovery(
        muscle=muscle,
        status=recovery_status(event.occurred_at, muscle, event.total_sets, now, config),
        progress=recovery_progress(event.occurred_at, muscle, event.total_sets, now, config),
        days_since_stimulation=days_since_stimulation(event.occurred_at, now),
        last_stimulated_at=event.occurred_at,
        total_sets=event.total_sets,
        remaining_hours=remaining_recovery_hours(event.occurred_at, muscle, event.total_sets, now, config),
        estimated_recovery_at=estimated_recovery_at(event.occurred_at, muscle, event.total_sets, now, config),
    )
