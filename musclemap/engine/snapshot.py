"""
Historical muscle-state reconstruction.

Given the full stimulation event log and an arbitrary instant ``as_of``,
rebuild what the muscle map looked like at that instant.  The same
function serves "now" and any past instant; nothing special-cases the
current time.

Selection rule
--------------
For each muscle the event with the latest ``occurred_at <= as_of`` wins.
Ties on ``occurred_at`` go to the larger ``total_sets``, then to the event
that appears first in the input.  Events after ``as_of`` are ignored, so
the log may be passed unsorted and unfiltered.

Display intensity
-----------------
    no event                → 0
    ≥ 7 days since stimulus → 0    (faded)
    otherwise               → max(1, round((1 − progress) × 100))

The floor of 1 keeps a freshly recovered muscle distinguishable from an
untouched one for the whole display window.
"""

from __future__ import annotations

import calendar
import datetime
import math
from enum import Enum
from typing import Iterable, Optional

from musclemap.engine.recovery import (
    DEFAULT_RECOVERY_CONFIG,
    RecoveryConfig,
    days_since_stimulation,
    muscle_recovery,
    recovery_progress,
)
from musclemap.schemas.recovery import RecoveryOverview
from musclemap.schemas.snapshot import (
    JourneyChangeSummary,
    JourneyComparison,
    MuscleStateSnapshot,
)
from musclemap.schemas.stimulation import StimulationEvent
from musclemap.taxonomy.muscles import Muscle


# ======================================================================
# Event selection
# ======================================================================


def latest_events_by_muscle(
    events: Iterable[StimulationEvent],
    as_of: datetime.datetime,
) -> dict[Muscle, StimulationEvent]:
    """Return the governing event per muscle as of *as_of*.

    Muscles without any event at or before *as_of* are absent from the
    result.
    """
    latest: dict[Muscle, StimulationEvent] = {}
    for event in events:
        if event.occurred_at > as_of:
            continue
        current = latest.get(event.muscle)
        if current is None:
            latest[event.muscle] = event
            continue
        # Strictly greater only: the first event in input order wins full ties.
        if (event.occurred_at, event.total_sets) > (current.occurred_at, current.total_sets):
            latest[event.muscle] = event
    return latest


def _display_intensity(
    event: StimulationEvent,
    as_of: datetime.datetime,
    cfg: RecoveryConfig,
) -> int:
    if days_since_stimulation(event.occurred_at, as_of) >= cfg.display_window_days:
        return 0
    progress = recovery_progress(event.occurred_at, event.muscle, event.total_sets, as_of, cfg)
    # Round half up; Python's round() is banker's rounding.
    return max(1, int(math.floor((1.0 - progress) * 100.0 + 0.5)))


# ======================================================================
# Main entry points
# ======================================================================


def snapshot(
    events: Iterable[StimulationEvent],
    as_of: datetime.datetime,
    config: Optional[RecoveryConfig] = None,
) -> MuscleStateSnapshot:
    """Reconstruct every muscle's display intensity (0..100) at *as_of*."""
    cfg = config or DEFAULT_RECOVERY_CONFIG
    latest = latest_events_by_muscle(events, as_of)

    intensity: dict[Muscle, int] = {}
    for muscle in Muscle:
        event = latest.get(muscle)
        intensity[muscle] = 0 if event is None else _display_intensity(event, as_of, cfg)

    return MuscleStateSnapshot(as_of=as_of, intensity_by_muscle=intensity)


def recovery_overview(
    events: Iterable[StimulationEvent],
    now: datetime.datetime,
    config: Optional[RecoveryConfig] = None,
) -> RecoveryOverview:
    """Recovery state of all muscles at *now*, plus the neglected list."""
    latest = latest_events_by_muscle(events, now)

    muscles = {m: muscle_recovery(m, latest.get(m), now, config) for m in Muscle}
    neglected = [m for m, state in muscles.items() if state.is_neglected]

    return RecoveryOverview(as_of=now, muscles=muscles, neglected=neglected)


# ======================================================================
# Journey (past vs current comparison)
# ======================================================================


class JourneyPeriod(str, Enum):
    """Preset look-back periods for the journey comparison."""
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    CUSTOM = "custom"

    @property
    def months(self) -> int | None:
        return _PERIOD_MONTHS.get(self)


_PERIOD_MONTHS: dict[JourneyPeriod, int] = {
    JourneyPeriod.ONE_MONTH: 1,
    JourneyPeriod.THREE_MONTHS: 3,
    JourneyPeriod.SIX_MONTHS: 6,
    JourneyPeriod.ONE_YEAR: 12,
}


def _subtract_months(when: datetime.datetime, months: int) -> datetime.datetime:
    """Calendar-month subtraction; the day is clamped to the target month."""
    month_index = when.year * 12 + (when.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(when.day, calendar.monthrange(year, month)[1])
    return when.replace(year=year, month=month, day=day)


def comparison_instant(
    period: JourneyPeriod,
    now: datetime.datetime,
    custom_date: datetime.datetime | None = None,
) -> datetime.datetime:
    """Instant the current state is compared against."""
    if period is JourneyPeriod.CUSTOM:
        if custom_date is None:
            raise ValueError("custom_date is required for the custom period")
        return custom_date
    return _subtract_months(now, period.months)


def compare_snapshots(
    past: MuscleStateSnapshot,
    current: MuscleStateSnapshot,
) -> JourneyChangeSummary:
    """Summarise what changed between two snapshots."""
    newly_stimulated: list[Muscle] = []
    still_neglected: list[Muscle] = []
    most_improved: Muscle | None = None
    best_gain = 0

    for muscle in Muscle:
        past_value = past.intensity_by_muscle.get(muscle, 0)
        current_value = current.intensity_by_muscle.get(muscle, 0)

        if past_value == 0 and current_value > 0:
            newly_stimulated.append(muscle)
        if past_value == 0 and current_value == 0:
            still_neglected.append(muscle)

        gain = current_value - past_value
        if gain > best_gain:
            best_gain = gain
            most_improved = muscle

    return JourneyChangeSummary(
        newly_stimulated=newly_stimulated,
        most_improved=most_improved,
        most_improved_gain=best_gain,
        still_neglected=still_neglected,
    )


def journey(
    events: Iterable[StimulationEvent],
    now: datetime.datetime,
    period: JourneyPeriod = JourneyPeriod.THREE_MONTHS,
    custom_date: datetime.datetime | None = None,
    config: Optional[RecoveryConfig] = None,
) -> JourneyComparison:
    """Compare the muscle map at a past instant with the one at *now*."""
    # Materialise once: both snapshots read the same log.
    event_list = list(events)
    past = snapshot(event_list, comparison_instant(period, now, custom_date), config)
    current = snapshot(event_list, now, config)

    return JourneyComparison(
        past=past,
        current=current,
        summary=compare_snapshots(past, current),
        has_past_data=past.stimulated_count > 0,
    )
