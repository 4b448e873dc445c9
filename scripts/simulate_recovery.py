"""What does the muscle map look like today (2026-02-08)?

Replays a hand-written training log through the pure engine (no
database) and prints the recovery overview, the 1-month journey and the
balance diagnosis.
"""

import datetime
import sys
import uuid
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from musclemap.engine.balance import diagnose
from musclemap.engine.snapshot import JourneyPeriod, journey, recovery_overview
from musclemap.schemas.stimulation import StimulationEvent
from musclemap.taxonomy.muscles import Muscle

NOW = datetime.datetime(2026, 2, 8, 18, 0)

# ─── Exercise → {muscle_id: stimulation %} ──────────────────────────
EXERCISE_MUSCLES = {
    "bench_press": {"chest_lower": 100, "chest_upper": 70, "deltoid_anterior": 50, "triceps": 50},
    "overhead_press": {"deltoid_anterior": 100, "deltoid_lateral": 60, "triceps": 50, "traps_upper": 30},
    "pull_up": {"lats": 100, "biceps": 60, "traps_middle_lower": 40, "forearms": 30},
    "barbell_row": {"lats": 80, "traps_middle_lower": 80, "deltoid_posterior": 50, "biceps": 40},
    "back_squat": {"quadriceps": 100, "glutes": 80, "adductors": 50, "erector_spinae": 40},
    "deadlift": {"hamstrings": 90, "glutes": 90, "erector_spinae": 100, "traps_upper": 40, "forearms": 40},
    "calf_raise": {"gastrocnemius": 100, "soleus": 70},
    "hanging_leg_raise": {"rectus_abdominis": 100, "hip_flexors": 80, "obliques": 50},
    "barbell_curl": {"biceps": 100, "forearms": 40},
}

# ─── (date, hour, exercise, sets) ───────────────────────────────────
RAW_LOG = [
    ("2025-12-15", 18, "back_squat", 5), ("2025-12-15", 18, "bench_press", 4),
    ("2025-12-18", 18, "deadlift", 3), ("2025-12-18", 18, "pull_up", 4),
    ("2025-12-22", 18, "back_squat", 5), ("2025-12-22", 18, "overhead_press", 4),
    ("2026-01-05", 19, "bench_press", 5), ("2026-01-05", 19, "barbell_curl", 3),
    ("2026-01-08", 19, "pull_up", 4), ("2026-01-08", 19, "barbell_row", 4),
    ("2026-01-12", 19, "back_squat", 5), ("2026-01-12", 19, "calf_raise", 4),
    ("2026-01-15", 19, "bench_press", 4), ("2026-01-15", 19, "hanging_leg_raise", 3),
    ("2026-01-19", 19, "deadlift", 3), ("2026-01-19", 19, "barbell_curl", 3),
    ("2026-01-26", 18, "overhead_press", 4), ("2026-01-26", 18, "pull_up", 4),
    ("2026-02-02", 18, "back_squat", 5), ("2026-02-02", 18, "calf_raise", 3),
    ("2026-02-06", 18, "bench_press", 5), ("2026-02-06", 18, "barbell_row", 4),
    ("2026-02-07", 18, "barbell_curl", 4), ("2026-02-07", 18, "hanging_leg_raise", 3),
]


def build_events() -> tuple[list[StimulationEvent], int]:
    """Apply the per-session merge rule to the raw log."""
    session_ids: dict[str, uuid.UUID] = {}
    merged: dict[tuple[Muscle, uuid.UUID], StimulationEvent] = {}

    for day, hour, exercise, sets in RAW_LOG:
        session_id = session_ids.setdefault(day, uuid.uuid4())
        occurred_at = datetime.datetime.fromisoformat(day).replace(hour=hour)
        for muscle_id, pct in EXERCISE_MUSCLES[exercise].items():
            muscle = Muscle(muscle_id)
            key = (muscle, session_id)
            existing = merged.get(key)
            if existing is None:
                merged[key] = StimulationEvent(muscle=muscle, session_id=session_id, occurred_at=occurred_at,
                                               max_intensity=pct / 100.0, total_sets=sets)
            else:
                merged[key] = existing.model_copy(update={
                    "max_intensity": max(existing.max_intensity, pct / 100.0),
                    "total_sets": sets,
                })

    return list(merged.values()), len(session_ids)


def main() -> None:
    events, total_sessions = build_events()

    print("=" * 65)
    print(f"  MUSCLE MAP @ {NOW:%Y-%m-%d %H:%M}")
    print("=" * 65)

    overview = recovery_overview(events, NOW)
    for muscle, state in overview.muscles.items():
        remaining = f"{state.remaining_hours:5.1f}h left" if state.remaining_hours else ""
        print(f"  {muscle.value:<20} {state.status.kind:<18} {state.progress:5.0%}  {remaining}")
    if overview.neglected:
        print()
        print("  Neglected: " + ", ".join(m.value for m in overview.neglected))

    print()
    print("  " + "-" * 63)
    comparison = journey(events, NOW, JourneyPeriod.ONE_MONTH)
    summary = comparison.summary
    print(f"  1 MONTH OF PROGRESS: {comparison.past.stimulated_count} → "
          f"{comparison.current.stimulated_count} stimulated muscles")
    print("  Newly stimulated: " + (", ".join(m.value for m in summary.newly_stimulated) or "-"))
    if summary.most_improved is not None:
        print(f"  Most improved: {summary.most_improved.value} (+{summary.most_improved_gain})")

    print()
    print("  " + "-" * 63)
    counts: dict[Muscle, int] = {}
    for event in events:
        counts[event.muscle] = counts.get(event.muscle, 0) + 1
    diagnosis = diagnose(counts, total_sessions)
    print(f"  Trainer archetype: {diagnosis.archetype.value} ({total_sessions} sessions)")
    for axis in diagnosis.axes:
        flag = "ok" if axis.is_balanced else "biased"
        print(f"    {axis.left_label:>10} {axis.left_ratio:4.0%} | {axis.right_ratio:4.0%} "
              f"{axis.right_label:<10} {flag}")


if __name__ == "__main__":
    main()
