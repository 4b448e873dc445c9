"""
Service-level tests: the workout lifecycle feeding the recovery and
balance queries through a real (in-memory) database.
"""

import datetime
import uuid

import pytest

from musclemap.core.errors import InvalidInputError, NotFoundError, SessionClosedError
from musclemap.db.repositories.stimulation import StimulationRepository
from musclemap.engine.snapshot import JourneyPeriod
from musclemap.schemas.balance import TrainerArchetype
from musclemap.schemas.recovery import FullyRecovered, Neglected, Recovering
from musclemap.services.balance_service import BalanceService
from musclemap.services.recovery_service import RecoveryService
from musclemap.services.workout_service import WorkoutService
from musclemap.taxonomy.muscles import Muscle

NOW = datetime.datetime(2026, 3, 10, 12, 0)

BENCH_PRESS = {"chest_upper": 60, "chest_lower": 100, "deltoid_anterior": 50, "triceps": 40}
SQUAT = {"quadriceps": 100, "glutes": 80, "hamstrings": 40, "adductors": 30, "erector_spinae": 20}
ROW = {"lats": 100, "traps_middle_lower": 70, "biceps": 40, "deltoid_posterior": 40}


@pytest.fixture
def workouts(db):
    return WorkoutService(db)


@pytest.fixture
def recovery(db):
    return RecoveryService(db)


@pytest.fixture
def balance(db):
    return BalanceService(db)


def _complete_workout(workouts: WorkoutService, start: datetime.datetime, *exercises: dict) -> uuid.UUID:
    entry = workouts.start_session(start)
    for minute, mapping in enumerate(exercises):
        for sets in range(1, 4):
            workouts.record_exercise(entry.id, mapping, sets, start + datetime.timedelta(minutes=minute * 10 + sets))
    workouts.end_session(entry.id, start + datetime.timedelta(hours=1))
    return entry.id


# ======================================================================
# WorkoutService
# ======================================================================


class TestWorkoutLifecycle:
    def test_start_and_active(self, workouts):
        entry = workouts.start_session(NOW, note="push day")
        assert entry.is_active
        assert workouts.get_active_session().id == entry.id

    def test_record_exercise(self, workouts):
        entry = workouts.start_session(NOW)
        events = workouts.record_exercise(entry.id, BENCH_PRESS, 1, NOW)

        assert [e.muscle for e in events] == [
            Muscle.CHEST_UPPER, Muscle.CHEST_LOWER, Muscle.DELTOID_ANTERIOR, Muscle.TRICEPS,
        ]
        assert events[1].max_intensity == pytest.approx(1.0)
        assert events[3].max_intensity == pytest.approx(0.4)

    def test_overlapping_exercises_merge(self, workouts):
        entry = workouts.start_session(NOW)
        workouts.record_exercise(entry.id, BENCH_PRESS, 3, NOW)
        later = NOW + datetime.timedelta(minutes=20)
        events = workouts.record_exercise(entry.id, {"triceps": 100}, 2, later)

        assert len(events) == 1
        assert events[0].occurred_at == NOW
        assert events[0].max_intensity == pytest.approx(1.0)
        assert events[0].total_sets == 2

    def test_unknown_muscles_skipped(self, workouts):
        entry = workouts.start_session(NOW)
        events = workouts.record_exercise(entry.id, {"calves": 100, "soleus": 70}, 1, NOW)
        assert [e.muscle for e in events] == [Muscle.SOLEUS]

    def test_percentage_out_of_range(self, workouts):
        entry = workouts.start_session(NOW)
        with pytest.raises(InvalidInputError):
            workouts.record_exercise(entry.id, {"lats": 120}, 1, NOW)

    def test_rejected_exercise_writes_nothing(self, db, workouts):
        entry = workouts.start_session(NOW)
        with pytest.raises(InvalidInputError):
            workouts.record_exercise(entry.id, {"chest_upper": 60, "triceps": 150}, 1, NOW)
        assert StimulationRepository(db).events_for_session(entry.id) == []

    def test_rejected_exercise_keeps_earlier_merges_intact(self, db, workouts):
        entry = workouts.start_session(NOW)
        workouts.record_exercise(entry.id, {"chest_upper": 60}, 1, NOW)
        with pytest.raises(InvalidInputError):
            workouts.record_exercise(entry.id, {"chest_upper": 100, "triceps": -5}, 2, NOW)

        events = StimulationRepository(db).events_for_session(entry.id)
        assert [(e.muscle, e.total_sets) for e in events] == [(Muscle.CHEST_UPPER, 1)]
        assert events[0].max_intensity == pytest.approx(0.6)

    def test_zero_sets_writes_nothing(self, db, workouts):
        entry = workouts.start_session(NOW)
        with pytest.raises(InvalidInputError):
            workouts.record_exercise(entry.id, ROW, 0, NOW)
        assert StimulationRepository(db).events_for_session(entry.id) == []

    def test_closed_session_rejects_sets(self, workouts):
        entry = workouts.start_session(NOW)
        workouts.end_session(entry.id, NOW + datetime.timedelta(hours=1))
        assert workouts.get_active_session() is None
        with pytest.raises(SessionClosedError):
            workouts.record_exercise(entry.id, ROW, 1, NOW)
        with pytest.raises(SessionClosedError):
            workouts.end_session(entry.id, NOW + datetime.timedelta(hours=2))

    def test_unknown_session(self, workouts):
        with pytest.raises(NotFoundError):
            workouts.record_exercise(uuid.uuid4(), ROW, 1, NOW)
        with pytest.raises(NotFoundError):
            workouts.discard_session(uuid.uuid4())

    def test_discard_removes_events(self, workouts, recovery):
        entry = workouts.start_session(NOW)
        workouts.record_exercise(entry.id, ROW, 2, NOW)
        workouts.discard_session(entry.id)

        assert workouts.get_active_session() is None
        assert recovery.overview(NOW).muscles[Muscle.LATS].last_stimulated_at is None

    def test_failed_discard_keeps_session_and_events(self, db, workouts, monkeypatch):
        entry = workouts.start_session(NOW)
        workouts.record_exercise(entry.id, ROW, 2, NOW)

        def fail(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(workouts.sessions, "delete", fail)
        with pytest.raises(RuntimeError):
            workouts.discard_session(entry.id)

        assert workouts.get_active_session().id == entry.id
        assert len(StimulationRepository(db).events_for_session(entry.id)) == len(ROW)


# ======================================================================
# RecoveryService
# ======================================================================


class TestRecoveryService:
    def test_overview(self, workouts, recovery):
        _complete_workout(workouts, NOW - datetime.timedelta(days=10), SQUAT)
        _complete_workout(workouts, NOW - datetime.timedelta(hours=20), ROW)

        overview = recovery.overview(NOW)
        assert isinstance(overview.muscles[Muscle.LATS].status, Recovering)
        assert isinstance(overview.muscles[Muscle.QUADRICEPS].status, Neglected)
        assert isinstance(overview.muscles[Muscle.CHEST_UPPER].status, FullyRecovered)
        assert Muscle.QUADRICEPS in overview.neglected
        assert Muscle.CHEST_UPPER not in overview.neglected

    def test_events_after_now_ignored(self, workouts, recovery):
        _complete_workout(workouts, NOW + datetime.timedelta(days=1), ROW)
        assert recovery.overview(NOW).muscles[Muscle.LATS].last_stimulated_at is None

    def test_muscle_detail_by_identifier(self, workouts, recovery):
        _complete_workout(workouts, NOW - datetime.timedelta(hours=20), ROW)
        detail = recovery.muscle_detail("lats", NOW)
        assert detail.muscle is Muscle.LATS
        assert detail.total_sets == 3
        assert detail.remaining_hours is not None

    def test_muscle_detail_unknown_identifier(self, recovery):
        with pytest.raises(InvalidInputError):
            recovery.muscle_detail("calves", NOW)

    def test_snapshot_and_journey(self, workouts, recovery):
        _complete_workout(workouts, NOW - datetime.timedelta(days=40), BENCH_PRESS)
        _complete_workout(workouts, NOW - datetime.timedelta(hours=2), SQUAT)

        current = recovery.snapshot(NOW)
        assert current.intensity_by_muscle[Muscle.QUADRICEPS] > 90
        assert current.intensity_by_muscle[Muscle.CHEST_UPPER] == 0

        result = recovery.journey(NOW, JourneyPeriod.CUSTOM, NOW - datetime.timedelta(days=39))
        assert result.has_past_data
        assert result.past.intensity_by_muscle[Muscle.CHEST_LOWER] > 0
        assert Muscle.QUADRICEPS in result.summary.newly_stimulated


# ======================================================================
# BalanceService
# ======================================================================


class TestBalanceService:
    def test_insufficient_history(self, workouts, balance):
        for day in range(3):
            _complete_workout(workouts, NOW - datetime.timedelta(days=day + 1), SQUAT)
        result = balance.diagnose()
        assert result.archetype is TrainerArchetype.DATA_INSUFFICIENT
        assert result.total_sessions == 3
        assert result.muscle_count[Muscle.QUADRICEPS] == 3

    def test_open_session_excluded(self, workouts, balance):
        for day in range(10):
            _complete_workout(workouts, NOW - datetime.timedelta(days=day + 1), SQUAT)
        entry = workouts.start_session(NOW)
        workouts.record_exercise(entry.id, BENCH_PRESS, 1, NOW)

        result = balance.diagnose()
        assert result.total_sessions == 10
        assert Muscle.CHEST_UPPER not in result.muscle_count
        assert result.muscle_count[Muscle.QUADRICEPS] == 10

    def test_leg_heavy_history(self, workouts, balance):
        for day in range(10):
            _complete_workout(workouts, NOW - datetime.timedelta(days=day + 1), SQUAT)
        assert balance.diagnose().archetype is TrainerArchetype.LEG_DAY_NEVER_SKIP
