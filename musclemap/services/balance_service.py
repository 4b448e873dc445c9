"""
Balance service.

Aggregates stimulation counts over completed sessions and runs the
balance classifier.  Open sessions are excluded.
"""

from typing import Optional

from sqlmodel import Session

from musclemap.db.repositories.stimulation import StimulationRepository
from musclemap.db.repositories.workout_session import WorkoutSessionRepository
from musclemap.engine.balance import BalanceConfig, diagnose
from musclemap.schemas.balance import BalanceDiagnosis


class BalanceService:
    """Service for the training balance diagnosis."""

    def __init__(self, session: Session, config: Optional[BalanceConfig] = None):
        self.sessions = WorkoutSessionRepository(session)
        self.stimulations = StimulationRepository(session)
        self.config = config

    def diagnose(self) -> BalanceDiagnosis:
        session_ids = self.sessions.completed_session_ids()
        counts = self.stimulations.aggregate_stimulation_counts(session_ids)
        total_sessions = self.sessions.completed_session_count()
        return diagnose(counts, total_sessions, self.config)
