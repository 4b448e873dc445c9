"""
Workout service.

Owns the session lifecycle and translates recorded exercises into
stimulation events.  An exercise is described by its muscle mapping
(``{muscle_id: stimulation percentage}``); every recognised muscle gets
an event upserted with ``intensity = percentage / 100``.
"""

import datetime
import logging
import uuid
from typing import Mapping, Optional

from sqlmodel import Session

from musclemap.core.errors import InvalidInputError, NotFoundError, SessionClosedError
from musclemap.db.repositories.stimulation import StimulationRepository
from musclemap.db.repositories.workout_session import WorkoutSessionRepository
from musclemap.models.workout_session import WorkoutSession
from musclemap.schemas.stimulation import StimulationEvent
from musclemap.taxonomy.muscles import Muscle

logger = logging.getLogger(__name__)


class WorkoutService:
    """Service for workout session business logic."""

    def __init__(self, session: Session):
        self.db = session
        self.sessions = WorkoutSessionRepository(session)
        self.stimulations = StimulationRepository(session)

    def start_session(self, started_at: datetime.datetime, note: Optional[str] = None) -> WorkoutSession:
        entry = self.sessions.create(WorkoutSession(started_at=started_at, note=note))
        logger.info("Started workout session %s at %s", entry.id, started_at)
        return entry

    def get_active_session(self) -> Optional[WorkoutSession]:
        return self.sessions.get_active()

    def record_exercise(self, session_id: uuid.UUID, muscle_mapping: Mapping[str, int], total_sets: int,
                        occurred_at: datetime.datetime, ) -> list[StimulationEvent]:
        """Upsert one stimulation event per muscle targeted by an exercise.

        Args:
            session_id: Open session the sets belong to.
            muscle_mapping: ``{muscle_id: percentage}`` with percentages in
                ``0..100``.  Unknown muscle ids are skipped.
            total_sets: Sets of this exercise performed so far in the session.
            occurred_at: Time of the set being recorded.  Only used when a
                muscle is stimulated for the first time in the session.

        Returns:
            The merged events, in mapping order.
        """
        entry = self._get_session(session_id)
        if not entry.is_active:
            raise SessionClosedError(f"Workout session {session_id} has already ended")
        if total_sets < 1:
            raise InvalidInputError(f"total_sets must be >= 1, got {total_sets}")

        targets: list[tuple[Muscle, float]] = []
        for muscle_id, percentage in muscle_mapping.items():
            try:
                muscle = Muscle(muscle_id)
            except ValueError:
                logger.warning("Skipping unknown muscle %r in exercise mapping", muscle_id)
                continue
            if not 0 <= percentage <= 100:
                raise InvalidInputError(f"Stimulation percentage for {muscle_id} out of range: {percentage}")
            targets.append((muscle, percentage / 100.0))

        # One transaction for the whole exercise.
        try:
            events = [
                self.stimulations.append_or_merge_event(muscle=muscle, session_id=session_id, intensity=intensity,
                                                        total_sets=total_sets, occurred_at=occurred_at,
                                                        commit=False, )
                for muscle, intensity in targets
            ]
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return events

    def end_session(self, session_id: uuid.UUID, ended_at: datetime.datetime) -> WorkoutSession:
        entry = self._get_session(session_id)
        if not entry.is_active:
            raise SessionClosedError(f"Workout session {session_id} has already ended")
        entry.ended_at = ended_at
        entry = self.sessions.update(entry)
        logger.info("Ended workout session %s at %s", session_id, ended_at)
        return entry

    def discard_session(self, session_id: uuid.UUID) -> None:
        """Delete a session together with all of its stimulation events."""
        self._get_session(session_id)
        try:
            removed = self.stimulations.delete_for_session(session_id, commit=False)
            self.sessions.delete(session_id, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Discarded workout session %s (%d stimulation(s) removed)", session_id, removed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_session(self, session_id: uuid.UUID) -> WorkoutSession:
        entry = self.sessions.get_by_id(session_id)
        if not entry:
            raise NotFoundError(f"Workout session {session_id} not found")
        return entry
