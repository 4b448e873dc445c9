"""
Muscle stimulation repository.

The event store behind the recovery engine.  Writes follow the merge rule
of :class:`~musclemap.schemas.stimulation.StimulationEvent`; reads return
already-validated schema objects and silently drop rows whose muscle
identifier is no longer part of the taxonomy.
"""

import datetime
import logging
import uuid
from typing import Iterable, Optional

from sqlalchemy import func
from sqlmodel import Session, col, select

from musclemap.core.errors import InvalidInputError
from musclemap.models.muscle_stimulation import MuscleStimulation
from musclemap.schemas.stimulation import StimulationEvent
from musclemap.taxonomy.muscles import Muscle

logger = logging.getLogger(__name__)


class StimulationRepository:
    """Repository for MuscleStimulation database operations."""

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append_or_merge_event(self, muscle: Muscle, session_id: uuid.UUID, intensity: float, total_sets: int,
                              occurred_at: datetime.datetime, commit: bool = True, ) -> StimulationEvent:
        """Insert the ``(muscle, session_id)`` event or merge into the existing one.

        On merge ``max_intensity`` keeps the maximum, ``total_sets`` takes
        the new value and ``occurred_at`` is left untouched.  With
        ``commit=False`` the change is only flushed and the caller owns the
        transaction.
        """
        if total_sets < 1:
            raise InvalidInputError(f"total_sets must be >= 1, got {total_sets}")
        if not 0.0 <= intensity <= 1.0:
            raise InvalidInputError(f"intensity must be within [0, 1], got {intensity}")

        statement = select(MuscleStimulation).where(MuscleStimulation.muscle == muscle.value,
                                                    MuscleStimulation.session_id == session_id, )
        existing = self.session.exec(statement).first()

        if existing:
            existing.max_intensity = max(existing.max_intensity, intensity)
            existing.total_sets = total_sets
            row = existing
            logger.debug("Merged stimulation %s/%s: sets=%d", muscle.value, session_id, total_sets)
        else:
            row = MuscleStimulation(muscle=muscle.value, session_id=session_id, occurred_at=occurred_at,
                                    max_intensity=intensity, total_sets=total_sets, )
            logger.debug("Created stimulation %s/%s at %s", muscle.value, session_id, occurred_at)

        self.session.add(row)
        if commit:
            self.session.commit()
            self.session.refresh(row)
        else:
            self.session.flush()
        return self._to_event(row)

    def delete_for_session(self, session_id: uuid.UUID, commit: bool = True) -> int:
        """Delete every event of *session_id*.  Returns the number of rows removed."""
        statement = select(MuscleStimulation).where(MuscleStimulation.session_id == session_id)
        rows = list(self.session.exec(statement).all())
        for row in rows:
            self.session.delete(row)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        logger.debug("Deleted %d stimulation(s) of session %s", len(rows), session_id)
        return len(rows)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def events_for_muscle(self, muscle: Muscle) -> list[StimulationEvent]:
        """All events of *muscle*, newest first."""
        statement = (select(MuscleStimulation).where(MuscleStimulation.muscle == muscle.value)
                     .order_by(col(MuscleStimulation.occurred_at).desc()))
        return self._to_events(self.session.exec(statement).all())

    def latest_event(self, muscle: Muscle) -> Optional[StimulationEvent]:
        events = self.events_for_muscle(muscle)
        return events[0] if events else None

    def all_events(self, until: Optional[datetime.datetime] = None) -> list[StimulationEvent]:
        """All events, optionally only those at or before *until*."""
        statement = select(MuscleStimulation)
        if until is not None:
            statement = statement.where(MuscleStimulation.occurred_at <= until)
        statement = statement.order_by(MuscleStimulation.occurred_at, MuscleStimulation.id)
        return self._to_events(self.session.exec(statement).all())

    def events_for_session(self, session_id: uuid.UUID) -> list[StimulationEvent]:
        statement = (select(MuscleStimulation).where(MuscleStimulation.session_id == session_id)
                     .order_by(MuscleStimulation.id))
        return self._to_events(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Aggregation queries for the balance diagnosis
    # ------------------------------------------------------------------

    def aggregate_stimulation_counts(self, session_ids: Iterable[uuid.UUID]) -> dict[Muscle, int]:
        """Count, per muscle, how many of *session_ids* stimulated it.

        One event exists per ``(muscle, session)``, so the row count per
        muscle is the number of sessions that touched it.
        """
        ids = list(session_ids)
        if not ids:
            return {}
        statement = (select(MuscleStimulation.muscle, func.count())
                     .where(col(MuscleStimulation.session_id).in_(ids))
                     .group_by(MuscleStimulation.muscle))

        counts: dict[Muscle, int] = {}
        for muscle_id, count in self.session.exec(statement).all():
            try:
                counts[Muscle(muscle_id)] = int(count)
            except ValueError:
                logger.warning("Skipping stored stimulation with unknown muscle %r", muscle_id)
        return counts

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_event(row: MuscleStimulation) -> StimulationEvent:
        return StimulationEvent(muscle=Muscle(row.muscle), session_id=row.session_id, occurred_at=row.occurred_at,
                                max_intensity=row.max_intensity, total_sets=row.total_sets, )

    @classmethod
    def _to_events(cls, rows: Iterable[MuscleStimulation]) -> list[StimulationEvent]:
        events: list[StimulationEvent] = []
        for row in rows:
            try:
                muscle = Muscle(row.muscle)
            except ValueError:
                logger.warning("Skipping stored stimulation %s with unknown muscle %r", row.id, row.muscle)
                continue
            events.append(StimulationEvent(muscle=muscle, session_id=row.session_id, occurred_at=row.occurred_at,
                                           max_intensity=row.max_intensity, total_sets=row.total_sets, ))
        return events
