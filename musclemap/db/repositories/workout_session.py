"""
Workout session repository.

Handles database operations for :class:`WorkoutSession`, including the
completed-session queries that feed the balance diagnosis.
"""

import uuid
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, col, select

from musclemap.models.workout_session import WorkoutSession


class WorkoutSessionRepository:
    """Repository for WorkoutSession database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: WorkoutSession) -> WorkoutSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def get_by_id(self, session_id: uuid.UUID) -> Optional[WorkoutSession]:
        return self.session.get(WorkoutSession, session_id)

    def get_active(self) -> Optional[WorkoutSession]:
        """Most recently started session that has not ended."""
        statement = (select(WorkoutSession).where(col(WorkoutSession.ended_at).is_(None))
                     .order_by(col(WorkoutSession.started_at).desc()))
        return self.session.exec(statement).first()

    def list_completed(self) -> list[WorkoutSession]:
        statement = (select(WorkoutSession).where(col(WorkoutSession.ended_at).is_not(None))
                     .order_by(col(WorkoutSession.started_at).desc()))
        return list(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Aggregation queries for the balance diagnosis
    # ------------------------------------------------------------------

    def completed_session_ids(self) -> list[uuid.UUID]:
        statement = select(WorkoutSession.id).where(col(WorkoutSession.ended_at).is_not(None))
        return list(self.session.exec(statement).all())

    def completed_session_count(self) -> int:
        statement = (select(func.count()).select_from(WorkoutSession)
                     .where(col(WorkoutSession.ended_at).is_not(None)))
        return self.session.exec(statement).first() or 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, entry: WorkoutSession) -> WorkoutSession:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def delete(self, session_id: uuid.UUID, commit: bool = True) -> bool:
        entry = self.get_by_id(session_id)
        if entry:
            self.session.delete(entry)
            if commit:
                self.session.commit()
            else:
                self.session.flush()
            return True
        return False
