"""
Recovery service.

Feeds the pure recovery and snapshot engines with events read from the
store.  Every query re-reads the store; nothing is cached between calls.
"""

import datetime
from typing import Optional, Union

from sqlmodel import Session

from musclemap.db.repositories.stimulation import StimulationRepository
from musclemap.engine.recovery import RecoveryConfig, muscle_recovery
from musclemap.engine.snapshot import JourneyPeriod, journey, latest_events_by_muscle, recovery_overview, snapshot
from musclemap.schemas.recovery import MuscleRecovery, RecoveryOverview
from musclemap.schemas.snapshot import JourneyComparison, MuscleStateSnapshot
from musclemap.taxonomy.muscles import Muscle, parse_muscle


class RecoveryService:
    """Service for recovery state queries."""

    def __init__(self, session: Session, config: Optional[RecoveryConfig] = None):
        self.repository = StimulationRepository(session)
        self.config = config

    def overview(self, now: datetime.datetime) -> RecoveryOverview:
        """Recovery state of every muscle at *now*."""
        return recovery_overview(self.repository.all_events(until=now), now, self.config)

    def muscle_detail(self, muscle: Union[Muscle, str], now: datetime.datetime) -> MuscleRecovery:
        """Recovery state of a single muscle, from its latest event at or before *now*."""
        muscle = parse_muscle(muscle)
        latest = latest_events_by_muscle(self.repository.events_for_muscle(muscle), now).get(muscle)
        return muscle_recovery(muscle, latest, now, self.config)

    def snapshot(self, as_of: datetime.datetime) -> MuscleStateSnapshot:
        return snapshot(self.repository.all_events(until=as_of), as_of, self.config)

    def journey(self, now: datetime.datetime, period: JourneyPeriod = JourneyPeriod.THREE_MONTHS,
                custom_date: Optional[datetime.datetime] = None, ) -> JourneyComparison:
        return journey(self.repository.all_events(until=now), now, period, custom_date, self.config)
