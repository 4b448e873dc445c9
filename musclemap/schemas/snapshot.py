"""
Muscle state snapshot schemas.

A snapshot maps every muscle to a display intensity in ``0..100`` as of a
given instant: 0 means untouched (or faded after a week), 100 means just
trained.  Snapshots are derived on demand and never stored.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from musclemap.taxonomy.muscles import Muscle


class MuscleStateSnapshot(BaseModel):
    """Reconstructed recovery intensity of all muscles at ``as_of``."""

    as_of: datetime.datetime
    intensity_by_muscle: dict[Muscle, int]

    @property
    def stimulated_count(self) -> int:
        """Number of muscles with a non-zero intensity."""
        return sum(1 for v in self.intensity_by_muscle.values() if v > 0)


class JourneyChangeSummary(BaseModel):
    """Differences between a past and a current snapshot."""

    newly_stimulated: list[Muscle] = Field(
        default_factory=list,
        description="Zero in the past snapshot, stimulated now",
    )
    most_improved: Optional[Muscle] = None
    most_improved_gain: int = 0
    still_neglected: list[Muscle] = Field(
        default_factory=list,
        description="Zero in both snapshots",
    )


class JourneyComparison(BaseModel):
    """Past vs current snapshot pair ("time travel" comparison)."""

    past: MuscleStateSnapshot
    current: MuscleStateSnapshot
    summary: JourneyChangeSummary
    has_past_data: bool
