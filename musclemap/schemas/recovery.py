"""
Recovery status schemas.

:data:`RecoveryStatus` is a discriminated union on ``kind``.  Exactly one
variant holds for a ``(muscle, instant)`` pair:

- ``recovering``      : progress in ``[0, 1)``
- ``fully_recovered`` : progress reached 1.0 within the last week
- ``neglected``       : untouched for 7 or more days
- ``neglected_severe``: untouched for 14 or more days

Neglect is decided on elapsed days only and overrides progress.
"""

import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from musclemap.taxonomy.muscles import Muscle


class Recovering(BaseModel):
    kind: Literal["recovering"] = "recovering"
    progress: float = Field(..., ge=0.0, lt=1.0)


class FullyRecovered(BaseModel):
    kind: Literal["fully_recovered"] = "fully_recovered"


class Neglected(BaseModel):
    kind: Literal["neglected"] = "neglected"


class NeglectedSevere(BaseModel):
    kind: Literal["neglected_severe"] = "neglected_severe"


RecoveryStatus = Annotated[
    Union[Recovering, FullyRecovered, Neglected, NeglectedSevere],
    Field(discriminator="kind"),
]


class MuscleRecovery(BaseModel):
    """Recovery state of one muscle at a reference instant.

    A muscle that has never been stimulated is reported as
    ``fully_recovered`` with ``last_stimulated_at=None`` (inactive).
    """

    muscle: Muscle
    status: RecoveryStatus
    progress: float = Field(..., ge=0.0, le=1.0)
    days_since_stimulation: Optional[int] = Field(
        None,
        description="Whole days since the last stimulation (None if inactive)",
    )
    last_stimulated_at: Optional[datetime.datetime] = None
    total_sets: Optional[int] = None
    remaining_hours: Optional[float] = Field(
        None,
        description="Hours until full recovery (None once recovered or inactive)",
    )
    estimated_recovery_at: Optional[datetime.datetime] = None

    @property
    def is_inactive(self) -> bool:
        return self.last_stimulated_at is None

    @property
    def is_neglected(self) -> bool:
        return isinstance(self.status, (Neglected, NeglectedSevere))


class RecoveryOverview(BaseModel):
    """Recovery state of every muscle at ``as_of``."""

    as_of: datetime.datetime
    muscles: dict[Muscle, MuscleRecovery]
    neglected: list[Muscle] = Field(
        default_factory=list,
        description="Muscles in neglected or neglected_severe state, in taxonomy order",
    )
