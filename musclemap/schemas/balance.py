"""
Training balance schemas.

A :class:`BalanceAxis` splits a subset of the muscles into a left and a
right set and reports the share of stimulations on each side.  An axis is
*balanced* when the left share lies in ``[0.4, 0.6]``.
"""

from enum import Enum

from pydantic import BaseModel, Field

from musclemap.taxonomy.muscles import Muscle


class TrainerArchetype(str, Enum):
    """Label summarising a user's long-run training bias."""
    MIRROR_MUSCLE = "mirror_muscle"
    BALANCE_MASTER = "balance_master"
    LEG_DAY_NEVER_SKIP = "leg_day_never_skip"
    BACK_ATTACK = "back_attack"
    CORE_MASTER = "core_master"
    ARM_DAY_EVERY_DAY = "arm_day_every_day"
    PUSH_CRAZY = "push_crazy"
    FULL_BODY_CONQUEROR = "full_body_conqueror"
    DATA_INSUFFICIENT = "data_insufficient"


class BalanceAxis(BaseModel):
    """Left/right stimulation share along one body axis."""

    name: str = Field(..., description="One of: upper_lower, front_back, push_pull, core_limb")
    left_label: str
    right_label: str
    left_ratio: float = Field(..., ge=0.0, le=1.0)
    right_ratio: float = Field(..., ge=0.0, le=1.0)

    @property
    def bias(self) -> float:
        """Distance of the left share from an even split."""
        return abs(self.left_ratio - 0.5)

    @property
    def is_balanced(self) -> bool:
        return 0.4 <= self.left_ratio <= 0.6


class BalanceDiagnosis(BaseModel):
    """Result of a balance diagnosis over the completed session history."""

    archetype: TrainerArchetype
    axes: list[BalanceAxis] = Field(
        default_factory=list,
        description="The four axes in fixed order (empty when data are insufficient)",
    )
    muscle_count: dict[Muscle, int] = Field(default_factory=dict)
    total_sessions: int = Field(..., ge=0)
