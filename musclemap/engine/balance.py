"""
Training balance diagnosis.

The classifier looks at how often each muscle was stimulated over the
completed session history and answers two questions:

1. How symmetric is the training along four body axes?
   (upper/lower, front/back, push/pull, core/limb)
2. Which of nine trainer archetypes best describes the history?

Counts are *per session per distinct muscle*: a session that hits the
biceps with three exercises contributes one biceps stimulation.

Rule order
----------
1. Fewer than 10 completed sessions → ``data_insufficient``.
2. ≥ 18 stimulated muscles, average ≥ 5 per muscle, all axes balanced
   → ``full_body_conqueror``.
3. All axes balanced → ``balance_master``.
4. Arm share > 30 % → ``arm_day_every_day``.
5. Mirror-muscle share > 40 % → ``mirror_muscle``.
6. Otherwise the most biased axis (earliest axis wins ties) and its
   direction pick the archetype from :data:`_BIAS_ARCHETYPES`.

Axis membership is fixed.  Axes may leave muscles out entirely (the
core/limb axis ignores chest, back and shoulders).
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from musclemap.core.errors import InvalidInputError
from musclemap.schemas.balance import BalanceAxis, BalanceDiagnosis, TrainerArchetype
from musclemap.taxonomy.muscles import Muscle, MuscleGroup

logger = logging.getLogger(__name__)

M = Muscle

# ======================================================================
# Static membership tables
# ======================================================================

UPPER_BODY: frozenset[Muscle] = frozenset(
    MuscleGroup.CHEST.muscles + MuscleGroup.BACK.muscles
    + MuscleGroup.SHOULDERS.muscles + MuscleGroup.ARMS.muscles
)
LOWER_BODY: frozenset[Muscle] = frozenset({
    M.GLUTES, M.QUADRICEPS, M.HAMSTRINGS, M.ADDUCTORS, M.HIP_FLEXORS,
    M.GASTROCNEMIUS, M.SOLEUS,
})

FRONT: frozenset[Muscle] = frozenset({
    M.CHEST_UPPER, M.CHEST_LOWER, M.DELTOID_ANTERIOR, M.BICEPS,
    M.RECTUS_ABDOMINIS, M.OBLIQUES, M.QUADRICEPS, M.HIP_FLEXORS,
})
BACK: frozenset[Muscle] = frozenset({
    M.LATS, M.TRAPS_UPPER, M.TRAPS_MIDDLE_LOWER, M.ERECTOR_SPINAE, M.DELTOID_POSTERIOR,
    M.TRICEPS, M.GLUTES, M.HAMSTRINGS, M.GASTROCNEMIUS, M.SOLEUS,
})

PUSH: frozenset[Muscle] = frozenset({
    M.CHEST_UPPER, M.CHEST_LOWER, M.DELTOID_ANTERIOR, M.DELTOID_LATERAL,
    M.TRICEPS, M.QUADRICEPS,
})
PULL: frozenset[Muscle] = frozenset({
    M.LATS, M.TRAPS_UPPER, M.TRAPS_MIDDLE_LOWER, M.BICEPS, M.HAMSTRINGS, M.GLUTES,
})

CORE: frozenset[Muscle] = frozenset({M.RECTUS_ABDOMINIS, M.OBLIQUES, M.ERECTOR_SPINAE})
LIMBS: frozenset[Muscle] = frozenset({
    M.BICEPS, M.TRICEPS, M.FOREARMS, M.QUADRICEPS, M.HAMSTRINGS,
    M.GASTROCNEMIUS, M.SOLEUS,
})

ARMS: frozenset[Muscle] = frozenset({M.BICEPS, M.TRICEPS, M.FOREARMS})
# Upper-body front: the muscles visible in a mirror.
MIRROR: frozenset[Muscle] = frozenset({
    M.CHEST_UPPER, M.CHEST_LOWER, M.DELTOID_ANTERIOR, M.DELTOID_LATERAL, M.BICEPS,
})

# (name, left label, right label, left set, right set), in tie-break order.
AXIS_DEFINITIONS: list[tuple[str, str, str, frozenset[Muscle], frozenset[Muscle]]] = [
    ("upper_lower", "Upper body", "Lower body", UPPER_BODY, LOWER_BODY),
    ("front_back", "Front", "Back", FRONT, BACK),
    ("push_pull", "Push", "Pull", PUSH, PULL),
    ("core_limb", "Core", "Limbs", CORE, LIMBS),
]

# (axis name, biased side) → archetype.
_BIAS_ARCHETYPES: dict[tuple[str, str], TrainerArchetype] = {
    ("upper_lower", "right"): TrainerArchetype.LEG_DAY_NEVER_SKIP,
    ("upper_lower", "left"): TrainerArchetype.MIRROR_MUSCLE,
    ("front_back", "right"): TrainerArchetype.BACK_ATTACK,
    ("front_back", "left"): TrainerArchetype.MIRROR_MUSCLE,
    ("push_pull", "left"): TrainerArchetype.PUSH_CRAZY,
    ("push_pull", "right"): TrainerArchetype.BACK_ATTACK,
    ("core_limb", "left"): TrainerArchetype.CORE_MASTER,
    ("core_limb", "right"): TrainerArchetype.ARM_DAY_EVERY_DAY,
}


# ======================================================================
# Configuration
# ======================================================================


class BalanceConfig(BaseModel):
    """Thresholds of the archetype rules."""

    min_sessions: int = Field(default=10, ge=0)
    conqueror_min_muscles: int = Field(default=18, ge=0, le=len(Muscle))
    conqueror_min_average: float = Field(default=5.0, ge=0.0)
    arm_ratio_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    mirror_ratio_threshold: float = Field(default=0.4, ge=0.0, le=1.0)


DEFAULT_BALANCE_CONFIG = BalanceConfig()


# ======================================================================
# Input normalisation
# ======================================================================


def normalise_muscle_count(raw: Mapping[Muscle | str, int]) -> dict[Muscle, int]:
    """Turn an externally sourced count map into ``{Muscle: count}``.

    Unknown string keys (e.g. identifiers of removed muscles) are skipped
    so one stale row does not void the whole diagnosis.  Negative counts
    are rejected.
    """
    counts: dict[Muscle, int] = {}
    for key, value in raw.items():
        if isinstance(key, Muscle):
            muscle = key
        else:
            try:
                muscle = Muscle(key)
            except ValueError:
                logger.warning("Skipping unknown muscle identifier %r in stimulation counts", key)
                continue
        if value < 0:
            raise InvalidInputError(f"Negative stimulation count for {muscle.value}: {value}")
        counts[muscle] = counts.get(muscle, 0) + int(value)
    return counts


# ======================================================================
# Axis computation
# ======================================================================


def calculate_axis(
    name: str,
    left_label: str,
    right_label: str,
    left: frozenset[Muscle],
    right: frozenset[Muscle],
    muscle_count: Mapping[Muscle, int],
) -> BalanceAxis:
    """Share of stimulations on each side; 0.5/0.5 when neither side has any."""
    left_total = sum(muscle_count.get(m, 0) for m in left)
    right_total = sum(muscle_count.get(m, 0) for m in right)
    total = left_total + right_total

    left_ratio = left_total / total if total > 0 else 0.5
    return BalanceAxis(
        name=name,
        left_label=left_label,
        right_label=right_label,
        left_ratio=left_ratio,
        right_ratio=1.0 - left_ratio,
    )


def compute_axes(muscle_count: Mapping[Muscle, int]) -> list[BalanceAxis]:
    """The four balance axes in fixed order."""
    return [
        calculate_axis(name, left_label, right_label, left, right, muscle_count)
        for name, left_label, right_label, left, right in AXIS_DEFINITIONS
    ]


def _share(members: frozenset[Muscle], muscle_count: Mapping[Muscle, int], total: int) -> float:
    if total <= 0:
        return 0.0
    return sum(muscle_count.get(m, 0) for m in members) / total


def _most_biased(axes: list[BalanceAxis]) -> tuple[str, str] | None:
    """``(axis_name, side)`` of the largest bias; earliest axis wins ties."""
    best: tuple[str, str] | None = None
    best_bias = 0.0
    for axis in axes:
        if axis.bias > best_bias:
            best_bias = axis.bias
            best = (axis.name, "left" if axis.left_ratio > 0.5 else "right")
    return best


# ======================================================================
# Classification
# ======================================================================


def _classify_axes(
    muscle_count: Mapping[Muscle, int],
    axes: list[BalanceAxis],
    cfg: BalanceConfig,
) -> TrainerArchetype:
    all_balanced = all(axis.is_balanced for axis in axes)

    stimulated_muscles = sum(1 for m in Muscle if muscle_count.get(m, 0) > 0)
    total_stimulation = sum(muscle_count.get(m, 0) for m in Muscle)
    avg_stimulation = total_stimulation / len(Muscle)

    if (stimulated_muscles >= cfg.conqueror_min_muscles
            and avg_stimulation >= cfg.conqueror_min_average
            and all_balanced):
        return TrainerArchetype.FULL_BODY_CONQUEROR

    if all_balanced:
        return TrainerArchetype.BALANCE_MASTER

    if _share(ARMS, muscle_count, total_stimulation) > cfg.arm_ratio_threshold:
        return TrainerArchetype.ARM_DAY_EVERY_DAY

    if _share(MIRROR, muscle_count, total_stimulation) > cfg.mirror_ratio_threshold:
        return TrainerArchetype.MIRROR_MUSCLE

    most_biased = _most_biased(axes)
    if most_biased is None:
        return TrainerArchetype.BALANCE_MASTER
    return _BIAS_ARCHETYPES.get(most_biased, TrainerArchetype.BALANCE_MASTER)


def classify(
    muscle_count: Mapping[Muscle, int],
    total_sessions: int,
    config: Optional[BalanceConfig] = None,
) -> TrainerArchetype:
    """Classify the training history into a :class:`TrainerArchetype`.

    Args:
        muscle_count: Stimulation count per muscle (missing muscles count
            as 0).
        total_sessions: Number of completed sessions the counts cover.
        config: Optional threshold override.
    """
    cfg = config or DEFAULT_BALANCE_CONFIG
    if total_sessions < cfg.min_sessions:
        return TrainerArchetype.DATA_INSUFFICIENT
    return _classify_axes(muscle_count, compute_axes(muscle_count), cfg)


def diagnose(
    muscle_count: Mapping[Muscle | str, int],
    total_sessions: int,
    config: Optional[BalanceConfig] = None,
) -> BalanceDiagnosis:
    """Archetype plus the four axes.  Axes are omitted when data are insufficient."""
    cfg = config or DEFAULT_BALANCE_CONFIG
    if total_sessions < 0:
        raise InvalidInputError(f"total_sessions must be >= 0, got {total_sessions}")
    counts = normalise_muscle_count(muscle_count)

    if total_sessions < cfg.min_sessions:
        return BalanceDiagnosis(
            archetype=TrainerArchetype.DATA_INSUFFICIENT,
            muscle_count=counts,
            total_sessions=total_sessions,
        )

    axes = compute_axes(counts)
    return BalanceDiagnosis(
        archetype=_classify_axes(counts, axes, cfg),
        axes=axes,
        muscle_count=counts,
        total_sessions=total_sessions,
    )
