"""
Muscle taxonomy.

Every tracked muscle belongs to exactly one :class:`MuscleGroup` and to
one of three recovery tiers:

* ``72h``: large muscle groups (back, hips, thighs)
* ``48h``: medium groups (chest, deltoids, upper arm)
* ``24h``: small groups (forearms, trunk flexors, calves)

The tier is the *base* recovery time; the recovery engine scales it with
session volume.  The tables are static and deliberately not configurable.
"""

from __future__ import annotations

from enum import Enum

from musclemap.core.errors import InvalidInputError


# ======================================================================
# Enums
# ======================================================================

class MuscleGroup(str, Enum):
    """Coarse body region a muscle belongs to."""
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
    LOWER_BODY = "lower_body"

    @property
    def muscles(self) -> list[Muscle]:
        """Muscles of this group, in declaration order."""
        return [m for m in Muscle if m.group is self]


class Muscle(str, Enum):
    """The 21 tracked muscles.  Values are the persisted identifiers."""
    # Chest
    CHEST_UPPER = "chest_upper"
    CHEST_LOWER = "chest_lower"
    # Back
    LATS = "lats"
    TRAPS_UPPER = "traps_upper"
    TRAPS_MIDDLE_LOWER = "traps_middle_lower"
    ERECTOR_SPINAE = "erector_spinae"
    # Shoulders
    DELTOID_ANTERIOR = "deltoid_anterior"
    DELTOID_LATERAL = "deltoid_lateral"
    DELTOID_POSTERIOR = "deltoid_posterior"
    # Arms
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    # Core
    RECTUS_ABDOMINIS = "rectus_abdominis"
    OBLIQUES = "obliques"
    # Lower body
    GLUTES = "glutes"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    ADDUCTORS = "adductors"
    HIP_FLEXORS = "hip_flexors"
    GASTROCNEMIUS = "gastrocnemius"
    SOLEUS = "soleus"

    @property
    def group(self) -> MuscleGroup:
        return _GROUP[self]

    @property
    def recovery_tier_hours(self) -> int:
        """Base recovery time in hours (24, 48 or 72)."""
        return _RECOVERY_TIER_HOURS[self]


# ======================================================================
# Static tables
# ======================================================================

_GROUP: dict[Muscle, MuscleGroup] = {
    Muscle.CHEST_UPPER: MuscleGroup.CHEST,
    Muscle.CHEST_LOWER: MuscleGroup.CHEST,
    Muscle.LATS: MuscleGroup.BACK,
    Muscle.TRAPS_UPPER: MuscleGroup.BACK,
    Muscle.TRAPS_MIDDLE_LOWER: MuscleGroup.BACK,
    Muscle.ERECTOR_SPINAE: MuscleGroup.BACK,
    Muscle.DELTOID_ANTERIOR: MuscleGroup.SHOULDERS,
    Muscle.DELTOID_LATERAL: MuscleGroup.SHOULDERS,
    Muscle.DELTOID_POSTERIOR: MuscleGroup.SHOULDERS,
    Muscle.BICEPS: MuscleGroup.ARMS,
    Muscle.TRICEPS: MuscleGroup.ARMS,
    Muscle.FOREARMS: MuscleGroup.ARMS,
    Muscle.RECTUS_ABDOMINIS: MuscleGroup.CORE,
    Muscle.OBLIQUES: MuscleGroup.CORE,
    Muscle.GLUTES: MuscleGroup.LOWER_BODY,
    Muscle.QUADRICEPS: MuscleGroup.LOWER_BODY,
    Muscle.HAMSTRINGS: MuscleGroup.LOWER_BODY,
    Muscle.ADDUCTORS: MuscleGroup.LOWER_BODY,
    Muscle.HIP_FLEXORS: MuscleGroup.LOWER_BODY,
    Muscle.GASTROCNEMIUS: MuscleGroup.LOWER_BODY,
    Muscle.SOLEUS: MuscleGroup.LOWER_BODY,
}

# Large groups: 72h, medium: 48h, small: 24h.
_RECOVERY_TIER_HOURS: dict[Muscle, int] = {
    Muscle.LATS: 72,
    Muscle.TRAPS_UPPER: 72,
    Muscle.TRAPS_MIDDLE_LOWER: 72,
    Muscle.ERECTOR_SPINAE: 72,
    Muscle.GLUTES: 72,
    Muscle.QUADRICEPS: 72,
    Muscle.HAMSTRINGS: 72,
    Muscle.ADDUCTORS: 72,
    Muscle.HIP_FLEXORS: 72,
    Muscle.CHEST_UPPER: 48,
    Muscle.CHEST_LOWER: 48,
    Muscle.DELTOID_ANTERIOR: 48,
    Muscle.DELTOID_LATERAL: 48,
    Muscle.DELTOID_POSTERIOR: 48,
    Muscle.BICEPS: 48,
    Muscle.TRICEPS: 48,
    Muscle.FOREARMS: 24,
    Muscle.RECTUS_ABDOMINIS: 24,
    Muscle.OBLIQUES: 24,
    Muscle.GASTROCNEMIUS: 24,
    Muscle.SOLEUS: 24,
}


# ======================================================================
# Parsing
# ======================================================================

def parse_muscle(value: Muscle | str) -> Muscle:
    """Convert a persisted identifier to :class:`Muscle`.

    Raises :class:`InvalidInputError` for unknown identifiers.
    """
    if isinstance(value, Muscle):
        return value
    try:
        return Muscle(value)
    except ValueError:
        raise InvalidInputError(f"Unknown muscle identifier: {value!r}") from None
