"""Static muscle taxonomy: 21 muscles, 6 groups, 3 recovery tiers."""

from musclemap.taxonomy.muscles import Muscle, MuscleGroup, parse_muscle

__all__ = ["Muscle", "MuscleGroup", "parse_muscle"]
