"""Tests for the static muscle taxonomy."""

import pytest

from musclemap.core.errors import InvalidInputError
from musclemap.taxonomy.muscles import Muscle, MuscleGroup, parse_muscle


class TestTaxonomyContents:
    def test_twenty_one_muscles(self):
        assert len(Muscle) == 21

    def test_identifiers_are_unique(self):
        values = [m.value for m in Muscle]
        assert len(values) == len(set(values))

    def test_every_muscle_has_group_and_tier(self):
        for muscle in Muscle:
            assert isinstance(muscle.group, MuscleGroup)
            assert muscle.recovery_tier_hours in (24, 48, 72)

    def test_groups_partition_muscles(self):
        members = [m for g in MuscleGroup for m in g.muscles]
        assert sorted(members) == sorted(Muscle)

    @pytest.mark.parametrize("group, size", [
        (MuscleGroup.CHEST, 2),
        (MuscleGroup.BACK, 4),
        (MuscleGroup.SHOULDERS, 3),
        (MuscleGroup.ARMS, 3),
        (MuscleGroup.CORE, 2),
        (MuscleGroup.LOWER_BODY, 7),
    ])
    def test_group_sizes(self, group, size):
        assert len(group.muscles) == size


class TestRecoveryTiers:
    @pytest.mark.parametrize("muscle, hours", [
        (Muscle.LATS, 72),
        (Muscle.QUADRICEPS, 72),
        (Muscle.ERECTOR_SPINAE, 72),
        (Muscle.CHEST_UPPER, 48),
        (Muscle.DELTOID_LATERAL, 48),
        (Muscle.TRICEPS, 48),
        (Muscle.FOREARMS, 24),
        (Muscle.OBLIQUES, 24),
        (Muscle.SOLEUS, 24),
    ])
    def test_tier_hours(self, muscle, hours):
        assert muscle.recovery_tier_hours == hours

    def test_tier_counts(self):
        tiers = [m.recovery_tier_hours for m in Muscle]
        assert tiers.count(72) == 9
        assert tiers.count(48) == 7
        assert tiers.count(24) == 5


class TestParseMuscle:
    def test_parses_identifier(self):
        assert parse_muscle("chest_upper") is Muscle.CHEST_UPPER

    def test_passes_through_enum(self):
        assert parse_muscle(Muscle.GLUTES) is Muscle.GLUTES

    def test_unknown_identifier_raises(self):
        with pytest.raises(InvalidInputError):
            parse_muscle("pecs")

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            parse_muscle("")
