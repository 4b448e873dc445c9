"""
Unit tests for the training balance classifier.

Count maps are hand-built so that the expected axis ratios can be worked
out on paper; comments give the deciding ratio where it is not obvious.
"""

import pytest

from musclemap.core.errors import InvalidInputError
from musclemap.engine.balance import (
    ARMS,
    AXIS_DEFINITIONS,
    LOWER_BODY,
    MIRROR,
    UPPER_BODY,
    BalanceConfig,
    calculate_axis,
    classify,
    compute_axes,
    diagnose,
    normalise_muscle_count,
)
from musclemap.schemas.balance import BalanceAxis, TrainerArchetype
from musclemap.taxonomy.muscles import Muscle, MuscleGroup

M = Muscle
T = TrainerArchetype


# ======================================================================
# Helpers
# ======================================================================


def _group_counts(upper: int, lower: int, core: int) -> dict[Muscle, int]:
    """Same count for every muscle of the upper body, lower body and core."""
    counts: dict[Muscle, int] = {}
    for muscle in Muscle:
        if muscle in UPPER_BODY:
            counts[muscle] = upper
        elif muscle in LOWER_BODY:
            counts[muscle] = lower
        else:
            counts[muscle] = core
    return counts


def _axis(axes: list[BalanceAxis], name: str) -> BalanceAxis:
    return next(a for a in axes if a.name == name)


# ======================================================================
# Membership tables
# ======================================================================


class TestMembership:
    def test_upper_and_lower_cover_all_but_core(self):
        core = set(MuscleGroup.CORE.muscles)
        assert UPPER_BODY | LOWER_BODY == set(Muscle) - core
        assert not UPPER_BODY & LOWER_BODY

    def test_axis_sides_disjoint(self):
        for _, _, _, left, right in AXIS_DEFINITIONS:
            assert not left & right

    def test_axis_order(self):
        assert [d[0] for d in AXIS_DEFINITIONS] == ["upper_lower", "front_back", "push_pull", "core_limb"]

    def test_arm_and_mirror_sets(self):
        assert ARMS == {M.BICEPS, M.TRICEPS, M.FOREARMS}
        assert M.DELTOID_POSTERIOR not in MIRROR
        assert M.BICEPS in MIRROR


# ======================================================================
# Axes
# ======================================================================


class TestAxes:
    def test_no_data_defaults_to_even_split(self):
        axis = calculate_axis("x", "L", "R", frozenset({M.LATS}), frozenset({M.GLUTES}), {})
        assert axis.left_ratio == 0.5
        assert axis.right_ratio == 0.5
        assert axis.is_balanced
        assert axis.bias == 0.0

    def test_ratios(self):
        counts = {M.LATS: 3, M.GLUTES: 1}
        axis = calculate_axis("x", "L", "R", frozenset({M.LATS}), frozenset({M.GLUTES}), counts)
        assert axis.left_ratio == pytest.approx(0.75)
        assert axis.right_ratio == pytest.approx(0.25)
        assert axis.bias == pytest.approx(0.25)
        assert not axis.is_balanced

    def test_unlisted_muscles_ignored(self):
        counts = {M.LATS: 1, M.GLUTES: 1, M.BICEPS: 50}
        axis = calculate_axis("x", "L", "R", frozenset({M.LATS}), frozenset({M.GLUTES}), counts)
        assert axis.left_ratio == pytest.approx(0.5)

    def test_compute_axes_order_and_labels(self):
        axes = compute_axes({})
        assert [a.name for a in axes] == ["upper_lower", "front_back", "push_pull", "core_limb"]
        assert (axes[0].left_label, axes[0].right_label) == ("Upper body", "Lower body")
        assert (axes[3].left_label, axes[3].right_label) == ("Core", "Limbs")

    def test_upper_lower_ratio(self):
        # 12 upper muscles × 6 vs 7 lower muscles × 10 → 72 / 142
        axes = compute_axes(_group_counts(upper=6, lower=10, core=20))
        assert _axis(axes, "upper_lower").left_ratio == pytest.approx(72 / 142)

    @pytest.mark.parametrize("left_ratio, balanced", [
        (0.39, False),
        (0.4, True),
        (0.5, True),
        (0.6, True),
        (0.61, False),
    ])
    def test_balanced_band(self, left_ratio, balanced):
        axis = BalanceAxis(
            name="x", left_label="L", right_label="R",
            left_ratio=left_ratio, right_ratio=1.0 - left_ratio,
        )
        assert axis.is_balanced is balanced


# ======================================================================
# Classification
# ======================================================================


class TestClassify:
    @pytest.mark.parametrize("sessions", [0, 1, 9])
    def test_data_insufficient_below_ten_sessions(self, sessions):
        counts = _group_counts(upper=6, lower=10, core=20)
        assert classify(counts, sessions) is T.DATA_INSUFFICIENT

    def test_full_body_conqueror(self):
        # All 21 muscles hit, average 182 / 21 ≈ 8.7, every axis in [0.4, 0.6].
        counts = _group_counts(upper=6, lower=10, core=20)
        assert all(a.is_balanced for a in compute_axes(counts))
        assert classify(counts, 10) is T.FULL_BODY_CONQUEROR

    def test_balanced_but_low_volume_is_balance_master(self):
        # Same ratios, average 91 / 21 ≈ 4.3.
        counts = _group_counts(upper=3, lower=5, core=10)
        assert classify(counts, 10) is T.BALANCE_MASTER

    def test_balanced_but_too_few_muscles_is_balance_master(self):
        counts = _group_counts(upper=6, lower=10, core=20)
        for muscle in (M.FOREARMS, M.ADDUCTORS, M.HIP_FLEXORS, M.DELTOID_LATERAL):
            counts[muscle] = 0
        assert all(a.is_balanced for a in compute_axes(counts))
        assert classify(counts, 10) is T.BALANCE_MASTER

    def test_all_zero_is_balance_master(self):
        assert classify({m: 0 for m in Muscle}, 10) is T.BALANCE_MASTER

    def test_empty_map_is_balance_master(self):
        assert classify({}, 25) is T.BALANCE_MASTER

    def test_arm_share(self):
        # Arms 20 / 25 = 0.8.
        counts = {M.BICEPS: 10, M.TRICEPS: 10, M.QUADRICEPS: 5}
        assert classify(counts, 10) is T.ARM_DAY_EVERY_DAY

    def test_mirror_share(self):
        # Mirror 20 / 30 ≈ 0.67, arms 0.
        counts = {M.CHEST_UPPER: 10, M.CHEST_LOWER: 10, M.LATS: 5, M.QUADRICEPS: 5}
        assert classify(counts, 10) is T.MIRROR_MUSCLE

    def test_lower_dominant_wins_tie_with_core_limb(self):
        # upper_lower and core_limb both have bias 0.5; upper_lower comes first.
        counts = {M.QUADRICEPS: 10, M.HAMSTRINGS: 10, M.GLUTES: 10}
        assert classify(counts, 10) is T.LEG_DAY_NEVER_SKIP

    def test_upper_dominant_is_mirror_muscle(self):
        counts = {M.LATS: 10, M.DELTOID_POSTERIOR: 10}
        assert classify(counts, 10) is T.MIRROR_MUSCLE

    def test_back_dominant(self):
        # upper_lower 15 / 35 is balanced; front_back is the first axis at bias 0.5.
        counts = {M.LATS: 10, M.HAMSTRINGS: 10, M.GLUTES: 10, M.TRAPS_UPPER: 5}
        assert classify(counts, 10) is T.BACK_ATTACK

    def test_push_dominant(self):
        # push_pull 25 / 35 → bias ≈ 0.21, the largest of the four.
        counts = {
            M.TRICEPS: 10, M.QUADRICEPS: 10, M.CHEST_UPPER: 5,
            M.HAMSTRINGS: 5, M.GLUTES: 5, M.RECTUS_ABDOMINIS: 15,
        }
        axes = compute_axes(counts)
        assert max(axes, key=lambda a: a.bias).name == "push_pull"
        assert classify(counts, 10) is T.PUSH_CRAZY

    def test_core_dominant(self):
        # Adductors only balance upper_lower; core_limb is 20 / 20.
        counts = {
            M.RECTUS_ABDOMINIS: 5, M.OBLIQUES: 5, M.ERECTOR_SPINAE: 10, M.ADDUCTORS: 10,
        }
        assert classify(counts, 10) is T.CORE_MASTER

    def test_custom_thresholds(self):
        cfg = BalanceConfig(min_sessions=3, arm_ratio_threshold=0.9)
        # Arm share 20 / 50; core_limb is even, upper_lower 45 / 50 is the largest bias.
        counts = {M.BICEPS: 10, M.TRICEPS: 10, M.QUADRICEPS: 5, M.ERECTOR_SPINAE: 25}
        assert classify(counts, 10) is T.ARM_DAY_EVERY_DAY
        assert classify(counts, 3, cfg) is T.MIRROR_MUSCLE
        assert classify(counts, 2, cfg) is T.DATA_INSUFFICIENT


# ======================================================================
# Normalisation
# ======================================================================


class TestNormaliseMuscleCount:
    def test_string_keys(self):
        assert normalise_muscle_count({"biceps": 3, M.LATS: 1}) == {M.BICEPS: 3, M.LATS: 1}

    def test_unknown_keys_skipped(self, caplog):
        with caplog.at_level("WARNING"):
            result = normalise_muscle_count({"calves": 2, "glutes": 4})
        assert result == {M.GLUTES: 4}
        assert "calves" in caplog.text

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            normalise_muscle_count({M.LATS: -1})


# ======================================================================
# Diagnosis
# ======================================================================


class TestDiagnose:
    def test_full_result(self):
        counts = _group_counts(upper=6, lower=10, core=20)
        result = diagnose(counts, 12)
        assert result.archetype is T.FULL_BODY_CONQUEROR
        assert [a.name for a in result.axes] == ["upper_lower", "front_back", "push_pull", "core_limb"]
        assert result.total_sessions == 12
        assert result.muscle_count == counts

    def test_insufficient_has_no_axes(self):
        result = diagnose({"lats": 4}, 4)
        assert result.archetype is T.DATA_INSUFFICIENT
        assert result.axes == []
        assert result.muscle_count == {M.LATS: 4}

    def test_negative_sessions_rejected(self):
        with pytest.raises(InvalidInputError):
            diagnose({}, -1)
