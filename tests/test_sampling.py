"""
Tests for structkit.sampling — weighted selection and aggregates.

    §1  weighted_sample: contracts and cumulative-weight inversion
    §2  weighted_sample_size (with replacement)
    §3  weighted_sample_size_without_replacement
    §4  Distribution checks with a seeded generator
    §5  Uniform helpers (shuffle, sample, sample_size)
    §6  Weighted aggregates
    §7  Default random source and error logging
"""

import logging
import random

import pytest

from structkit.config import temporary_config
from structkit.errors import InvalidWeight, LengthMismatch, StructkitError
from structkit.sampling import (
    sample, sample_size, shuffle,
    weighted_average, weighted_frequency, weighted_max, weighted_min,
    weighted_sample, weighted_sample_size, weighted_sample_size_without_replacement,
    weighted_sum,
)


# ═══════════════════════════════════════════════════════════════════
#  §1  WEIGHTED SAMPLE
# ═══════════════════════════════════════════════════════════════════

class TestWeightedSample:

    @pytest.mark.parametrize("items,weights", [
        ([], []),
        (["a"], []),
        ([], [1]),
    ])
    def test_empty_input_is_no_result(self, items, weights):
        assert weighted_sample(items, weights) is None

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatch, match="same length"):
            weighted_sample(["a", "b"], [1])

    def test_negative_weight(self):
        with pytest.raises(InvalidWeight, match="non-negative"):
            weighted_sample(["a", "b"], [1, -1])

    def test_errors_are_value_errors(self):
        assert issubclass(LengthMismatch, StructkitError)
        assert issubclass(LengthMismatch, ValueError)
        assert issubclass(InvalidWeight, ValueError)

    def test_error_attributes(self):
        with pytest.raises(InvalidWeight) as excinfo:
            weighted_sample(["a", "b", "c"], [1, 2, -0.5])
        assert excinfo.value.index == 2
        assert excinfo.value.weight == -0.5

    def test_zero_total_weight_is_no_result(self):
        assert weighted_sample(["a", "b"], [0, 0]) is None

    def test_single_item(self):
        assert weighted_sample(["a"], [5]) == "a"

    def test_only_positive_weight_wins(self, scripted):
        for draw in (0.0, 0.3, 0.999999):
            assert weighted_sample(["a", "b"], [1, 0], rng=scripted(draw)) == "a"
            assert weighted_sample(["a", "b"], [0, 1], rng=scripted(draw)) == "b"

    @pytest.mark.parametrize("draw,expected", [
        (0.0, "a"),      # r = 0.0
        (0.2499, "a"),   # r = 0.9996 < 1
        (0.25, "b"),     # r = 1.0 reaches the second bucket
        (0.9999, "b"),
    ])
    def test_cumulative_inversion(self, scripted, draw, expected):
        assert weighted_sample(["a", "b"], [1, 3], rng=scripted(draw)) == expected

    def test_zero_weight_between_buckets_skipped(self, scripted):
        # Buckets: a=[0,1), b empty, c=[1,2)
        assert weighted_sample(["a", "b", "c"], [1, 0, 1], rng=scripted(0.5)) == "c"

    def test_accepts_tuples(self, scripted):
        assert weighted_sample(("x", "y"), (2.0, 2.0), rng=scripted(0.6)) == "y"


# ═══════════════════════════════════════════════════════════════════
#  §2  WITH REPLACEMENT
# ═══════════════════════════════════════════════════════════════════

class TestWeightedSampleSize:

    @pytest.mark.parametrize("n", [0, -1])
    def test_non_positive_n(self, n):
        assert weighted_sample_size(["a", "b"], [1, 1], n) == []

    def test_empty_inputs(self):
        assert weighted_sample_size([], [], 5) == []
        assert weighted_sample_size(["a"], [], 5) == []

    def test_with_replacement(self):
        assert weighted_sample_size(["a"], [1], 3) == ["a", "a", "a"]

    def test_single_non_zero_weight_always_chosen(self):
        rng = random.Random(0)
        for _ in range(20):
            assert weighted_sample_size(["a", "b", "c"], [0, 2.5, 0], 10, rng=rng) == ["b"] * 10

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatch):
            weighted_sample_size(["a", "b"], [1], 2)

    def test_zero_mass_draws_nothing(self):
        assert weighted_sample_size(["a", "b"], [0, 0], 3) == []

    def test_one_draw_per_sample(self, scripted):
        rng = scripted(0.0, 0.9)
        assert weighted_sample_size(["a", "b"], [1, 1], 4, rng=rng) == ["a", "b", "a", "b"]
        assert rng.calls == 4


# ═══════════════════════════════════════════════════════════════════
#  §3  WITHOUT REPLACEMENT
# ═══════════════════════════════════════════════════════════════════

class TestWithoutReplacement:

    def test_non_positive_n(self):
        assert weighted_sample_size_without_replacement(["a", "b"], [1, 1], 0) == []

    def test_empty_inputs(self):
        assert weighted_sample_size_without_replacement([], [], 3) == []

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatch):
            weighted_sample_size_without_replacement(["a", "b"], [1], 2)

    def test_negative_weight(self):
        with pytest.raises(InvalidWeight):
            weighted_sample_size_without_replacement(["a", "b"], [1, -2], 1)

    def test_unique_elements(self):
        result = weighted_sample_size_without_replacement(["a", "b", "c"], [1, 1, 1], 2)
        assert len(result) == 2
        assert len(set(result)) == 2

    def test_does_not_exceed_length(self):
        result = weighted_sample_size_without_replacement(["a", "b"], [1, 1], 5)
        assert sorted(result) == ["a", "b"]

    def test_zero_weight_never_drawn(self):
        rng = random.Random(3)
        for _ in range(50):
            result = weighted_sample_size_without_replacement(["a", "b", "c"], [1, 0, 1], 2, rng=rng)
            assert sorted(result) == ["a", "c"]

    def test_stops_when_mass_exhausted(self):
        result = weighted_sample_size_without_replacement(["a", "b", "c"], [0, 5, 0], 3)
        assert result == ["b"]

    def test_chosen_item_leaves_pool(self, scripted):
        # A draw of 0.0 always takes the first remaining positive bucket.
        result = weighted_sample_size_without_replacement(
            ["a", "b", "c"], [1, 1, 1], 3, rng=scripted(0.0)
        )
        assert result == ["a", "b", "c"]

    def test_duplicate_values_are_distinct_positions(self, scripted):
        result = weighted_sample_size_without_replacement(
            ["x", "x", "y"], [1, 1, 0], 3, rng=scripted(0.9)
        )
        assert result == ["x", "x"]

    def test_inputs_not_modified(self):
        items, weights = ["a", "b", "c"], [1, 2, 3]
        weighted_sample_size_without_replacement(items, weights, 2)
        assert items == ["a", "b", "c"]
        assert weights == [1, 2, 3]

    def test_never_duplicates_positions(self):
        rng = random.Random(11)
        items = list(range(10))
        weights = [i + 1 for i in range(10)]
        for n in range(0, 13):
            result = weighted_sample_size_without_replacement(items, weights, n, rng=rng)
            assert len(result) == min(n, len(items))
            assert len(set(result)) == len(result)


# ═══════════════════════════════════════════════════════════════════
#  §4  DISTRIBUTION
# ═══════════════════════════════════════════════════════════════════

class TestDistribution:

    def test_frequencies_follow_weights(self):
        rng = random.Random(42)
        draws = weighted_sample_size(["a", "b", "c"], [1, 2, 7], 20000, rng=rng)
        share = {k: draws.count(k) / len(draws) for k in "abc"}
        assert share["a"] == pytest.approx(0.1, abs=0.02)
        assert share["b"] == pytest.approx(0.2, abs=0.02)
        assert share["c"] == pytest.approx(0.7, abs=0.02)

    def test_heavy_item_drawn_first_more_often(self):
        rng = random.Random(7)
        firsts = [
            weighted_sample_size_without_replacement(["light", "heavy"], [1, 9], 2, rng=rng)[0]
            for _ in range(5000)
        ]
        assert firsts.count("heavy") / len(firsts) == pytest.approx(0.9, abs=0.03)


# ═══════════════════════════════════════════════════════════════════
#  §5  UNIFORM HELPERS
# ═══════════════════════════════════════════════════════════════════

class TestUniform:

    def test_shuffle_is_permutation(self):
        items = list(range(20))
        result = shuffle(items, rng=random.Random(1))
        assert sorted(result) == items
        assert items == list(range(20))

    def test_shuffle_empty(self):
        assert shuffle([]) == []

    def test_sample(self, scripted):
        assert sample([]) is None
        assert sample(["a", "b", "c", "d"], rng=scripted(0.5)) == "c"
        assert sample(["a", "b", "c", "d"], rng=scripted(0.99)) == "d"

    def test_sample_size(self):
        rng = random.Random(5)
        assert sample_size([1, 2, 3], 0) == []
        assert sample_size([], 3) == []
        result = sample_size([1, 2, 3, 4, 5], 3, rng=rng)
        assert len(result) == 3
        assert len(set(result)) == 3
        assert sorted(sample_size([1, 2, 3], 10, rng=rng)) == [1, 2, 3]


# ═══════════════════════════════════════════════════════════════════
#  §6  AGGREGATES
# ═══════════════════════════════════════════════════════════════════

class TestAggregates:

    def test_weighted_average(self):
        assert weighted_average([], []) == 0
        assert weighted_average([1, 2, 3], [0, 0, 0]) == 0
        assert weighted_average([1, 2, 3], [1, 1, 1]) == 2
        assert weighted_average([1, 2, 3], [1, 2, 3]) == pytest.approx(14 / 6)
        assert weighted_average([10, 20], [1, 4]) == 18
        assert weighted_average([5], [3]) == 5

    def test_weighted_sum(self):
        assert weighted_sum([], []) == 0
        assert weighted_sum([1, 2, 3], [1, 1, 1]) == 6
        assert weighted_sum([1, 2, 3], [2, 3, 4]) == 20
        assert weighted_sum([10, 20], [0.5, 0.5]) == 15
        assert weighted_sum([1, 2, 3], [0, 0, 0]) == 0

    def test_weighted_frequency(self):
        assert weighted_frequency([], []) == {}
        assert weighted_frequency(["a", "b", "a"], [1, 2, 3]) == {"a": 4, "b": 2}
        assert weighted_frequency(["x", "y", "x", "x"], [1, 2, 3, 4]) == {"x": 8, "y": 2}

    def test_weighted_max_min(self):
        assert weighted_max([], []) is None
        assert weighted_min([], []) is None
        assert weighted_max(["a", "b", "c"], [1, 3, 2]) == "b"
        assert weighted_min(["a", "b", "c"], [2, 1, 3]) == "b"

    def test_ties_pick_earliest(self):
        assert weighted_max(["a", "b", "c"], [1, 5, 5]) == "b"
        assert weighted_min(["a", "b", "c"], [4, 0, 0]) == "b"

    @pytest.mark.parametrize("func", [
        weighted_average, weighted_sum, weighted_frequency, weighted_max, weighted_min,
    ])
    def test_length_mismatch(self, func):
        with pytest.raises(LengthMismatch):
            func([1, 2], [1])


# ═══════════════════════════════════════════════════════════════════
#  §7  DEFAULT SOURCE & LOGGING
# ═══════════════════════════════════════════════════════════════════

class TestDefaultSource:

    def test_seeded_config_is_reproducible(self):
        items, weights = list("abcdef"), [1, 2, 3, 4, 5, 6]
        with temporary_config(seed=1234):
            first = weighted_sample_size(items, weights, 25)
        with temporary_config(seed=1234):
            second = weighted_sample_size(items, weights, 25)
        assert first == second

    def test_seeded_config_matches_random_random(self):
        with temporary_config(seed=99):
            drawn = shuffle(list(range(10)))
        assert drawn == shuffle(list(range(10)), rng=random.Random(99))

    def test_env_seed(self, monkeypatch):
        from structkit.config import ToolConfig, set_config

        monkeypatch.setenv("STRUCTKIT_SEED", "5")
        set_config(ToolConfig())
        first = sample_size(list(range(100)), 5)
        set_config(ToolConfig())
        assert sample_size(list(range(100)), 5) == first

    def test_errors_are_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="structkit"):
            with pytest.raises(LengthMismatch):
                weighted_sum([1, 2], [1])
        assert any(
            r.name == "structkit.sampling" and r.levelno == logging.ERROR
            for r in caplog.records
        )
