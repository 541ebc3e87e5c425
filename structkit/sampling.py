"""
structkit.sampling — Weighted random selection and weighted aggregates.

Items and weights travel as two parallel sequences: weights[i] is the
weight of items[i].  Weights must be non-negative; a total weight of zero
is legal and means "nothing can be drawn".

SAMPLING
════════

Cumulative-weight inversion: draw r uniformly in [0, total), walk the
running sums w₀, w₀+w₁, …, and return the first item whose running sum
exceeds r.  An item of weight zero never moves the running sum, so it can
never be returned.

    weighted_sample(["a", "b"], [1, 3])                     → "b" 3 times in 4
    weighted_sample_size(["a", "b"], [1, 3], 5)             → with replacement
    weighted_sample_size_without_replacement(items, w, 2)   → 2 distinct positions

Every random function takes an `rng` keyword: any object with a random()
method returning a float in [0, 1) (random.Random fits).  Without one the
package source from structkit.config.get_rng() is used.

ERRORS
══════

    LengthMismatch   items and weights differ in length (programmer error)
    InvalidWeight    a sampling weight is negative (programmer error)

Empty input and zero total weight are not errors: they return None / [] / 0.
"""

import logging
from typing import Any, Hashable, Optional, Protocol, Sequence, TypeVar

from structkit.config import get_rng
from structkit.errors import InvalidWeight, LengthMismatch

_LOG = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float: ...


def _source(rng: Optional[RandomSource]) -> RandomSource:
    return rng if rng is not None else get_rng()


def _check_lengths(items: Sequence, weights: Sequence, what: str = "Items and weights") -> None:
    if len(items) != len(weights):
        _LOG.error("%s differ in length: %d vs %d.", what, len(items), len(weights))
        raise LengthMismatch(len(items), len(weights), what)


def _check_weights(weights: Sequence[float]) -> None:
    for i, w in enumerate(weights):
        if w < 0:
            _LOG.error("Negative weight at index %d: %r.", i, w)
            raise InvalidWeight(i, w)


# ═══════════════════════════════════════════════════════════════════
#  WEIGHTED SAMPLING
# ═══════════════════════════════════════════════════════════════════

def _weighted_index(weights: Sequence[float], rng: RandomSource) -> Optional[int]:
    """
    Index chosen by cumulative-weight inversion, or None when the total
    weight is zero.  Weights are assumed validated.
    """
    total = sum(weights)
    if total == 0:
        return None

    r = rng.random() * total
    cumulative = 0.0
    last_positive = None
    for i, w in enumerate(weights):
        if w == 0:
            continue
        cumulative += w
        last_positive = i
        if r < cumulative:
            return i

    # Floating-point rounding can leave r == cumulative at the very end.
    return last_positive


def weighted_sample(
    items: Sequence[T],
    weights: Sequence[float],
    *,
    rng: Optional[RandomSource] = None,
) -> Optional[T]:
    """
    One item drawn with probability proportional to its weight.

    Returns None when either sequence is empty or every weight is zero.
    Raises LengthMismatch for unequal lengths and InvalidWeight for a
    negative weight.
    """
    if len(items) == 0 or len(weights) == 0:
        _LOG.debug("weighted_sample: empty input, nothing to draw.")
        return None
    _check_lengths(items, weights)
    _check_weights(weights)

    index = _weighted_index(weights, _source(rng))
    if index is None:
        _LOG.debug("weighted_sample: total weight is zero, nothing to draw.")
        return None
    return items[index]


def weighted_sample_size(
    items: Sequence[T],
    weights: Sequence[float],
    n: int,
    *,
    rng: Optional[RandomSource] = None,
) -> list[T]:
    """
    `n` independent draws WITH replacement.

    Returns [] for n <= 0 or empty input, and [] when the total weight is
    zero (no draw can succeed).
    """
    if n <= 0 or len(items) == 0 or len(weights) == 0:
        return []

    source = _source(rng)
    result: list[T] = []
    for _ in range(n):
        drawn = weighted_sample(items, weights, rng=source)
        if drawn is None:
            break
        result.append(drawn)
    return result


def weighted_sample_size_without_replacement(
    items: Sequence[T],
    weights: Sequence[float],
    n: int,
    *,
    rng: Optional[RandomSource] = None,
) -> list[T]:
    """
    Up to min(n, len(items)) draws WITHOUT replacement.

    After each draw the chosen item and its weight leave the pool, so no
    position is drawn twice (equal values at different positions may both
    be drawn).  Fewer than n items come back only when the pool runs out of
    positions or of positive weight.
    """
    if n <= 0 or len(items) == 0 or len(weights) == 0:
        return []
    _check_lengths(items, weights)
    _check_weights(weights)

    source = _source(rng)
    pool_items = list(items)
    pool_weights = list(weights)
    result: list[T] = []

    for _ in range(min(n, len(items))):
        index = _weighted_index(pool_weights, source)
        if index is None:
            _LOG.debug("Pool exhausted after %d draws (remaining weight is zero).", len(result))
            break
        result.append(pool_items.pop(index))
        pool_weights.pop(index)

    return result


# ═══════════════════════════════════════════════════════════════════
#  UNIFORM SAMPLING
# ═══════════════════════════════════════════════════════════════════

def shuffle(items: Sequence[T], *, rng: Optional[RandomSource] = None) -> list[T]:
    """Shuffled copy of `items` (Fisher-Yates); the input is left alone."""
    source = _source(rng)
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(source.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def sample(items: Sequence[T], *, rng: Optional[RandomSource] = None) -> Optional[T]:
    """One uniformly chosen item, or None for an empty sequence."""
    if len(items) == 0:
        return None
    return items[int(_source(rng).random() * len(items))]


def sample_size(items: Sequence[T], n: int, *, rng: Optional[RandomSource] = None) -> list[T]:
    """Up to `n` items from distinct positions, uniformly chosen."""
    if n <= 0 or len(items) == 0:
        return []
    return shuffle(items, rng=rng)[:n]


# ═══════════════════════════════════════════════════════════════════
#  WEIGHTED AGGREGATES
# ═══════════════════════════════════════════════════════════════════

def weighted_sum(values: Sequence[float], weights: Sequence[float]) -> float:
    """Σ values[i]·weights[i]; 0 for empty input."""
    if len(values) == 0 or len(weights) == 0:
        return 0
    _check_lengths(values, weights, "Values and weights")
    return sum(v * w for v, w in zip(values, weights))


def weighted_average(values: Sequence[float], weights: Sequence[float]) -> float:
    """Σ values[i]·weights[i] / Σ weights; 0 for empty input or zero total weight."""
    if len(values) == 0 or len(weights) == 0:
        return 0
    _check_lengths(values, weights, "Values and weights")
    total_weight = sum(weights)
    if total_weight == 0:
        return 0
    return weighted_sum(values, weights) / total_weight


def weighted_frequency(items: Sequence[Hashable], weights: Sequence[float]) -> dict[Any, float]:
    """
    Accumulated weight per distinct item (not a count).

        weighted_frequency(["a", "b", "a"], [1, 2, 3])  → {"a": 4, "b": 2}
    """
    _check_lengths(items, weights)
    frequency: dict[Any, float] = {}
    for item, w in zip(items, weights):
        frequency[item] = frequency.get(item, 0) + w
    return frequency


def weighted_max(items: Sequence[T], weights: Sequence[float]) -> Optional[T]:
    """Item with the largest weight (earliest on ties); None for empty input."""
    if len(items) == 0 or len(weights) == 0:
        return None
    _check_lengths(items, weights)
    best = 0
    for i in range(1, len(weights)):
        if weights[i] > weights[best]:
            best = i
    return items[best]


def weighted_min(items: Sequence[T], weights: Sequence[float]) -> Optional[T]:
    """Item with the smallest weight (earliest on ties); None for empty input."""
    if len(items) == 0 or len(weights) == 0:
        return None
    _check_lengths(items, weights)
    best = 0
    for i in range(1, len(weights)):
        if weights[i] < weights[best]:
            best = i
    return items[best]
