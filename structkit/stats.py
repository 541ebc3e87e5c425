"""
structkit.stats — Descriptive statistics over plain number sequences.

Empty input yields 0 (or [] for mode) rather than an error, like the
weighted aggregates in structkit.sampling.
"""

import logging
import math
from typing import Sequence

_LOG = logging.getLogger(__name__)


def average(numbers: Sequence[float]) -> float:
    if len(numbers) == 0:
        return 0
    return sum(numbers) / len(numbers)


def median(numbers: Sequence[float]) -> float:
    if len(numbers) == 0:
        return 0
    ordered = sorted(numbers)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


def mode(numbers: Sequence[float]) -> list[float]:
    """Every value sharing the highest frequency, in first-seen order."""
    if len(numbers) == 0:
        return []
    counts: dict[float, int] = {}
    for num in numbers:
        counts[num] = counts.get(num, 0) + 1
    top = max(counts.values())
    return [num for num, count in counts.items() if count == top]


def variance(numbers: Sequence[float], sample: bool = False) -> float:
    """
    Population variance, or sample variance (divide by n - 1) when
    `sample` is set.  A single value has sample variance 0.
    """
    n = len(numbers)
    if n == 0:
        return 0
    divisor = n - 1 if sample else n
    if divisor == 0:
        return 0
    avg = average(numbers)
    return sum((num - avg) ** 2 for num in numbers) / divisor


def standard_deviation(numbers: Sequence[float], sample: bool = False) -> float:
    return math.sqrt(variance(numbers, sample=sample))


def geometric_mean(numbers: Sequence[float]) -> float:
    """n-th root of the product, computed in log space to avoid overflow."""
    if len(numbers) == 0:
        return 0
    if any(num <= 0 for num in numbers):
        _LOG.error("geometric_mean: non-positive value in input.")
        raise ValueError("Geometric mean requires all positive numbers")
    return math.exp(sum(math.log(num) for num in numbers) / len(numbers))


def harmonic_mean(numbers: Sequence[float]) -> float:
    if len(numbers) == 0:
        return 0
    if any(num == 0 for num in numbers):
        _LOG.error("harmonic_mean: zero in input.")
        raise ValueError("Harmonic mean is undefined for inputs containing zero")
    return len(numbers) / sum(1 / num for num in numbers)
