"""
structkit
=========

Stateless helpers for nested data, weighted sampling and string metrics.

    deep_equal(deep_clone(v), v)                    → True
    deep_merge({"a": {"b": 1}}, {"a": {"c": 2}})    → {"a": {"b": 1, "c": 2}}
    get_path({"a": {"b": 1}}, "a.b")                → 1
    weighted_sample(["a", "b"], [0, 1])             → "b"
    levenshtein_distance("kitten", "sitting")       → 3
    is_valid_credit_card("4532015112830366")        → True

Every function is an independent pure transformation or predicate, except
set_path / unset_path (which mutate their argument in place) and the
sampling family (which draws from an injectable random source).
"""

import logging

from structkit.checksum import is_credit_card, is_valid_credit_card, luhn_total
from structkit.config import ToolConfig, get_config, get_rng, set_config, temporary_config
from structkit.deep import deep_clone, deep_equal, deep_merge, kind_of
from structkit.errors import InvalidPath, InvalidWeight, LengthMismatch, StructkitError
from structkit.logging_config import get_logger, reset_logging, set_global_level, setup_logger
from structkit.paths import (
    flatten, get_path, get_paths, has_path, omit, pick,
    set_path, split_path, unflatten, unset_path,
)
from structkit.sampling import (
    # Weighted sampling
    weighted_sample,
    weighted_sample_size,
    weighted_sample_size_without_replacement,
    # Uniform sampling
    sample,
    sample_size,
    shuffle,
    # Weighted aggregates
    weighted_average,
    weighted_frequency,
    weighted_max,
    weighted_min,
    weighted_sum,
)
from structkit.stats import (
    average, geometric_mean, harmonic_mean, median, mode,
    standard_deviation, variance,
)
from structkit.strings import (
    levenshtein_distance, longest_common_prefix, longest_common_suffix, similarity,
)

# Silent unless the host application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "deep_clone", "deep_equal", "deep_merge", "kind_of",
    "get_path", "set_path", "has_path", "unset_path", "split_path",
    "get_paths", "flatten", "unflatten", "pick", "omit",
    "weighted_sample", "weighted_sample_size", "weighted_sample_size_without_replacement",
    "sample", "sample_size", "shuffle",
    "weighted_average", "weighted_sum", "weighted_frequency", "weighted_max", "weighted_min",
    "average", "median", "mode", "variance", "standard_deviation",
    "geometric_mean", "harmonic_mean",
    "levenshtein_distance", "similarity", "longest_common_prefix", "longest_common_suffix",
    "is_valid_credit_card", "is_credit_card", "luhn_total",
    "StructkitError", "LengthMismatch", "InvalidWeight", "InvalidPath",
    "ToolConfig", "get_config", "set_config", "temporary_config", "get_rng",
    "setup_logger", "get_logger", "set_global_level", "reset_logging",
]
