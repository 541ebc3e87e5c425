"""
structkit.deep — Deep structural operations on composite values.

    deep_clone({"a": [1, {2, 3}]})         → an equal value sharing nothing mutable
    deep_equal([1, {"x": 2}], (1, {"x": 2}))   → True
    deep_merge({"a": {"b": 1}}, {"a": {"c": 2}})  → {"a": {"b": 1, "c": 2}}


COMPOSITE VALUES
════════════════

Every function here recurses over the same closed set of kinds:

    atom       None, bool, int, float, complex, str, bytes, other objects
    sequence   list, tuple
    mapping    dict and any collections.abc.Mapping (records and maps alike)
    set        set, frozenset
    temporal   datetime.datetime, datetime.date, datetime.time

Key design choice: list and tuple are the SAME kind, the way JSON sees one
array type.  bool is NOT a number, even though Python makes it a subclass
of int (True == 1), so deep_equal(True, 1) is False.

Cyclic structures are not supported.  A self-referential value makes every
function here recurse until RecursionError.
"""

import copy
import datetime
import logging
from collections.abc import Mapping
from typing import Any

_LOG = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  KIND CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════

_ATOM_TYPES = (type(None), bool, int, float, complex, str, bytes)
_TEMPORAL_TYPES = (datetime.datetime, datetime.date, datetime.time)

KIND_ATOM = "atom"
KIND_SEQUENCE = "sequence"
KIND_MAPPING = "mapping"
KIND_SET = "set"
KIND_TEMPORAL = "temporal"


def kind_of(value: Any) -> str:
    """Which branch of the composite-value union `value` belongs to."""
    if isinstance(value, _ATOM_TYPES):
        return KIND_ATOM
    if isinstance(value, (list, tuple)):
        return KIND_SEQUENCE
    if isinstance(value, Mapping):
        return KIND_MAPPING
    if isinstance(value, (set, frozenset)):
        return KIND_SET
    if isinstance(value, _TEMPORAL_TYPES):
        return KIND_TEMPORAL
    return KIND_ATOM


# ═══════════════════════════════════════════════════════════════════
#  CLONE
# ═══════════════════════════════════════════════════════════════════

def deep_clone(value: Any) -> Any:
    """
    Produce a copy of `value` with no shared mutable substructure.

    Primitives come back unchanged (they are immutable).  Containers are
    rebuilt element by element and keep their concrete type: a tuple stays
    a tuple, an OrderedDict stays an OrderedDict, a frozenset stays a
    frozenset.  Mapping keys are cloned along with values.  Temporal values
    are rebuilt from their fields.

    The empty tuple is the one container that comes back as the same
    object: CPython keeps a single ``()`` instance.

    Objects outside the composite union are handed to copy.deepcopy.
    """
    if isinstance(value, _ATOM_TYPES):
        return value

    if isinstance(value, list):
        return [deep_clone(item) for item in value]

    if isinstance(value, tuple):
        items = [deep_clone(item) for item in value]
        if hasattr(value, "_fields"):  # namedtuple
            return type(value)(*items)
        return type(value)(items)

    if isinstance(value, dict):
        if type(value) is dict:
            cloned = {}
        else:
            # Keeps subclass state such as defaultdict.default_factory.
            cloned = copy.copy(value)
            cloned.clear()
        for k, v in value.items():
            cloned[deep_clone(k)] = deep_clone(v)
        return cloned

    if isinstance(value, Mapping):
        # Read-only mappings (e.g. MappingProxyType) become plain dicts.
        return {deep_clone(k): deep_clone(v) for k, v in value.items()}

    if isinstance(value, (set, frozenset)):
        return type(value)(deep_clone(item) for item in value)

    if isinstance(value, _TEMPORAL_TYPES):
        return _clone_temporal(value)

    _LOG.debug("deep_clone: falling back to copy.deepcopy for %s", type(value).__name__)
    return copy.deepcopy(value)


def _clone_temporal(value: Any) -> Any:
    """Rebuild a date/time/datetime from its fields (a fresh object)."""
    # datetime must be checked before date (datetime subclasses date).
    if isinstance(value, datetime.datetime):
        return type(value)(
            value.year, value.month, value.day,
            value.hour, value.minute, value.second, value.microsecond,
            tzinfo=value.tzinfo, fold=value.fold,
        )
    if isinstance(value, datetime.date):
        return type(value)(value.year, value.month, value.day)
    return type(value)(
        value.hour, value.minute, value.second, value.microsecond,
        tzinfo=value.tzinfo, fold=value.fold,
    )


# ═══════════════════════════════════════════════════════════════════
#  EQUALITY
# ═══════════════════════════════════════════════════════════════════

def deep_equal(a: Any, b: Any) -> bool:
    """
    Structural equality over composite values.

    Never raises for mismatched kinds; it just returns False.

        • same object                        → True
        • different kinds                    → False
        • atoms                              → ==, with bool kept apart from numbers
        • temporal values                    → same concrete type and same instant
        • sequences                          → same length, element-wise equal
        • mappings                           → same key set, value-wise equal
        • sets                               → same size, every element matched
    """
    # Same object shortcut
    if a is b:
        return True

    kind = kind_of(a)
    if kind != kind_of(b):
        return False

    if kind == KIND_ATOM:
        return _atom_equal(a, b)
    if kind == KIND_SEQUENCE:
        return _seq_equal(a, b)
    if kind == KIND_MAPPING:
        return _mapping_equal(a, b)
    if kind == KIND_SET:
        return _set_equal(a, b)
    return _temporal_equal(a, b)


def _atom_equal(a: Any, b: Any) -> bool:
    # bool/non-bool mismatch check must come first: True == 1 in Python.
    a_is_bool = type(a) is bool
    b_is_bool = type(b) is bool
    if a_is_bool != b_is_bool:
        return False
    if a is None or b is None:
        return False
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        # Array-likes whose == is element-wise have no single truth value.
        return False


def _temporal_equal(a: Any, b: Any) -> bool:
    # date(2020, 1, 1) and datetime(2020, 1, 1) are different instants.
    if type(a) is not type(b):
        return False
    return a == b


def _seq_equal(a: Any, b: Any) -> bool:
    if len(a) != len(b):
        return False
    return all(deep_equal(x, y) for x, y in zip(a, b))


def _mapping_equal(a: Mapping, b: Mapping) -> bool:
    if len(a) != len(b):
        return False
    # Stored key of b for each hash-equal lookup, so True and 1 stay apart.
    b_keys = {key: key for key in b}
    for key, a_val in a.items():
        if key not in b_keys or not deep_equal(key, b_keys[key]):
            return False
        if not deep_equal(a_val, b[key]):
            return False
    return True


def _set_equal(a: Any, b: Any) -> bool:
    if len(a) != len(b):
        return False
    # Membership through deep_equal, so {True} and {1} stay apart.
    remaining = list(b)
    for x in a:
        for i, y in enumerate(remaining):
            if deep_equal(x, y):
                del remaining[i]
                break
        else:
            return False
    return True


# ═══════════════════════════════════════════════════════════════════
#  MERGE
# ═══════════════════════════════════════════════════════════════════

def deep_merge(*sources: Mapping) -> Any:
    """
    Merge records left to right; later sources win key by key.

    For every key of every source:
        • incoming value is a mapping  → merged recursively into the
          accumulated value (or into a fresh record when the accumulated
          value is missing or not a mapping)
        • anything else                → replaces the accumulated value

    Sequences are replaced wholesale, never concatenated.

    Zero sources give an empty dict.  A single source is returned as-is
    (the very same object).  With two or more, the result is a new dict and
    no source is modified.
    """
    if not sources:
        return {}
    if len(sources) == 1:
        return sources[0]

    result: dict = {}
    for source in sources:
        for key, value in source.items():
            if isinstance(value, Mapping):
                current = result.get(key)
                base = current if isinstance(current, Mapping) else {}
                result[key] = deep_merge(base, value)
            else:
                result[key] = value
    return result
