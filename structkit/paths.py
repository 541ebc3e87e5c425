"""
structkit.paths — Path-addressed access to nested records.

A path is a delimited string ("a.b.0.c"); each segment addresses one level:

    mapping    segment is a key
    list/tuple segment is a non-negative decimal index within range
    anything else (None, str, numbers, objects) is not traversable

    obj = {"a": {"b": {"c": "value"}}}
    get_path(obj, "a.b.c")               → "value"
    get_path(obj, "a.b.d", "default")    → "default"
    has_path(obj, "a.b.c")               → True
    set_path(obj, "a.x.y", 1)            # obj["a"]["x"] == {"y": 1}
    unset_path(obj, "a.x")               → True

The empty path addresses the root itself: reads resolve to `obj`, writes
raise InvalidPath (the root cannot be replaced in place).

The delimiter defaults to the configured one (STRUCTKIT_PATH_DELIMITER,
"." unless overridden).
"""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Optional

from structkit.config import get_config
from structkit.errors import InvalidPath

_LOG = logging.getLogger(__name__)

_MISSING = object()


# ═══════════════════════════════════════════════════════════════════
#  SEGMENTS & SINGLE-STEP ACCESS
# ═══════════════════════════════════════════════════════════════════

def split_path(path: str, delimiter: Optional[str] = None) -> list[str]:
    """Split a path into segments ([] for the empty path)."""
    if path == "":
        return []
    return path.split(delimiter or get_config().path_delimiter)


def _as_index(seq: Any, segment: str) -> Optional[int]:
    """Decimal segment → in-range index of `seq`, else None."""
    if not segment.isdecimal():
        return None
    index = int(segment)
    return index if index < len(seq) else None


def _step(current: Any, segment: str) -> Any:
    """One level down, or _MISSING when `segment` does not resolve."""
    if isinstance(current, Mapping):
        return current[segment] if segment in current else _MISSING
    if isinstance(current, (list, tuple)):
        index = _as_index(current, segment)
        return _MISSING if index is None else current[index]
    return _MISSING


def _walk(obj: Any, segments: list[str]) -> Any:
    current = obj
    for segment in segments:
        current = _step(current, segment)
        if current is _MISSING:
            return _MISSING
    return current


# ═══════════════════════════════════════════════════════════════════
#  GET / SET / HAS / UNSET
# ═══════════════════════════════════════════════════════════════════

def get_path(obj: Any, path: str, default: Any = None, *, delimiter: Optional[str] = None) -> Any:
    """
    Value at `path`, or `default` the moment a segment is missing or the
    current value is not traversable.  An explicitly stored None is
    returned as None, not replaced by `default`.
    """
    found = _walk(obj, split_path(path, delimiter))
    return default if found is _MISSING else found


def has_path(obj: Any, path: str, *, delimiter: Optional[str] = None) -> bool:
    """True when every segment of `path` resolves."""
    return _walk(obj, split_path(path, delimiter)) is not _MISSING


def set_path(obj: Any, path: str, value: Any, *, delimiter: Optional[str] = None) -> None:
    """
    Assign `value` at `path`, mutating `obj` in place.

    Intermediate positions holding nothing, or something other than a
    mapping or list, are replaced by an empty dict.  The last segment is
    always overwritten.  Writing a list index past the end pads the list
    with None.
    """
    segments = split_path(path, delimiter)
    if not segments:
        _LOG.error("set_path called with an empty path.")
        raise InvalidPath(path)

    current = obj
    for segment in segments[:-1]:
        child = _step(current, segment)
        if not isinstance(child, (MutableMapping, list)):
            child = {}
            _assign(current, segment, child, path)
        current = child

    _assign(current, segments[-1], value, path)


def _assign(container: Any, segment: str, value: Any, path: str) -> None:
    if isinstance(container, MutableMapping):
        container[segment] = value
        return
    if isinstance(container, list) and segment.isdecimal():
        index = int(segment)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
        return
    _LOG.error("Cannot write segment %r of %r into %s.", segment, path, type(container).__name__)
    raise InvalidPath(path, f"segment {segment!r} cannot be written into {type(container).__name__}")


def unset_path(obj: Any, path: str, *, delimiter: Optional[str] = None) -> bool:
    """
    Remove the key (or list element) at `path`.

    Returns True when something was removed, False when the path never
    existed.  Removing a list element shifts the later ones down.
    """
    segments = split_path(path, delimiter)
    if not segments:
        _LOG.error("unset_path called with an empty path.")
        raise InvalidPath(path)

    parent = _walk(obj, segments[:-1])
    last = segments[-1]

    if isinstance(parent, MutableMapping):
        if last in parent:
            del parent[last]
            return True
        return False
    if isinstance(parent, list):
        index = _as_index(parent, last)
        if index is not None:
            del parent[index]
            return True
    return False


# ═══════════════════════════════════════════════════════════════════
#  WHOLE-RECORD HELPERS
# ═══════════════════════════════════════════════════════════════════

def _join(prefix: str, key: Any, delimiter: str) -> str:
    return f"{prefix}{delimiter}{key}" if prefix else str(key)


def get_paths(obj: Mapping, prefix: str = "", *, delimiter: Optional[str] = None) -> list[str]:
    """
    Every path of a nested record, parents before their children.

    Sequences are leaves: their elements get no paths of their own.
    """
    delimiter = delimiter or get_config().path_delimiter
    paths: list[str] = []
    for key, value in obj.items():
        current = _join(prefix, key, delimiter)
        paths.append(current)
        if isinstance(value, Mapping):
            paths.extend(get_paths(value, current, delimiter=delimiter))
    return paths


def flatten(obj: Mapping, prefix: str = "", *, delimiter: Optional[str] = None) -> dict[str, Any]:
    """
    Nested record → single-level dict keyed by full paths.

        flatten({"a": {"b": 1, "c": [2]}})  → {"a.b": 1, "a.c": [2]}

    Empty nested records hold no leaf and vanish from the result.
    """
    delimiter = delimiter or get_config().path_delimiter
    result: dict[str, Any] = {}
    for key, value in obj.items():
        current = _join(prefix, key, delimiter)
        if isinstance(value, Mapping):
            result.update(flatten(value, current, delimiter=delimiter))
        else:
            result[current] = value
    return result


def unflatten(flat: Mapping[str, Any], *, delimiter: Optional[str] = None) -> dict[str, Any]:
    """Inverse of flatten: rebuild the nested record with set_path."""
    result: dict[str, Any] = {}
    for key, value in flat.items():
        set_path(result, key, value, delimiter=delimiter)
    return result


def pick(obj: Mapping, *keys: Any) -> dict:
    """New dict holding only `keys` (those present in `obj`)."""
    return {key: obj[key] for key in keys if key in obj}


def omit(obj: Mapping, *keys: Any) -> dict:
    """New dict holding everything but `keys`."""
    excluded = set(keys)
    return {key: value for key, value in obj.items() if key not in excluded}
