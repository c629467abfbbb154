"""Structural paths: formatting, traversal and the rebuild setter.

A structural path is a tuple of segments; ``int`` segments index arrays
and ``str`` segments name object keys. The empty tuple is the root.

Example:
    >>> from jsonsplice.path import format_path, get_value_at_path
    >>> format_path(("items", 2, "name"))
    '$["items"][2]["name"]'
    >>> get_value_at_path({"items": [{"name": "x"}]}, ("items", 0, "name"))
    'x'

Thread Safety:
All functions are pure except ``set_value_at_path``, which mutates the
container it is given (callers pass a private deep copy).

"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Final, TypeAlias

from jsonsplice.errors import PathError

Segment: TypeAlias = str | int
JsonPath: TypeAlias = tuple[Segment, ...]


class _Missing:
    """Marker for "no value at this path" (distinct from JSON null)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def is_index(segment: object) -> bool:
    """True for array-index segments (``bool`` is not an index)."""
    return isinstance(segment, int) and not isinstance(segment, bool)


def normalize_path(path: Sequence[Segment] | None) -> JsonPath:
    """Return ``path`` as a tuple; ``None`` means the root."""
    if not path:
        return ()
    return tuple(path)


def format_path(path: Sequence[Segment] | None) -> str:
    """Render a path in bracket notation for display.

    Index segments are written bare, key segments as JSON strings.

    Example:
        >>> format_path(None)
        '$'
        >>> format_path(["a", 0, "b"])
        '$["a"][0]["b"]'

    """
    if not path:
        return "$"
    parts = [str(seg) if is_index(seg) else json.dumps(str(seg), ensure_ascii=False) for seg in path]
    return "$[" + "][".join(parts) + "]"


def get_value_at_path(value: Any, path: Sequence[Segment] | None) -> Any:
    """Follow ``path`` through ``value`` and return what is there.

    Never raises. Returns ``MISSING`` as soon as a segment cannot be
    followed: a null or scalar intermediate, an absent key, an index out
    of range, or a key segment on an array. An index segment on an object
    looks up its decimal string key.

    """
    current = value
    for segment in normalize_path(path):
        if isinstance(current, dict):
            key = str(segment) if is_index(segment) else segment
            if key not in current:
                return MISSING
            current = current[key]
        elif isinstance(current, list):
            if not is_index(segment) or not 0 <= segment < len(current):
                return MISSING
            current = current[segment]
        else:
            return MISSING
    return current


def set_value_at_path(root: Any, path: Sequence[Segment] | None, value: Any) -> Any:
    """Write ``value`` at ``path`` inside ``root`` and return the new root.

    Mutates ``root`` in place. Missing or null intermediates become empty
    objects whatever the next segment is. An index past the end of an
    array pads the array with nulls. An index on an object writes the
    decimal string key.

    Raises:
        PathError: If a segment is neither ``str`` nor ``int``, a key
            segment meets an array, or any segment meets a scalar.
            ``root`` is left untouched in that case.

    """
    segments = normalize_path(path)
    if not segments:
        return value

    _check_writable(root, segments)

    target = root
    for segment in segments[:-1]:
        slot = _slot(target, segment)
        child = _read(target, slot)
        if not isinstance(child, (dict, list)):
            child = {}
            _write(target, slot, child)
        target = child

    _write(target, _slot(target, segments[-1]), value)
    return root


def _check_writable(root: Any, segments: JsonPath) -> None:
    """Validate the whole walk before anything is mutated."""
    target = root
    for index, segment in enumerate(segments):
        if not isinstance(segment, str) and not is_index(segment):
            raise PathError(segments, index, f"segment {segment!r} is neither a key nor an index")
        if isinstance(target, list) and not is_index(segment):
            raise PathError(segments, index, f"key {segment!r} cannot address an array")
        if isinstance(target, list) and segment < 0:
            raise PathError(segments, index, f"negative index {segment}")
        if not isinstance(target, (dict, list)):
            raise PathError(segments, index, f"cannot descend into {type(target).__name__}")
        child = _read(target, _slot(target, segment))
        target = {} if child is None else child


def _slot(target: dict | list, segment: Segment) -> Segment:
    if isinstance(target, dict) and is_index(segment):
        return str(segment)
    return segment


def _read(target: dict | list, slot: Segment) -> Any:
    if isinstance(target, dict):
        return target.get(slot)
    if 0 <= slot < len(target):
        return target[slot]
    return None


def _write(target: dict | list, slot: Segment, value: Any) -> None:
    if isinstance(target, dict):
        target[slot] = value
        return
    if slot >= len(target):
        target.extend([None] * (slot - len(target) + 1))
    target[slot] = value
