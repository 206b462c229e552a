"""
dot-notation addressing into nested structures.

a path such as "user.address.city" is split into segments and walked one
level at a time through dicts, lists, tuples and collections. lookups report
whether the path was found through PathLookup.found rather than through a
sentinel value, so a found value that happens to equal the input is never
mistaken for a miss.
"""
from __future__ import annotations

from collections.abc import Mapping

from . import arr
from .types import *


def split_path(path: Path) -> Tuple[Key, ...]:
    """break a path into its raw segments. there is no escape for literal dots."""
    if arr.is_int_key(path):
        return (path,)
    if isinstance(path, str):
        return tuple(path.split('.'))
    raise TypeError(f"path must be a str or int, got {type(path).__name__}")


def _as_index(segment: Key) -> Optional[int]:
    if arr.is_int_key(segment):
        return segment
    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _step(node: Any, segment: Key) -> PathLookup:
    """descend a single level"""
    from .collection import Collection
    if isinstance(node, Collection):
        node = node._items

    if isinstance(node, Mapping):
        if segment in node:
            return PathLookup(node[segment], True)
        index = _as_index(segment)
        if index is not None and index in node:
            return PathLookup(node[index], True)
        return PathLookup(MISSING, False)

    if isinstance(node, (list, tuple)):
        index = _as_index(segment)
        if index is not None and 0 <= index < len(node):
            return PathLookup(node[index], True)

    return PathLookup(MISSING, False)


def resolve_segments(structure: Any, segments: Tuple[Key, ...]) -> PathLookup:
    """walk pre-split segments. see resolve()."""
    node = structure
    last = len(segments) - 1
    for position, segment in enumerate(segments):
        lookup = _step(node, segment)
        if not lookup.found:
            return lookup
        if position < last and not arr.is_nested(lookup.value):
            # partial match: the path runs into a scalar before its last segment.
            # the scalar is returned as found rather than reported as a miss.
            return lookup
        node = lookup.value
    return PathLookup(node, True)


def resolve(structure: Any, path: Path) -> PathLookup:
    """
    resolve a dotted path against a nested structure.

    returns PathLookup(value, found). found is false as soon as a segment is
    absent at its level. when a non-final segment lands on a value that cannot
    be descended into, that value is returned with found=True.

        >>> resolve({'a': {'b': 1}}, 'a.b')
        PathLookup(value=1, found=True)
        >>> resolve({'a': {'b': 1}}, 'a.c').found
        False
    """
    return resolve_segments(structure, split_path(path))


def get_path(structure: Any, path: Path, default: Any = None) -> Any:
    """the value at path, or default (called if callable) when absent"""
    lookup = resolve(structure, path)
    if lookup.found:
        return lookup.value
    return default() if callable(default) else default


def has_path(structure: Any, path: Path) -> bool:
    return resolve(structure, path).found


def value_retriever(criterion: Optional[Criterion], missing: Any = MISSING) -> Callable[[Any, Key], Any]:
    """
    turn "a path or a callable" into an extractor taking (value, key).
    paths that do not resolve produce `missing`; None selects the value itself.
    """
    if criterion is None:
        return lambda value, key=None: value
    if callable(criterion):
        return lambda value, key=None: arr.invoke(criterion, value, key)

    segments = split_path(criterion)

    def retrieve(value: Any, key: Key = None) -> Any:
        lookup = resolve_segments(value, segments)
        return lookup.value if lookup.found else missing

    return retrieve
