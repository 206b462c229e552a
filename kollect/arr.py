"""
primitive helpers over the ordered-mapping shape used by every collection.

a collection stores its items in a plain dict whose keys are ints or strs.
these functions take and return such dicts (or plain lists) and never hold
state of their own. they know nothing about sorting, querying or laziness.
"""
from __future__ import annotations

import inspect
import random
from collections.abc import Mapping
from functools import lru_cache

import numpy as np
import pandas as pd

from .types import *

INFINITE_DEPTH = float('inf')


# --- callback arity ---

def _positional_capacity(fn: Callable) -> float:
    """how many positional arguments fn will take. unknown signatures count as one."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1
    capacity = 0
    for parameter in signature.parameters.values():
        if parameter.kind == parameter.VAR_POSITIONAL:
            return INFINITE_DEPTH
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            capacity += 1
    return capacity


_cached_capacity = lru_cache(maxsize=1024)(_positional_capacity)


def positional_capacity(fn: Callable) -> float:
    try:
        return _cached_capacity(fn)
    except TypeError:
        # unhashable callable, skip the cache
        return _positional_capacity(fn)


def invoke(fn: Callable, *args: Any, minimum: int = 1) -> Any:
    """
    call fn with as many of args as it accepts, but at least `minimum`.
    lets callbacks be written as `lambda v: ...` or `lambda v, k: ...`.
    """
    capacity = max(positional_capacity(fn), minimum)
    if capacity >= len(args):
        return fn(*args)
    return fn(*args[:int(capacity)])


def map_items(fn: Callable, items: Dict[Key, Any]) -> Dict[Key, Any]:
    """apply fn(value[, key]) to every item, keeping keys"""
    return {key: invoke(fn, value, key) for key, value in items.items()}


def filter_items(items: Dict[Key, Any], fn: Optional[Callable] = None) -> Dict[Key, Any]:
    """keep items passing fn(value[, key]); without fn, keep truthy values"""
    if fn is None:
        return {key: value for key, value in items.items() if value}
    return {key: value for key, value in items.items() if invoke(fn, value, key)}


# --- shape helpers ---

def is_int_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def is_nested(value: Any) -> bool:
    """true for values a path or flatten can descend into"""
    from .collection import Collection
    return isinstance(value, (Mapping, list, tuple, Collection))


def as_items(value: Any) -> Dict[Key, Any]:
    """view a nested value as an ordered mapping"""
    from .collection import Collection
    if isinstance(value, Collection):
        return value._items
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return dict(enumerate(value))
    return {0: value}


def is_list_shaped(items: Mapping) -> bool:
    """true when keys are exactly 0..n-1 in order"""
    return all(is_int_key(key) and key == index for index, key in enumerate(items))


def next_index(items: Mapping) -> int:
    int_keys = [key for key in items if is_int_key(key)]
    return max(int_keys) + 1 if int_keys else 0


def reindex(values: Iterable[Any]) -> Dict[int, Any]:
    return dict(enumerate(values))


def export(items: Mapping) -> Union[List[Any], Dict[Key, Any]]:
    """plain copy of items: a list when list-shaped, else a dict"""
    return list(items.values()) if is_list_shaped(items) else dict(items)


def wrap(value: Any) -> Dict[Key, Any]:
    """
    normalize any supported source into a fresh ordered mapping.
    single-shot iterators are consumed here, which is fine for eager collections.
    """
    from .collection import Collection
    from .lazy import LazyCollection

    if value is None:
        return {}
    if isinstance(value, Collection):
        return dict(value._items)
    if isinstance(value, LazyCollection):
        return dict(value.items())
    if isinstance(value, pd.DataFrame):
        return reindex(value.to_dict(orient='records'))
    if isinstance(value, pd.Series):
        return dict(value.items())
    if isinstance(value, np.ndarray):
        return reindex(value.tolist())
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (str, bytes)):
        return {0: value}
    if hasattr(value, 'to_dict') and callable(value.to_dict):
        return dict(value.to_dict())
    if hasattr(value, 'to_list') and callable(value.to_list):
        return reindex(value.to_list())
    if isinstance(value, Iterable):
        return reindex(value)
    return {0: value}


# --- bulk operations ---

def merge(*sources: Mapping) -> Dict[Key, Any]:
    """later string keys overwrite earlier ones; int keys are appended and renumbered"""
    result = {}
    counter = 0
    for source in sources:
        for key, value in source.items():
            if is_int_key(key):
                result[counter] = value
                counter += 1
            else:
                result[key] = value
    return result


def _merge_values(existing: Any, incoming: Any) -> Any:
    merged = merge_recursive(as_items(existing), as_items(incoming))
    return export(merged)


def merge_recursive(*sources: Mapping) -> Dict[Key, Any]:
    """like merge, but colliding string keys are combined instead of overwritten"""
    result = {}
    counter = 0
    for source in sources:
        for key, value in source.items():
            if is_int_key(key):
                result[counter] = value
                counter += 1
            elif key in result:
                result[key] = _merge_values(result[key], value)
            else:
                result[key] = value
    return result


def replace_recursive(items: Mapping, replacements: Mapping) -> Dict[Key, Any]:
    result = dict(items)
    for key, value in replacements.items():
        current = result.get(key, MISSING)
        if current is not MISSING and is_nested(current) and is_nested(value):
            result[key] = export(replace_recursive(as_items(current), as_items(value)))
        else:
            result[key] = value
    return result


def diff(items: Mapping, *others: Iterable[Any]) -> Dict[Key, Any]:
    """items whose value appears in none of the others, keys preserved"""
    excluded = [value for other in others for value in as_items(other).values()]
    return {key: value for key, value in items.items() if value not in excluded}


def diff_assoc(items: Mapping, *others: Iterable[Any]) -> Dict[Key, Any]:
    """items whose key/value pair appears in none of the others"""
    others = [as_items(other) for other in others]
    def present(key, value):
        return any(key in other and other[key] == value for other in others)
    return {key: value for key, value in items.items() if not present(key, value)}


def diff_keys(items: Mapping, *others: Iterable[Any]) -> Dict[Key, Any]:
    others = [as_items(other) for other in others]
    return {key: value for key, value in items.items() if not any(key in other for other in others)}


def flatten(values: Iterable[Any], depth: float = INFINITE_DEPTH) -> List[Any]:
    """flatten nested containers into one list, descending at most `depth` levels"""
    if depth <= 0:
        return list(values)
    result = []
    for value in values:
        if is_nested(value):
            result.extend(flatten(as_items(value).values(), depth - 1))
        else:
            result.append(value)
    return result


def collapse(values: Iterable[Any]) -> List[Any]:
    """concatenate the values of every nested container, dropping scalars"""
    result = []
    for value in values:
        if is_nested(value):
            result.extend(as_items(value).values())
    return result


def combine(keys: Iterable[Key], values: Iterable[Any]) -> Dict[Key, Any]:
    keys, values = list(keys), list(values)
    if len(keys) != len(values):
        raise ValueError("both parameters should have an equal number of elements")
    return dict(zip(keys, values))


def pad(items: Mapping, size: int, value: Any) -> Dict[Key, Any]:
    """pad to abs(size) items; negative sizes pad on the left"""
    missing = abs(size) - len(items)
    if missing <= 0:
        return dict(items)
    filler = reindex([value] * missing)
    return merge(items, filler) if size > 0 else merge(filler, items)


def flip(items: Mapping) -> Dict[Key, Any]:
    """swap keys and values. values that cannot be keys are skipped"""
    return {value: key for key, value in items.items() if isinstance(value, (int, str))}


def slice_items(items: Mapping, start: int, length: Optional[int] = None,
                preserve_keys: bool = False) -> Dict[Key, Any]:
    pairs = list(items.items())
    total = len(pairs)
    begin = max(total + start, 0) if start < 0 else min(start, total)
    if length is None:
        end = total
    elif length < 0:
        end = max(total + length, begin)
    else:
        end = min(begin + length, total)
    chosen = pairs[begin:end]
    if preserve_keys:
        return dict(chosen)
    # string keys survive, int keys are renumbered from zero
    return merge(dict(chosen))


def shuffle(values: Iterable[Any], seed: Optional[int] = None) -> List[Any]:
    shuffled = list(values)
    random.Random(seed).shuffle(shuffled)
    return shuffled


def random_keys(items: Mapping, num: int, seed: Optional[int] = None) -> List[Key]:
    """pick `num` distinct keys, returned in collection order"""
    if num > len(items):
        raise ValueError(f"you requested {num} items, but there are only {len(items)} items available.")
    chosen = set(random.Random(seed).sample(range(len(items)), num))
    return [key for index, key in enumerate(items) if index in chosen]


def count_values(values: Iterable[Any]) -> List[Tuple[Any, int]]:
    """
    (value, occurrences) pairs in first-seen order. hashable values are
    counted like dict keys; unhashable ones (records, lists) by ==.
    """
    positions: Dict[Any, int] = {}
    counts: List[List[Any]] = []
    for value in values:
        try:
            index = positions.setdefault(value, len(counts))
        except TypeError:
            index = next((i for i, entry in enumerate(counts) if is_unhashable(entry[0]) and entry[0] == value),
                         len(counts))
        if index == len(counts):
            counts.append([value, 0])
        counts[index][1] += 1
    return [(value, count) for value, count in counts]


def is_unhashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return True
    return False
