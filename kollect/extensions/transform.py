from __future__ import annotations
import typing
from collections.abc import Hashable
from .. import arr
from ..paths import value_retriever
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _TransformOperations(Generic[T]):
    def partition(self: 'Collection[T]', callback: Predicate) -> 'Collection[Collection[T]]':
        """
        split into [passed, failed] in a single pass. each branch keeps the
        original relative order and is re-keyed from zero.
        """
        passed, failed = [], []
        for key, value in self._items.items():
            (passed if arr.invoke(callback, value, key) else failed).append(value)
        return self._new({0: self._new(arr.reindex(passed)), 1: self._new(arr.reindex(failed))})

    def flatten(self: 'Collection[T]', depth: float = arr.INFINITE_DEPTH) -> 'Collection[Any]':
        """flatten nested dicts, lists and collections into a single level of values"""
        return self._new(arr.reindex(arr.flatten(self._items.values(), depth)))

    def collapse(self: 'Collection[T]') -> 'Collection[Any]':
        """join a collection of lists into one flat collection"""
        return self._new(arr.reindex(arr.collapse(self._items.values())))

    def group_by(self: 'Collection[T]', *keys: Criterion, preserve_keys: bool = False) -> 'Collection[Collection[T]]':
        """
        group values by the value at a path or by a callback's result. more than
        one criterion nests the groups. a callback returning a list puts the item
        in several groups; items missing the path are grouped under None.
        """
        if not keys:
            raise TypeError("group_by requires at least one key")
        retrieve = value_retriever(keys[0], missing=None)
        groups: Dict[Hashable, Dict[Key, T]] = {}
        for key, value in self._items.items():
            group_keys = retrieve(value, key)
            if not isinstance(group_keys, (list, tuple)):
                group_keys = [group_keys]
            for group_key in group_keys:
                bucket = groups.setdefault(group_key, {})
                bucket[key if preserve_keys else len(bucket)] = value

        grouped = {group_key: self._new(bucket) for group_key, bucket in groups.items()}
        if len(keys) > 1:
            grouped = {group_key: group.group_by(*keys[1:], preserve_keys=preserve_keys)
                       for group_key, group in grouped.items()}
        return self._new(grouped)

    def key_by(self: 'Collection[T]', key: Criterion) -> 'Collection[T]':
        """re-key values by a path or callback. later duplicates win."""
        retrieve = value_retriever(key, missing=None)
        return self._new({retrieve(value, item_key): value for item_key, value in self._items.items()})

    def pluck(self: 'Collection[T]', value: Path, key: Optional[Path] = None) -> 'Collection[Any]':
        """
        the values at a path, optionally keyed by the value at another path.
        items where a path does not resolve are skipped.
        """
        get_value = value_retriever(value)
        if key is None:
            plucked = (get_value(item) for item in self._items.values())
            return self._new(arr.reindex(v for v in plucked if v is not MISSING))
        get_key = value_retriever(key)
        result = {}
        for item in self._items.values():
            item_value, item_key = get_value(item), get_key(item)
            if item_value is not MISSING and item_key is not MISSING:
                result[item_key if isinstance(item_key, (int, str)) else str(item_key)] = item_value
        return self._new(result)

    def chunk_while(self: 'Collection[T]', callback: Callable[..., bool]) -> 'Collection[Collection[T]]':
        """
        split into runs of consecutive items. a new run starts whenever
        callback(value, key, current_run) is falsy. keys are preserved in runs.
        """
        chunks: List[Dict[Key, T]] = []
        for key, value in self._items.items():
            if chunks and arr.invoke(callback, value, key, self._new(chunks[-1])):
                chunks[-1][key] = value
            else:
                chunks.append({key: value})
        return self._new(arr.reindex(self._new(chunk) for chunk in chunks))
