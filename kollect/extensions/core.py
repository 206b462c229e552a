from __future__ import annotations
import typing
from .. import arr
from ..paths import resolve
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _CoreOperations(Generic[T]):
    """key access and the in-place operations. mutators return the collection for chaining."""

    def get(self: 'Collection[T]', key: Path, default: Any = None) -> Any:
        """
        the value at key. dotted keys that are not literal keys are resolved as
        paths into nested values. default is returned (called, if callable) when absent.
        """
        if key in self._items:
            return self._items[key]
        if isinstance(key, str) and '.' in key:
            lookup = resolve(self._items, key)
            if lookup.found:
                return lookup.value
        return default() if callable(default) else default

    def _has_key(self: 'Collection[T]', key: Path) -> bool:
        if key in self._items:
            return True
        return isinstance(key, str) and '.' in key and resolve(self._items, key).found

    def has(self: 'Collection[T]', *keys: Path) -> bool:
        """true when every key exists"""
        return bool(keys) and all(self._has_key(key) for key in keys)

    def has_any(self: 'Collection[T]', *keys: Path) -> bool:
        return any(self._has_key(key) for key in keys)

    def put(self: 'Collection[T]', key: Key, value: T) -> 'Collection[T]':
        self._items[key] = value
        return self

    def set(self: 'Collection[T]', key: Key, value: T) -> 'Collection[T]':
        return self.put(key, value)

    def push(self: 'Collection[T]', *values: T) -> 'Collection[T]':
        """append values under the next free integer keys"""
        index = arr.next_index(self._items)
        for value in values:
            self._items[index] = value
            index += 1
        return self

    def prepend(self: 'Collection[T]', value: T, key: Optional[Key] = None) -> 'Collection[T]':
        """put value first. without a key, integer keys are renumbered from zero."""
        if key is None:
            self._items = arr.merge({0: value}, self._items)
        else:
            rest = {k: v for k, v in self._items.items() if k != key}
            self._items = {key: value, **rest}
        return self

    def pop(self: 'Collection[T]', count: int = 1) -> Any:
        """
        remove and return the last item. with count > 1, a collection of the
        last `count` items is returned, most recent first.
        """
        if count == 1:
            return self._items.popitem()[1] if self._items else None
        if not self._items:
            return self._new({})
        popped = [self._items.popitem()[1] for _ in range(min(count, len(self._items)))]
        return self._new(arr.reindex(popped))

    def shift(self: 'Collection[T]', count: int = 1) -> Any:
        """
        remove and return the first item; remaining integer keys are renumbered.
        with count > 1, a collection of the first `count` items is returned.
        """
        if count == 1 and not self._items:
            return None
        if not self._items:
            return self._new({})
        pairs = list(self._items.items())
        taken = min(count, len(pairs))
        self._items = arr.merge(dict(pairs[taken:]))
        shifted = [value for _, value in pairs[:taken]]
        return shifted[0] if count == 1 else self._new(arr.reindex(shifted))

    def pull(self: 'Collection[T]', key: Key, default: Any = None) -> Any:
        """remove key and return its value"""
        value = self._items.pop(key, MISSING)
        if value is MISSING:
            return default() if callable(default) else default
        return value

    def forget(self: 'Collection[T]', *keys: Key) -> 'Collection[T]':
        """remove keys in place"""
        for key in keys:
            self._items.pop(key, None)
        return self

    def except_(self: 'Collection[T]', *keys: Key) -> 'Collection[T]':
        """a copy without the given keys"""
        excluded = set(keys)
        return self._new({k: v for k, v in self._items.items() if k not in excluded})

    def only(self: 'Collection[T]', *keys: Key) -> 'Collection[T]':
        """a copy with just the given keys, in collection order"""
        wanted = set(keys)
        return self._new({k: v for k, v in self._items.items() if k in wanted})

    def insert(self: 'Collection[T]', position: int, value: T) -> 'Collection[T]':
        """insert value before the item at position; integer keys are renumbered"""
        pairs = list(self._items.items())
        position = max(len(pairs) + position, 0) if position < 0 else min(position, len(pairs))
        self._items = arr.merge(dict(pairs[:position]), {0: value}, dict(pairs[position:]))
        return self

    def remove(self: 'Collection[T]', value: Any, strict: bool = False) -> 'Collection[T]':
        """remove the first item equal to value (or passing it, if callable)"""
        key = self.search(value, strict)
        if key is not None:
            del self._items[key]
        return self

    def transform(self: 'Collection[T]', callback: Selector) -> 'Collection[Any]':
        """map in place"""
        self._items = arr.map_items(callback, self._items)
        return self
