from __future__ import annotations
import typing
from .. import arr
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _CombineOperations(Generic[T]):
    """operations that join, cut or reorder whole collections. all return new collections."""

    def merge(self: 'Collection[T]', items: Any) -> 'Collection[T]':
        """string keys in items overwrite, integer keys are appended"""
        return self._new(arr.merge(self._items, arr.wrap(items)))

    def merge_recursive(self: 'Collection[T]', items: Any) -> 'Collection[T]':
        """like merge, but values under colliding string keys are merged into lists/dicts"""
        return self._new(arr.merge_recursive(self._items, arr.wrap(items)))

    def replace(self: 'Collection[T]', items: Any) -> 'Collection[T]':
        """like merge, but integer keys overwrite too"""
        return self._new({**self._items, **arr.wrap(items)})

    def replace_recursive(self: 'Collection[T]', items: Any) -> 'Collection[T]':
        return self._new(arr.replace_recursive(self._items, arr.wrap(items)))

    def diff(self: 'Collection[T]', *others: Any) -> 'Collection[T]':
        """values not present in any of the others"""
        return self._new(arr.diff(self._items, *others))

    def diff_assoc(self: 'Collection[T]', *others: Any) -> 'Collection[T]':
        return self._new(arr.diff_assoc(self._items, *others))

    def diff_keys(self: 'Collection[T]', *others: Any) -> 'Collection[T]':
        return self._new(arr.diff_keys(self._items, *others))

    def combine(self: 'Collection[T]', values: Any) -> 'Collection[Any]':
        """use this collection's values as keys for the given values"""
        return self._new(arr.combine(self._items.values(), arr.wrap(values).values()))

    def pad(self: 'Collection[T]', size: int, value: Any) -> 'Collection[T]':
        return self._new(arr.pad(self._items, size, value))

    def flip(self: 'Collection[T]') -> 'Collection[Key]':
        return self._new(arr.flip(self._items))

    def slice(self: 'Collection[T]', offset: int, length: Optional[int] = None,
              preserve_keys: bool = False) -> 'Collection[T]':
        """
        the items from offset on, at most `length` of them. negative offsets count
        from the end; a negative length stops that many items before the end.
        """
        return self._new(arr.slice_items(self._items, offset, length, preserve_keys))

    def reverse(self: 'Collection[T]', preserve_keys: bool = False) -> 'Collection[T]':
        reversed_items = dict(reversed(list(self._items.items())))
        return self._new(reversed_items if preserve_keys else arr.merge(reversed_items))

    def shuffle(self: 'Collection[T]', seed: Optional[int] = None) -> 'Collection[T]':
        return self._new(arr.reindex(arr.shuffle(self._items.values(), seed)))

    def random(self: 'Collection[T]', num: Optional[int] = None, preserve_keys: bool = False,
               seed: Optional[int] = None) -> Any:
        """
        one random value, or a collection of `num` distinct random values in
        collection order.
        """
        if num is None:
            if not self._items:
                raise ValueError("you requested 1 item, but there are only 0 items available.")
            key = arr.random_keys(self._items, 1, seed)[0]
            return self._items[key]
        chosen = {key: self._items[key] for key in arr.random_keys(self._items, num, seed)}
        return self._new(chosen if preserve_keys else arr.reindex(chosen.values()))
