from __future__ import annotations
import typing
from collections import deque
from itertools import islice
from .. import arr
from ..operators import loose_equals, strict_equals, check_operator
from ..paths import value_retriever
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import BaseCollection, Collection

# marks "nothing matched" so that falsy elements still count as matches
_NO_MATCH = object()


class _EnumeratesValues(Generic[T]):
    """
    operations written purely against items() and _derive(), so they behave
    the same on eager and lazy collections. derived operations hand _derive a
    producer; the eager collection runs it at once, the lazy one on iteration.
    """

    # --- derived collections ---

    def filter(self: 'BaseCollection[T]', callback: Optional[Predicate] = None) -> 'BaseCollection[T]':
        """keep items passing callback(value[, key]), keys preserved. no callback keeps truthy values."""
        def filtered():
            for key, value in self.items():
                if (arr.invoke(callback, value, key) if callback else value):
                    yield key, value
        return self._derive(filtered)

    def reject(self: 'BaseCollection[T]', callback: Predicate) -> 'BaseCollection[T]':
        """the inverse of filter"""
        return self.filter(lambda value, key: not arr.invoke(callback, value, key))

    def map(self: 'BaseCollection[T]', callback: Selector) -> 'BaseCollection[Any]':
        """project each value with callback(value[, key]), keys preserved"""
        def mapped():
            for key, value in self.items():
                yield key, arr.invoke(callback, value, key)
        return self._derive(mapped)

    def map_spread(self: 'BaseCollection[T]', callback: Callable[..., Any]) -> 'BaseCollection[Any]':
        """map over nested chunks, passing each chunk's values (then the key) as arguments"""
        def mapped():
            for key, chunk in self.items():
                yield key, arr.invoke(callback, *arr.as_items(chunk).values(), key)
        return self._derive(mapped)

    def keys(self: 'BaseCollection[T]') -> 'BaseCollection[Key]':
        def key_pairs():
            for index, (key, _) in enumerate(self.items()):
                yield index, key
        return self._derive(key_pairs)

    def values(self: 'BaseCollection[T]') -> 'BaseCollection[T]':
        """the same values re-keyed 0..n-1"""
        def value_pairs():
            for index, (_, value) in enumerate(self.items()):
                yield index, value
        return self._derive(value_pairs)

    def take(self: 'BaseCollection[T]', limit: int) -> 'BaseCollection[T]':
        """the first `limit` items, or the last ones when limit is negative"""
        if limit < 0:
            def tail():
                yield from deque(self.items(), maxlen=-limit)
            return self._derive(tail)
        return self._derive(lambda: islice(self.items(), limit))

    def skip(self: 'BaseCollection[T]', count: int) -> 'BaseCollection[T]':
        return self._derive(lambda: islice(self.items(), max(count, 0), None))

    def take_while(self: 'BaseCollection[T]', callback: Predicate) -> 'BaseCollection[T]':
        def taken():
            for key, value in self.items():
                if not arr.invoke(callback, value, key):
                    return
                yield key, value
        return self._derive(taken)

    def take_until(self: 'BaseCollection[T]', callback: Predicate) -> 'BaseCollection[T]':
        return self.take_while(lambda value, key: not arr.invoke(callback, value, key))

    def skip_while(self: 'BaseCollection[T]', callback: Predicate) -> 'BaseCollection[T]':
        def skipped():
            iterator = self.items()
            for key, value in iterator:
                if not arr.invoke(callback, value, key):
                    yield key, value
                    break
            yield from iterator
        return self._derive(skipped)

    def nth(self: 'BaseCollection[T]', step: int, offset: int = 0) -> 'BaseCollection[T]':
        """every step-th value starting at offset, re-keyed 0..n-1"""
        if step < 1:
            raise ValueError("step must be a positive integer")
        def stepped():
            picked = islice(self.items(), max(offset, 0), None, step)
            for index, (_, value) in enumerate(picked):
                yield index, value
        return self._derive(stepped)

    def chunk(self: 'BaseCollection[T]', size: int) -> 'BaseCollection[Collection[T]]':
        """split into eager collections of `size` items. keys inside a chunk are preserved."""
        from ..collection import Collection
        def chunks():
            if size <= 0:
                return
            iterator = self.items()
            index = 0
            while True:
                batch = dict(islice(iterator, size))
                if not batch:
                    return
                yield index, Collection._from_items(batch)
                index += 1
        return self._derive(chunks)

    def unique(self: 'BaseCollection[T]', key: Optional[Criterion] = None,
               strict: bool = False) -> 'BaseCollection[T]':
        """
        drop items whose value (or value at path / callback result) was already seen.
        the first occurrence wins and keeps its key.
        """
        retrieve = value_retriever(key)
        equals = strict_equals if strict else loose_equals
        def distinct():
            seen = []
            for item_key, value in self.items():
                identity = retrieve(value, item_key)
                if any(equals(identity, previous) for previous in seen):
                    continue
                seen.append(identity)
                yield item_key, value
        return self._derive(distinct)

    def unique_strict(self: 'BaseCollection[T]', key: Optional[Criterion] = None) -> 'BaseCollection[T]':
        return self.unique(key, strict=True)

    def concat(self: 'BaseCollection[T]', source: Iterable[Any]) -> 'BaseCollection[T]':
        """append the values of source after the existing items, keyed like push()"""
        def concatenated():
            next_key = 0
            for key, value in self.items():
                if arr.is_int_key(key):
                    next_key = max(next_key, key + 1)
                yield key, value
            for value in arr.wrap(source).values():
                yield next_key, value
                next_key += 1
        return self._derive(concatenated)

    def tap_each(self: 'BaseCollection[T]', callback: Callable[..., Any]) -> 'BaseCollection[T]':
        """call callback(value[, key]) as each item passes through, without changing it"""
        def tapped():
            for key, value in self.items():
                arr.invoke(callback, value, key)
                yield key, value
        return self._derive(tapped)

    # --- terminal operations ---

    def reduce(self: 'BaseCollection[T]', callback: Callable[..., U], initial: U = None) -> U:
        """fold with callback(carry, value[, key])"""
        carry = initial
        for key, value in self.items():
            carry = arr.invoke(callback, carry, value, key, minimum=2)
        return carry

    def each(self: 'BaseCollection[T]', callback: Callable[..., Any]) -> 'BaseCollection[T]':
        """call callback(value[, key]) per item; returning False stops the loop"""
        for key, value in self.items():
            if arr.invoke(callback, value, key) is False:
                break
        return self

    def each_spread(self: 'BaseCollection[T]', callback: Callable[..., Any]) -> 'BaseCollection[T]':
        for key, chunk in self.items():
            if arr.invoke(callback, *arr.as_items(chunk).values(), key) is False:
                break
        return self

    def first(self: 'BaseCollection[T]', callback: Optional[Predicate] = None, default: Any = None) -> Any:
        """first value passing callback, or default (called if callable)"""
        for key, value in self.items():
            if callback is None or arr.invoke(callback, value, key):
                return value
        return default() if callable(default) else default

    def first_or_fail(self: 'BaseCollection[T]', callback: Optional[Predicate] = None) -> T:
        """like first, but raises ItemNotFoundError instead of returning a default"""
        from ..errors import ItemNotFoundError
        result = self.first(callback, _NO_MATCH)
        if result is _NO_MATCH:
            raise ItemNotFoundError()
        return result

    def last(self: 'BaseCollection[T]', callback: Optional[Predicate] = None, default: Any = None) -> Any:
        result = _NO_MATCH
        for key, value in self.items():
            if callback is None or arr.invoke(callback, value, key):
                result = value
        if result is _NO_MATCH:
            return default() if callable(default) else default
        return result

    def search(self: 'BaseCollection[T]', needle: Any, strict: bool = False) -> Optional[Key]:
        """key of the first value equal to needle (or passing it, if callable); None if absent"""
        equals = strict_equals if strict else loose_equals
        for key, value in self.items():
            if arr.invoke(needle, value, key) if callable(needle) else equals(value, needle):
                return key
        return None

    def contains(self: 'BaseCollection[T]', needle: Any, value: Any = MISSING, strict: bool = False) -> bool:
        """
        contains(value) tests membership; contains(callback) tests any item;
        contains(path, value) tests whether any item has value at path.
        """
        equals = strict_equals if strict else loose_equals
        if value is MISSING:
            if callable(needle):
                return any(arr.invoke(needle, item, key) for key, item in self.items())
            return any(equals(item, needle) for item in self)
        retrieve = value_retriever(needle)
        for key, item in self.items():
            child = retrieve(item, key)
            if child is not MISSING and equals(child, value):
                return True
        return False

    def contains_strict(self: 'BaseCollection[T]', needle: Any, value: Any = MISSING) -> bool:
        return self.contains(needle, value, strict=True)

    def every(self: 'BaseCollection[T]', key: Criterion, value: Any = None, operator: str = '=') -> bool:
        """
        every(callback) is true when every item passes. every(path, value, operator)
        compares the value at path; items where the path is absent are ignored.
        """
        if callable(key):
            return all(arr.invoke(key, item, item_key) for item_key, item in self.items())
        compare_with = check_operator(operator)
        retrieve = value_retriever(key)
        for item_key, item in self.items():
            child = retrieve(item, item_key)
            if child is not MISSING and not compare_with(child, value):
                return False
        return True

    def is_empty(self: 'BaseCollection[T]') -> bool:
        return next(self.items(), _NO_MATCH) is _NO_MATCH

    def is_not_empty(self: 'BaseCollection[T]') -> bool:
        return not self.is_empty()

    # --- flow helpers ---

    def pipe(self: 'BaseCollection[T]', callback: Callable[..., U]) -> U:
        """pass the collection to callback and return its result"""
        return callback(self)

    def when(self: 'BaseCollection[T]', condition: Any, callback: Callable[..., Any],
             default: Optional[Callable[..., Any]] = None) -> Any:
        """
        apply callback(self, condition) if condition is truthy, else default.
        the callback's result is returned, or the collection itself if it returns None.
        """
        if callable(condition):
            condition = condition(self)
        handler = callback if condition else default
        if handler is None:
            return self
        result = arr.invoke(handler, self, condition)
        return self if result is None else result

    def unless(self: 'BaseCollection[T]', condition: Any, callback: Callable[..., Any],
               default: Optional[Callable[..., Any]] = None) -> Any:
        if callable(condition):
            condition = condition(self)
        return self.when(not condition, callback, default)

    def when_empty(self: 'BaseCollection[T]', callback: Callable[..., Any],
                   default: Optional[Callable[..., Any]] = None) -> Any:
        return self.when(self.is_empty(), callback, default)

    def when_not_empty(self: 'BaseCollection[T]', callback: Callable[..., Any],
                       default: Optional[Callable[..., Any]] = None) -> Any:
        return self.when(self.is_not_empty(), callback, default)
