from __future__ import annotations
import json as _json
import typing
from functools import cmp_to_key
import numpy as np
from .. import arr
from ..operators import as_number, spaceship
from ..paths import value_retriever
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import BaseCollection, Collection


class StatsAccessor(Generic[T]):
    """
    aggregates. every method takes nothing (use the raw values), a dotted path
    or a callback(value[, key]). items where a path does not resolve are left out.
    lazy collections are consumed in full, so never call these on an infinite source.
    """

    def __init__(self, collection_instance: 'BaseCollection[T]'):
        self._collection = collection_instance

    def _extract(self, key: Optional[Criterion] = None) -> List[Any]:
        """helper to pull the values an aggregate works on"""
        if key is None:
            return list(self._collection)
        retrieve = value_retriever(key)
        values = (retrieve(value, item_key) for item_key, value in self._collection.items())
        return [value for value in values if value is not MISSING]

    def _numbers(self, key: Optional[Criterion] = None) -> List[Union[int, float]]:
        """numeric values only; numeric strings are converted, everything else is skipped"""
        numbers = (as_number(value) for value in self._extract(key))
        return [number for number in numbers if number is not None]

    def sum(self, key: Optional[Criterion] = None) -> Union[int, float]:
        """calc sum"""
        values = self._numbers(key)
        if not values:
            return 0
        if all(isinstance(value, int) for value in values):
            # python ints do not overflow; int64 would wrap silently
            return sum(values)
        result = np.sum(values)
        return result.item() if hasattr(result, 'item') else result

    def avg(self, key: Optional[Criterion] = None) -> Optional[float]:
        """calc average; None for an empty selection"""
        values = self._numbers(key)
        if not values:
            return None
        return float(np.mean(values))

    average = avg

    def min(self, key: Optional[Criterion] = None) -> Any:
        """smallest non-None value under loose comparison"""
        values = [value for value in self._extract(key) if value is not None]
        return min(values, key=cmp_to_key(spaceship)) if values else None

    def max(self, key: Optional[Criterion] = None) -> Any:
        values = [value for value in self._extract(key) if value is not None]
        return max(values, key=cmp_to_key(spaceship)) if values else None

    def median(self, key: Optional[Criterion] = None) -> Optional[Union[int, float]]:
        """middle value; the mean of the two middle values for an even count"""
        sorted_values = sorted(self._numbers(key))
        n = len(sorted_values)
        if n == 0: return None
        mid = n // 2
        return (sorted_values[mid] + sorted_values[mid - 1]) / 2 if n % 2 == 0 else sorted_values[mid]

    def mode(self, key: Optional[Criterion] = None) -> Optional[List[Any]]:
        """every value tied for the highest frequency, in first-seen order"""
        counts = arr.count_values(self._extract(key))
        if not counts: return None
        top = max(count for _, count in counts)
        return [value for value, count in counts if count == top]

    def count(self, key: Optional[Criterion] = None) -> int:
        """
        count(): number of items. count(callback): items passing callback.
        count(path): items where the path resolves.
        """
        if key is None:
            return sum(1 for _ in self._collection.items())
        if callable(key):
            return sum(1 for item_key, value in self._collection.items() if arr.invoke(key, value, item_key))
        return len(self._extract(key))

    def count_by(self, key: Optional[Criterion] = None) -> 'BaseCollection[int]':
        """
        occurrences of each value (or path value / callback result), in first-seen
        order. unhashable values such as records are keyed by their json text.
        """
        def counted():
            for value, count in arr.count_values(self._extract(key)):
                yield (_json.dumps(value, sort_keys=True, default=str) if arr.is_unhashable(value) else value), count
        return self._collection._derive(counted)
