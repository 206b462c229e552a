from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from . import arr
from .registry import extensible, extend, bind_extension
from .types import *

# --- shared operations ---
from .extensions.enumerates import _EnumeratesValues
from .extensions.query import _QueryOperations

# --- eager-only operations ---
from .extensions.core import _CoreOperations
from .extensions.transform import _TransformOperations
from .extensions.combine import _CombineOperations
from .extensions.sorting import _SortOperations

# --- accessors ---
from .extensions.stats import StatsAccessor
from .extensions.terminal import TerminalAccessor

logger = logging.getLogger(__name__)

# --- abstract base class ---

@extensible
class BaseCollection(_EnumeratesValues[T], _QueryOperations[T], ABC):
    """behaviour shared by the eager and the lazy collection"""

    _reserved_attributes = ("stats", "to")

    def __init__(self):
        # --- initialize accessors ---
        self.stats = StatsAccessor(self)
        self.to = TerminalAccessor(self)

    @abstractmethod
    def items(self) -> Iterator[Tuple[Key, T]]:
        """a fresh iterator over (key, value) pairs"""
        pass

    @abstractmethod
    def _derive(self, pair_func: PairProducer) -> 'BaseCollection':
        """build a collection of the same kind from a producer of (key, value) pairs"""
        pass

    def __iter__(self) -> Iterator[T]:
        return (value for _, value in self.items())

    def __getattr__(self, name: str) -> Any:
        # only reached for attributes that do not exist: the extension dispatch point
        if name.startswith('_'):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return bind_extension(self, name)

    @classmethod
    def extend(cls, method_name: str, implementation: Callable[..., Any]) -> None:
        """register an extension method on this collection type"""
        extend(cls.__name__, method_name, implementation)

# --- eager collection ---

@extensible
class Collection(
    BaseCollection[T],
    _CoreOperations[T],
    _TransformOperations[T],
    _CombineOperations[T],
    _SortOperations[T]
):
    """an ordered, chainable key/value collection held fully in memory."""

    def __init__(self, items: Any = None):
        super().__init__()
        self._items: Dict[Key, T] = arr.wrap(items)
        self._sort_chain: Tuple[SortCriterion, ...] = ()

    # --- builders ---

    @classmethod
    def _from_items(cls, items: Dict[Key, T]) -> 'Collection[T]':
        """wrap an already built dict without copying it"""
        collection = cls()
        collection._items = items
        return collection

    @classmethod
    def _sorted(cls, items: Dict[Key, T], chain: Tuple[SortCriterion, ...]) -> 'Collection[T]':
        """a collection carrying the comparator chain that produced its order"""
        collection = cls._from_items(items)
        collection._sort_chain = tuple(chain)
        return collection

    def _new(self, items: Dict[Key, Any]) -> 'Collection[Any]':
        return type(self)._from_items(items)

    def _derive(self, pair_func: PairProducer) -> 'Collection[Any]':
        return self._new(dict(pair_func()))

    @classmethod
    def range(cls, start: Union[int, str], end: Union[int, str], step: int = 1) -> 'Collection':
        """materialized arithmetic (or letter) range, both ends inclusive"""
        from .lazy import LazyCollection
        if end is None:
            raise ValueError("an eager range needs an end; use LazyCollection.range for open ranges")
        return cls(LazyCollection.range(start, end, step))

    # --- state ---

    @property
    def sort_chain(self) -> Tuple[SortCriterion, ...]:
        """collated criteria applied by sort_by/then_by, in priority order"""
        return self._sort_chain

    def all(self) -> Union[List[T], Dict[Key, T]]:
        """the items as a list when keyed 0..n-1, otherwise as a dict"""
        return arr.export(self._items)

    def items(self) -> Iterator[Tuple[Key, T]]:
        return iter(list(self._items.items()))

    def lazy(self) -> 'LazyCollection[T]':
        """a lazy view over a snapshot of this collection"""
        from .lazy import LazyCollection
        return LazyCollection(self)

    # --- python protocols ---

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, key: Union[Key, slice]) -> Any:
        if isinstance(key, slice):
            return self._new(arr.reindex(list(self._items.values())[key]))
        return self._items[key]

    def __setitem__(self, key: Key, value: T) -> None:
        self._items[key] = value

    def __delitem__(self, key: Key) -> None:
        del self._items[key]

    def __contains__(self, value: Any) -> bool:
        return any(item == value for item in self._items.values())

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Collection):
            return list(self._items.items()) == list(other._items.items())
        if isinstance(other, list):
            return arr.is_list_shaped(self._items) and list(self._items.values()) == other
        if isinstance(other, dict):
            return list(self._items.items()) == list(other.items())
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.all()!r})"
