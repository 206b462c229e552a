from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Key = Union[int, str]
Path = Union[int, str]
Predicate = Callable[..., bool]
Selector = Callable[..., Any]
Criterion = Union[Path, Callable[..., Any]]
Producer = Callable[[], Iterable[Any]]
PairProducer = Callable[[], Iterator[Tuple[Key, Any]]]
SortCriterion = Callable[[Any, Key], Any]


class _Missing:
    """marker for a value that could not be found. falsy, and unique per process."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


class PathLookup(Generic[T]):
    """outcome of resolving a dotted path: the value plus an explicit found flag"""

    __slots__ = ('value', 'found')

    def __init__(self, value: T, found: bool):
        self.value = value
        self.found = found

    def __iter__(self) -> Iterator[Any]:
        # supports `value, found = resolve(...)`
        yield self.value
        yield self.found

    def __bool__(self) -> bool:
        return self.found

    def __eq__(self, other) -> bool:
        if isinstance(other, PathLookup):
            return self.found == other.found and self.value == other.value
        if isinstance(other, tuple) and len(other) == 2:
            return (self.value, self.found) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"PathLookup(value={self.value!r}, found={self.found})"


class RememberedSource(Generic[T]):
    """
    caches pairs pulled from a producer so later iterations replay them.
    the upstream producer is invoked at most once, and only advanced as far as
    any consumer has actually pulled.
    """

    def __init__(self, pair_func: PairProducer):
        self._source_func = pair_func
        self._cache: List[Tuple[Key, T]] = []
        self._source_iterator: Optional[Iterator[Tuple[Key, T]]] = None
        self._is_fully_enumerated = False

    def _get_iterator(self) -> Iterator[Tuple[Key, T]]:
        if self._source_iterator is None:
            self._source_iterator = iter(self._source_func())
        return self._source_iterator

    def _pull_one(self) -> bool:
        """append one more upstream pair to the cache. false once exhausted."""
        if self._is_fully_enumerated:
            return False
        try:
            self._cache.append(next(self._get_iterator()))
            return True
        except StopIteration:
            self._is_fully_enumerated = True
            self._source_iterator = None
            return False

    def __call__(self) -> Iterator[Tuple[Key, T]]:
        # index based so that two interleaved consumers share one cache
        index = 0
        while True:
            if index < len(self._cache):
                yield self._cache[index]
                index += 1
            elif not self._pull_one():
                return

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        state = "complete" if self._is_fully_enumerated else "partial"
        return f"RememberedSource(cached={len(self._cache)}, {state})"
