"""
pull-based collections.

a LazyCollection wraps exactly one source: a materialized mapping, a
zero-argument producer returning a fresh iterable on every call, or another
lazy collection. every iteration starts the source again, so a lazy
collection can be traversed any number of times. derived operations build a
new producer around the upstream one and pull one element at a time.
"""
from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator as IteratorABC, Mapping
from enum import Enum
from itertools import count as _count, islice

import numpy as np
import pandas as pd

from . import arr
from .collection import BaseCollection, Collection
from .errors import InvalidSourceError
from .extensions.sorting import SortFlag
from .operators import as_number
from .registry import extensible
from .types import *

logger = logging.getLogger(__name__)


class SourceKind(Enum):
    MATERIALIZED = "materialized"
    PRODUCER = "producer"
    NESTED = "nested"


def _requires_arguments(fn: Callable) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    return any(
        parameter.default is parameter.empty
        and parameter.kind not in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
        for parameter in signature.parameters.values()
    )


def _producer_pairs(producer: Producer) -> PairProducer:
    """adapt a user producer of values (or of a mapping) to a producer of pairs"""
    def pairs():
        produced = producer()
        if isinstance(produced, Mapping):
            yield from produced.items()
        else:
            yield from enumerate(produced)
    return pairs


def _range_bound(value: Any) -> Optional[Union[int, float]]:
    """numbers pass through; numeric strings become ints where they can"""
    number = as_number(value)
    if isinstance(value, str) and number is not None and number.is_integer():
        return int(number)
    return number


def _classify(source: Any) -> Tuple[SourceKind, PairProducer]:
    if isinstance(source, LazyCollection):
        return SourceKind.NESTED, source.items
    if isinstance(source, IteratorABC):
        # generators, iter(...), open files: they cannot be replayed
        raise InvalidSourceError(source)
    if callable(source) and not isinstance(source, type):
        if _requires_arguments(source):
            raise InvalidSourceError(source, "a lazy collection producer must be callable without arguments")
        return SourceKind.PRODUCER, _producer_pairs(source)
    if isinstance(source, (Collection, Mapping, list, tuple, pd.DataFrame, pd.Series, np.ndarray)) \
            or source is None or isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
        snapshot = arr.wrap(source)
        return SourceKind.MATERIALIZED, lambda: iter(snapshot.items())
    # other re-iterable containers (range, set, ...) are re-read on every pass
    return SourceKind.MATERIALIZED, lambda: enumerate(source)


@extensible
class LazyCollection(BaseCollection[T]):
    """a restartable, pull-based collection. nothing runs until it is iterated."""

    def __init__(self, source: Any = None):
        super().__init__()
        self._kind, self._pair_func = _classify(source)
        logger.debug("lazy collection over a %s source (%s)", self._kind.value, type(source).__name__)

    @classmethod
    def _from_pairs(cls, pair_func: PairProducer) -> 'LazyCollection[Any]':
        collection = cls()
        collection._kind, collection._pair_func = SourceKind.PRODUCER, pair_func
        return collection

    def _derive(self, pair_func: PairProducer) -> 'LazyCollection[Any]':
        return type(self)._from_pairs(pair_func)

    @property
    def source_kind(self) -> SourceKind:
        return self._kind

    # --- iteration ---

    def items(self) -> Iterator[Tuple[Key, T]]:
        """a fresh iterator over (key, value) pairs; the source is started again"""
        return iter(self._pair_func())

    def iterate(self) -> Iterator[T]:
        """a fresh iterator over the values"""
        return iter(self)

    # --- materialization ---

    def collect(self) -> Collection[T]:
        """pull everything into an eager collection"""
        return Collection._from_items(dict(self.items()))

    eager = collect

    def all(self) -> Union[List[T], Dict[Key, T]]:
        return self.collect().all()

    def lazy(self) -> 'LazyCollection[T]':
        return self

    def remember(self) -> 'LazyCollection[T]':
        """a lazy collection that pulls each upstream item once and replays it afterwards"""
        return self._derive(RememberedSource(self.items))

    # --- lazy slicing ---

    def slice(self, offset: int, length: Optional[int] = None,
              preserve_keys: bool = False) -> 'LazyCollection[T]':
        """
        lazy for non-negative arguments. negative ones need the end of the
        sequence, so they materialize the source when iterated.
        """
        if offset < 0 or (length is not None and length < 0):
            return self._derive(lambda: self.collect().slice(offset, length, preserve_keys).items())

        def sliced():
            stop = None if length is None else offset + length
            index = 0
            for key, value in islice(self.items(), offset, stop):
                if preserve_keys or not arr.is_int_key(key):
                    yield key, value
                else:
                    yield index, value
                    index += 1
        return self._derive(sliced)

    # --- eager-only operations, applied to a materialized copy ---

    def sort_by(self, criterion: Criterion, descending: bool = False,
                flags: SortFlag = SortFlag.REGULAR) -> Collection[T]:
        return self.collect().sort_by(criterion, descending, flags)

    def sort_by_desc(self, criterion: Criterion, flags: SortFlag = SortFlag.REGULAR) -> Collection[T]:
        return self.collect().sort_by_desc(criterion, flags)

    def then_by(self, criterion: Criterion, descending: bool = False,
                flags: SortFlag = SortFlag.REGULAR) -> Collection[T]:
        # a lazy collection never carries a sort chain
        return self.collect().then_by(criterion, descending, flags)

    def then_by_desc(self, criterion: Criterion, flags: SortFlag = SortFlag.REGULAR) -> Collection[T]:
        return self.collect().then_by_desc(criterion, flags)

    def sort(self, flags: SortFlag = SortFlag.REGULAR, descending: bool = False) -> Collection[T]:
        return self.collect().sort(flags, descending)

    def sort_desc(self, flags: SortFlag = SortFlag.REGULAR) -> Collection[T]:
        return self.collect().sort_desc(flags)

    # --- factories ---

    @classmethod
    def range(cls, start: Union[int, float, str], end: Union[int, float, str, None] = None,
              step: Union[int, float] = 1) -> 'LazyCollection':
        """
        an inclusive arithmetic range, produced one step per pull. the direction
        follows start and end; the sign of step is ignored. without an end the
        range counts up forever. single letters give a letter range.

            >>> LazyCollection.range(1, 5).all()
            [1, 2, 3, 4, 5]
            >>> LazyCollection.range(10, step=5).take(3).all()
            [10, 15, 20]
        """
        if step == 0:
            raise ValueError("range step cannot be zero")
        step = abs(step)

        letters = isinstance(start, str) and len(start) == 1 and not start.isdigit() \
            and (end is None or (isinstance(end, str) and len(end) == 1))
        if letters:
            first, last = ord(start), (None if end is None else ord(end))
            if isinstance(step, float):
                raise ValueError("letter ranges need an integer step")
            convert = chr
        else:
            first, last = _range_bound(start), (None if end is None else _range_bound(end))
            if first is None or (end is not None and last is None):
                raise ValueError(f"cannot build a range from {start!r} to {end!r}")
            convert = lambda value: value

        direction = -1 if last is not None and first > last else 1

        def produce():
            # index based, so float steps do not accumulate rounding error
            for index in _count():
                value = first + direction * index * step
                if last is not None and (value > last if direction > 0 else value < last):
                    return
                yield convert(value)

        return cls(produce)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(<{self._kind.value} source>)"
