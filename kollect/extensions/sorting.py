from __future__ import annotations
import logging
import re
import typing
from enum import IntFlag
from functools import cmp_to_key
from ..errors import UnchainedSortError
from ..operators import as_number, spaceship
from ..paths import value_retriever
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r'(\d+)')


class SortFlag(IntFlag):
    """how extracted sort keys are compared"""
    REGULAR = 0     # loose three-way comparison
    NUMERIC = 1     # coerce to numbers, non-numeric values count as 0
    STRING = 2      # compare str() forms
    NATURAL = 4     # 'item2' before 'item10'
    FLAG_CASE = 8   # with STRING or NATURAL: ignore case


def _numeric_key(value: Any) -> float:
    number = as_number(value)
    if number is None:
        return float(bool(value)) if isinstance(value, bool) else 0.0
    return float(number)


def _natural_key(text: str) -> Tuple[Tuple[int, Any], ...]:
    # digit runs compare as numbers, text runs as text; the tag keeps the two apart
    return tuple((0, int(part)) if part.isdigit() else (1, part)
                 for part in _DIGITS.split(text) if part)


def sort_key(flags: SortFlag = SortFlag.REGULAR) -> Callable[[Any], Any]:
    """a key function implementing the given collation"""
    fold = (lambda text: text.casefold()) if flags & SortFlag.FLAG_CASE else (lambda text: text)

    if flags & SortFlag.NATURAL:
        return lambda value: _natural_key(fold('' if value is None else str(value)))
    if flags & SortFlag.STRING:
        return lambda value: fold('' if value is None else str(value))
    if flags & SortFlag.NUMERIC:
        return _numeric_key
    return cmp_to_key(spaceship)


def _criterion(criterion: Criterion, flags: SortFlag) -> SortCriterion:
    """a chain entry: maps (value, key) to its collated sort key"""
    extract, to_key = value_retriever(criterion, missing=None), sort_key(flags)
    return lambda value, key: to_key(extract(value, key))


def _stable_sort(pairs: List[Tuple[Key, Any]], collate: SortCriterion,
                 descending: bool) -> List[Tuple[Key, Any]]:
    """
    sort (key, value) pairs by their collated key. python's sort is stable
    in both directions, so equal keys keep their incoming order.
    """
    keyed = [(collate(value, key), (key, value)) for key, value in pairs]
    keyed.sort(key=lambda entry: entry[0], reverse=descending)
    return [pair for _, pair in keyed]


def _tie_groups(pairs: List[Tuple[Key, Any]],
                chain: Tuple[SortCriterion, ...]) -> List[List[Tuple[Key, Any]]]:
    """
    split already sorted pairs into consecutive runs that tie on every
    criterion in chain, compared under the collation each one was sorted with
    """
    groups: List[List[Tuple[Key, Any]]] = []
    group_signature = None
    for key, value in pairs:
        signature = [collate(value, key) for collate in chain]
        if groups and all(a == b for a, b in zip(signature, group_signature)):
            groups[-1].append((key, value))
        else:
            groups.append([(key, value)])
            group_signature = signature
    return groups


class _SortOperations(Generic[T]):
    """
    sorting. sort_by records its collated criterion on the result as a chain of length
    one; then_by re-sorts only inside runs that tie on the whole chain and
    extends the chain by one, so earlier criteria always dominate later ones.
    """

    def sort_by(self: 'Collection[T]', criterion: Criterion, descending: bool = False,
                flags: SortFlag = SortFlag.REGULAR) -> 'Collection[T]':
        """
        stable sort by the value at a path or a callback(value[, key]).
        keys are preserved; items missing the path sort as None.
        """
        collate = _criterion(criterion, flags)
        ordered = _stable_sort(list(self._items.items()), collate, descending)
        logger.debug("sort_by %r (descending=%s) started a chain over %d items",
                     criterion, descending, len(ordered))
        return type(self)._sorted(dict(ordered), (collate,))

    def sort_by_desc(self: 'Collection[T]', criterion: Criterion,
                     flags: SortFlag = SortFlag.REGULAR) -> 'Collection[T]':
        return self.sort_by(criterion, True, flags)

    def then_by(self: 'Collection[T]', criterion: Criterion, descending: bool = False,
                flags: SortFlag = SortFlag.REGULAR) -> 'Collection[T]':
        """
        secondary sort: only items tied on every earlier criterion are reordered.

            >>> people.sort_by('age').then_by('name')
        """
        if not self._sort_chain:
            raise UnchainedSortError('then_by_desc' if descending else 'then_by')
        collate = _criterion(criterion, flags)
        ordered = []
        for group in _tie_groups(list(self._items.items()), self._sort_chain):
            ordered.extend(_stable_sort(group, collate, descending) if len(group) > 1 else group)
        chain = self._sort_chain + (collate,)
        logger.debug("then_by %r extended the sort chain to %d criteria", criterion, len(chain))
        return type(self)._sorted(dict(ordered), chain)

    def then_by_desc(self: 'Collection[T]', criterion: Criterion,
                     flags: SortFlag = SortFlag.REGULAR) -> 'Collection[T]':
        return self.then_by(criterion, True, flags)

    def sort(self: 'Collection[T]', flags: Union[SortFlag, Callable[[T, T], int]] = SortFlag.REGULAR,
             descending: bool = False) -> 'Collection[T]':
        """
        sort by value, keys preserved. flags may also be a comparison function
        returning a negative, zero or positive number.
        """
        to_key = cmp_to_key(flags) if callable(flags) else sort_key(flags)
        ordered = sorted(self._items.items(), key=lambda pair: to_key(pair[1]), reverse=descending)
        return self._new(dict(ordered))

    def sort_desc(self: 'Collection[T]', flags: SortFlag = SortFlag.REGULAR) -> 'Collection[T]':
        return self.sort(flags, descending=True)

    def sort_keys(self: 'Collection[T]', flags: SortFlag = SortFlag.REGULAR,
                  descending: bool = False) -> 'Collection[T]':
        to_key = sort_key(flags)
        ordered = sorted(self._items.items(), key=lambda pair: to_key(pair[0]), reverse=descending)
        return self._new(dict(ordered))

    def sort_keys_desc(self: 'Collection[T]', flags: SortFlag = SortFlag.REGULAR) -> 'Collection[T]':
        return self.sort_keys(flags, descending=True)
