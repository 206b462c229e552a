from __future__ import annotations
import typing
from .. import arr
from ..operators import check_operator, like_matcher, loose_equals, strict_equals, OPERATORS
from ..paths import split_path, resolve_segments
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import BaseCollection

_at_least = OPERATORS['>=']
_at_most = OPERATORS['<=']
_below = OPERATORS['<']
_above = OPERATORS['>']


def _is_empty(value: Any) -> bool:
    """empty in the loose sense: None, False, 0, '', '0' and empty containers"""
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, str):
        return value in ('', '0')
    if hasattr(value, '__len__'):
        return len(value) == 0
    return False


def _is_blank(value: Any) -> bool:
    """blank: None, whitespace-only strings and empty containers. numbers and bools never are."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (bool, int, float)):
        return False
    if hasattr(value, '__len__'):
        return len(value) == 0
    return False


class _QueryOperations(Generic[T]):
    """where-style filters. every addressed read goes through the path resolver."""

    def _filter_path(self: 'BaseCollection[T]', key: Path,
                     test: Callable[[Any], bool], missing: Any = MISSING) -> 'BaseCollection[T]':
        """
        keep items whose value at `key` passes test. when the path does not
        resolve, `missing` is tested instead; MISSING means such items are dropped.
        """
        segments = split_path(key)
        def predicate(item):
            lookup = resolve_segments(item, segments)
            if lookup.found:
                return test(lookup.value)
            return missing is not MISSING and test(missing)
        return self.filter(predicate)

    def where(self: 'BaseCollection[T]', key: Path, value: Any, operator: str = '=') -> 'BaseCollection[T]':
        """
        filter by comparing the value at a dotted path: where('user.age', 18, '>=').
        an absent path compares as None.
        """
        compare_with = check_operator(operator)
        return self._filter_path(key, lambda child: compare_with(child, value), missing=None)

    def where_strict(self: 'BaseCollection[T]', key: Path, value: Any) -> 'BaseCollection[T]':
        return self.where(key, value, '===')

    def where_between(self: 'BaseCollection[T]', key: Path, minimum: Any, maximum: Any) -> 'BaseCollection[T]':
        """inclusive range test. items without the path are excluded."""
        return self._filter_path(key, lambda child: _at_least(child, minimum) and _at_most(child, maximum))

    def where_not_between(self: 'BaseCollection[T]', key: Path, minimum: Any, maximum: Any) -> 'BaseCollection[T]':
        """outside the inclusive range. items without the path are excluded too."""
        return self._filter_path(key, lambda child: _below(child, minimum) or _above(child, maximum))

    def where_in(self: 'BaseCollection[T]', key: Path, values: Iterable[Any],
                 strict: bool = False) -> 'BaseCollection[T]':
        candidates = list(arr.wrap(values).values())
        equals = strict_equals if strict else loose_equals
        return self._filter_path(key, lambda child: any(equals(child, c) for c in candidates))

    def where_in_strict(self: 'BaseCollection[T]', key: Path, values: Iterable[Any]) -> 'BaseCollection[T]':
        return self.where_in(key, values, strict=True)

    def where_not_in(self: 'BaseCollection[T]', key: Path, values: Iterable[Any],
                     strict: bool = False) -> 'BaseCollection[T]':
        candidates = list(arr.wrap(values).values())
        equals = strict_equals if strict else loose_equals
        return self._filter_path(key, lambda child: not any(equals(child, c) for c in candidates))

    def where_not_in_strict(self: 'BaseCollection[T]', key: Path, values: Iterable[Any]) -> 'BaseCollection[T]':
        return self.where_not_in(key, values, strict=True)

    def where_like(self: 'BaseCollection[T]', key: Path, pattern: str, strict: bool = False) -> 'BaseCollection[T]':
        """
        sql-like matching with `%` at either end of the pattern:
        '%x%' contains, 'x%' starts with, '%x' ends with, 'x' exact.
        unless strict, the match ignores case and accents. only strings
        and numbers can match.

            >>> collect([{'p': 'Desk'}, {'p': 'Chair'}, {'p': 'Door'}]).where_like('p', 'D%')
        """
        return self._filter_path(key, like_matcher(pattern, strict))

    def where_null(self: 'BaseCollection[T]', key: Optional[Path] = None) -> 'BaseCollection[T]':
        if key is None:
            return self.filter(lambda item: item is None)
        return self.where_strict(key, None)

    def where_not_null(self: 'BaseCollection[T]', key: Optional[Path] = None) -> 'BaseCollection[T]':
        if key is None:
            return self.filter(lambda item: item is not None)
        return self.where(key, None, '!==')

    def where_not_empty(self: 'BaseCollection[T]', key: Path) -> 'BaseCollection[T]':
        return self._filter_path(key, lambda child: not _is_empty(child))

    def where_not_blank(self: 'BaseCollection[T]') -> 'BaseCollection[T]':
        return self.filter(lambda item: not _is_blank(item))

    def where_instance_of(self: 'BaseCollection[T]', *types: type) -> 'BaseCollection[T]':
        # allow where_instance_of([A, B]) as well as where_instance_of(A, B)
        flat = tuple(t for entry in types for t in (entry if isinstance(entry, (list, tuple)) else (entry,)))
        return self.filter(lambda item: isinstance(item, flat))

    def first_where(self: 'BaseCollection[T]', key: Path, value: Any, operator: str = '=') -> Any:
        """first item whose value at path satisfies the comparison; items without the path are skipped"""
        compare_with = check_operator(operator)
        segments = split_path(key)
        def matches(item):
            lookup = resolve_segments(item, segments)
            return lookup.found and compare_with(lookup.value, value)
        return self.first(matches)
