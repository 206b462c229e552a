"""
comparison operators used by where(), first_where(), every() and sorting.

equality comes in two flavours. loose equality (`=`, `==`) treats numeric
strings as numbers and compares bools by truthiness; strict equality (`===`)
additionally requires both operands to have the same type. relational
operators never raise: operands that cannot be ordered simply fail the test.
"""
from __future__ import annotations

import re
import unicodedata

from .errors import InvalidOperatorError
from .types import *

_NUMERIC = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')


def as_number(value: Any) -> Optional[Union[int, float]]:
    """the numeric value of a number or numeric string, else None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and _NUMERIC.match(value):
        return float(value)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _ordering(a: Any, b: Any) -> Optional[int]:
    """-1, 0 or 1 under loose rules; None when the operands cannot be ordered"""
    if a is None or b is None or isinstance(a, bool) or isinstance(b, bool):
        # null and bool operands are ordered by truthiness: None < True
        return _cmp(bool(a), bool(b))

    number_a, number_b = as_number(a), as_number(b)
    if number_a is not None and number_b is not None:
        return _cmp(number_a, number_b)
    if _is_number(a) and isinstance(b, str):
        return _cmp(str(a), b)
    if isinstance(a, str) and _is_number(b):
        return _cmp(a, str(b))

    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0 if a == b else None
    except TypeError:
        return None


def loose_equals(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        other = b if a is None else a
        if isinstance(other, (bool, int, float, str, list, tuple, dict)):
            return not other
        return False
    if isinstance(a, bool) or isinstance(b, bool):
        return bool(a) == bool(b)
    number_a, number_b = as_number(a), as_number(b)
    if number_a is not None and number_b is not None and (isinstance(a, str) or isinstance(b, str)):
        return number_a == number_b
    if _is_number(a) and isinstance(b, str):
        return str(a) == b
    if isinstance(a, str) and _is_number(b):
        return a == str(b)
    return a == b


def strict_equals(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


def spaceship(a: Any, b: Any) -> int:
    """three-way comparison. total: unorderable operands fall back to their type names."""
    if loose_equals(a, b):
        return 0
    ordering = _ordering(a, b)
    if ordering is None:
        return _cmp(type(a).__name__, type(b).__name__)
    return ordering


def _relational(test: Callable[[int], bool]) -> Callable[[Any, Any], bool]:
    def compare_with(a: Any, b: Any) -> bool:
        if loose_equals(a, b):
            return test(0)
        ordering = _ordering(a, b)
        return ordering is not None and ordering != 0 and test(ordering)
    return compare_with


OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    '=': loose_equals,
    '==': loose_equals,
    '===': strict_equals,
    '!=': lambda a, b: not loose_equals(a, b),
    '<>': lambda a, b: not loose_equals(a, b),
    '!==': lambda a, b: not strict_equals(a, b),
    '<': _relational(lambda o: o < 0),
    '>': _relational(lambda o: o > 0),
    '<=': _relational(lambda o: o <= 0),
    '>=': _relational(lambda o: o >= 0),
    '<=>': spaceship,
}


def check_operator(operator: str) -> Callable[[Any, Any], Any]:
    """the implementation of operator, or InvalidOperatorError"""
    try:
        return OPERATORS[operator]
    except (KeyError, TypeError):
        raise InvalidOperatorError(operator) from None


def compare(a: Any, operator: str, b: Any) -> Union[bool, int]:
    """evaluate `a <operator> b`. `<=>` returns -1, 0 or 1; everything else a bool."""
    return check_operator(operator)(a, b)


# --- like patterns ---

def normalize_text(value: Any) -> str:
    """case and accent insensitive form: 'Éclair' -> 'eclair'"""
    decomposed = unicodedata.normalize('NFKD', str(value))
    return ''.join(char for char in decomposed if not unicodedata.combining(char)).casefold()


def _stringify(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


_MATCH_STRATEGIES: Dict[str, Callable[[str, str], bool]] = {
    'contains': lambda haystack, needle: needle in haystack,
    'starts_with': lambda haystack, needle: haystack.startswith(needle),
    'ends_with': lambda haystack, needle: haystack.endswith(needle),
    'exact': lambda haystack, needle: haystack == needle,
}


def parse_like(pattern: str) -> Tuple[str, str]:
    """
    split a `%` pattern into (strategy, needle).
    only a leading and/or trailing `%` is special; one in the middle is literal.
    """
    if len(pattern) >= 2 and pattern.startswith('%') and pattern.endswith('%'):
        return 'contains', pattern[1:-1]
    if pattern.endswith('%'):
        return 'starts_with', pattern[:-1]
    if pattern.startswith('%'):
        return 'ends_with', pattern[1:]
    return 'exact', pattern


def like_matcher(pattern: str, strict: bool = False) -> Callable[[Any], bool]:
    """build a predicate testing a value against a `%` pattern"""
    strategy, needle = parse_like(pattern)
    test = _MATCH_STRATEGIES[strategy]
    if not strict:
        needle = normalize_text(needle)

    def matches(value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return False
        haystack = _stringify(value)
        if not strict:
            haystack = normalize_text(haystack)
        return test(haystack, needle)

    return matches
