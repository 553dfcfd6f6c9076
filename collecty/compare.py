"""
value comparison rules shared by every operation.

two flavours of equality exist: strict (same type and equal) and loose,
where numeric strings compare numerically with numbers, booleans compare
by truthiness and None equals any empty/falsy value. ordering uses the same
numeric coercion and never raises on mixed types.
"""
import re
from functools import cmp_to_key
from typing import Any, Callable, List

_NUMERIC = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')
_NATURAL_CHUNK = re.compile(r'(\d+)')


def is_numeric(value: Any) -> bool:
    """true for ints/floats (not bools) and strings that spell a number"""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and bool(_NUMERIC.match(value))


def to_number(value: Any) -> Any:
    """numeric strings become int or float, everything else is returned unchanged"""
    if not (isinstance(value, str) and is_numeric(value)):
        return value
    try:
        return int(value)
    except ValueError:
        return float(value)


def _plain(value: Any) -> Any:
    from .collection import Collection
    # nested collections compare by their items
    return value.all() if isinstance(value, Collection) else value


def strict_equals(a: Any, b: Any) -> bool:
    a, b = _plain(a), _plain(b)
    if type(a) is not type(b):
        return False
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return a is b


def loose_equals(a: Any, b: Any) -> bool:
    a, b = _plain(a), _plain(b)
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return bool(a) == bool(b)
    if a is None or b is None:
        other = b if a is None else a
        return not other
    if is_numeric(a) and is_numeric(b):
        return to_number(a) == to_number(b)
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


def compare(a: Any, b: Any) -> int:
    """three-way comparison, None first, numbers (and numeric strings) numerically"""
    a, b = _plain(a), _plain(b)
    if a is None or b is None:
        return (a is not None) - (b is not None)
    if (is_numeric(a) or isinstance(a, bool)) and (is_numeric(b) or isinstance(b, bool)):
        x, y = to_number(a), to_number(b)
        return (x > y) - (x < y)
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    except TypeError:
        # unrelated types: group by type name, then by text
        x, y = (type(a).__name__, str(a)), (type(b).__name__, str(b))
        return (x > y) - (x < y)


sort_key = cmp_to_key(compare)


def natural_key(value: Any, ignore_case: bool = False) -> List[Any]:
    """split text into digit and non-digit runs so 'a9' sorts before 'a10'"""
    text = str(value)
    if ignore_case:
        text = text.lower()
    return [(0, int(chunk), '') if chunk.isdigit() else (1, 0, chunk)
            for chunk in _NATURAL_CHUNK.split(text) if chunk]


def contains_value(haystack: List[Any], needle: Any, strict: bool = False) -> bool:
    equals: Callable[[Any, Any], bool] = strict_equals if strict else loose_equals
    return any(equals(item, needle) for item in haystack)
