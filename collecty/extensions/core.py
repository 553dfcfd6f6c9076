from __future__ import annotations
import math
import typing
from functools import reduce as fold
from ..types import *
from ..compare import compare, loose_equals, strict_equals, contains_value
from ..support import adapt, data_get, element_values, renumber, value_of

if typing.TYPE_CHECKING:
    from ..collection import Collection

_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    '=': loose_equals,
    '==': loose_equals,
    '!=': lambda a, b: not loose_equals(a, b),
    '<>': lambda a, b: not loose_equals(a, b),
    '<': lambda a, b: compare(a, b) < 0,
    '>': lambda a, b: compare(a, b) > 0,
    '<=': lambda a, b: compare(a, b) <= 0,
    '>=': lambda a, b: compare(a, b) >= 0,
    '===': strict_equals,
    '!==': lambda a, b: not strict_equals(a, b),
}


def _flatten(values: List[Any], depth: float) -> List[Any]:
    result = []
    for item in values:
        nested = element_values(item)
        if nested is None:
            result.append(item)
        elif depth <= 1:
            result.extend(nested)
        else:
            result.extend(_flatten(nested, depth - 1))
    return result


class _CoreOperations(Generic[K, V]):

    # --- projection ---

    def map(self: 'Collection[K, V]', callback: Selector) -> 'Collection[K, Any]':
        """apply callback(value, key) to every entry, keeping the keys"""
        func = adapt(callback)
        return self._new({key: func(value, key) for key, value in self._items.items()})

    def map_with_keys(self: 'Collection[K, V]', callback: Selector) -> 'Collection':
        """callback returns a mapping per entry; the mappings are merged, keys kept as given"""
        func = adapt(callback)
        result = {}
        for key, value in self._items.items():
            result.update(self._get_arrayable_items(func(value, key)))
        return self._new(result)

    def flat_map(self: 'Collection[K, V]', callback: Selector) -> 'Collection':
        return self.map(callback).collapse()

    def transform(self: 'Collection[K, V]', callback: Selector) -> 'Collection[K, Any]':
        """in-place map"""
        self._items = self.map(callback)._items
        return self

    def pluck(self: 'Collection[K, V]', value: Union[str, int], key: Union[str, int, None] = None) -> 'Collection':
        """
        extract a dot-path from every entry. with a key path the result is keyed
        by it (last entry wins), otherwise it is a plain list.
        """
        if key is None:
            return self._new([data_get(item, value) for item in self._items.values()])
        return self._new({data_get(item, key): data_get(item, value) for item in self._items.values()})

    def values(self: 'Collection[K, V]') -> 'Collection[int, V]':
        return self._new(list(self._items.values()))

    def keys(self: 'Collection[K, V]') -> 'Collection[int, K]':
        return self._new(list(self._items))

    def flip(self: 'Collection[K, V]') -> 'Collection[V, K]':
        return self._new({value: key for key, value in self._items.items()})

    def reverse(self: 'Collection[K, V]') -> 'Collection[K, V]':
        return self._new(dict(reversed(self._items.items())))

    def collapse(self: 'Collection[K, V]') -> 'Collection':
        """merge one level of nested lists/dicts/collections; scalars are dropped"""
        pairs = []
        for value in self._items.values():
            if isinstance(value, (list, tuple)) or hasattr(value, 'items'):
                pairs.extend(self._get_arrayable_items(value).items())
        return self._new(renumber(pairs))

    def flatten(self: 'Collection[K, V]', depth: float = math.inf) -> 'Collection[int, Any]':
        """flatten nested values into one list; depth=1 opens exactly one level"""
        return self._new(_flatten(list(self._items.values()), depth))

    # --- filtering ---

    def filter(self: 'Collection[K, V]', callback: Optional[Predicate] = None) -> 'Collection[K, V]':
        """keep entries where callback(key, value) holds, or truthy values without a callback"""
        if callback is None:
            return self._new({key: value for key, value in self._items.items() if value})
        func = adapt(callback)
        return self._new({key: value for key, value in self._items.items() if func(key, value)})

    def reject(self: 'Collection[K, V]', callback: Any) -> 'Collection[K, V]':
        """drop entries where callback(value, key) holds, or that loosely equal a plain value"""
        if callable(callback):
            func = adapt(callback)
            return self._new({key: value for key, value in self._items.items() if not func(value, key)})
        return self._new({key: value for key, value in self._items.items() if not loose_equals(value, callback)})

    def where(self: 'Collection[K, V]', key: str, operator: Any, value: Any = MISSING) -> 'Collection[K, V]':
        """
        filter by the value at a dot-path.
        where('v', 3) is where('v', '=', 3); unknown operators fall back to loose equality.
        """
        if value is MISSING:
            operator, value = '=', operator
        matches = _OPERATORS.get(operator, loose_equals)
        return self._new({k: item for k, item in self._items.items() if matches(data_get(item, key), value)})

    def where_strict(self: 'Collection[K, V]', key: str, value: Any) -> 'Collection[K, V]':
        return self.where(key, '===', value)

    def where_in(self: 'Collection[K, V]', key: str, values: Any, strict: bool = False) -> 'Collection[K, V]':
        candidates = list(self._get_arrayable_items(values).values())
        return self._new({k: item for k, item in self._items.items()
                          if contains_value(candidates, data_get(item, key), strict)})

    def where_in_strict(self: 'Collection[K, V]', key: str, values: Any) -> 'Collection[K, V]':
        return self.where_in(key, values, True)

    # --- positional ---

    def slice(self: 'Collection[K, V]', offset: int, length: Optional[int] = None) -> 'Collection[K, V]':
        """offset/length slice keeping keys; negative values count from the end"""
        pairs = list(self._items.items())[offset:]
        if length is not None:
            pairs = pairs[:length]
        return self._new(dict(pairs))

    def for_page(self: 'Collection[K, V]', page: int, per_page: int) -> 'Collection[K, V]':
        return self.slice(max(0, (page - 1) * per_page), per_page)

    def take(self: 'Collection[K, V]', limit: int) -> 'Collection[K, V]':
        """first limit entries, or the last |limit| when negative"""
        if limit < 0:
            return self.slice(limit)
        return self.slice(0, limit)

    def splice(self: 'Collection[K, V]', offset: int, length: Optional[int] = None,
               replacement: Any = None) -> 'Collection[int, V]':
        """
        remove a run of entries in place, insert the replacement values there,
        and return the removed values. integer keys are renumbered afterwards.
        """
        pairs = list(self._items.items())
        start = len(pairs[:offset])
        tail = pairs[start:]
        removed = tail if length is None else tail[:length]
        inserted = [(NO_KEY, value) for value in self._get_arrayable_items(replacement).values()]
        self._items = renumber(pairs[:start] + inserted + tail[len(removed):])
        return self._new([value for _, value in removed])

    def append(self: 'Collection[K, V]', value: V, key: Any = NO_KEY) -> 'Collection[K, V]':
        """copy with value added at key, or at the next integer key"""
        return self._new(self).set(key, value)

    # --- in-place mutation ---

    def prepend(self: 'Collection[K, V]', value: V, key: Any = NO_KEY) -> 'Collection[K, V]':
        """insert at the front; without a key the integer keys shift up by one"""
        if key is NO_KEY:
            self._items = renumber([(NO_KEY, value), *self._items.items()])
        else:
            items = {key: value}
            for existing_key, existing in self._items.items():
                items.setdefault(existing_key, existing)
            self._items = items
        return self

    def push(self: 'Collection[K, V]', *values: V) -> 'Collection[K, V]':
        for value in values:
            self.set(NO_KEY, value)
        return self

    def put(self: 'Collection[K, V]', key: K, value: V) -> 'Collection[K, V]':
        return self.set(key, value)

    def pop(self: 'Collection[K, V]') -> Optional[V]:
        if not self._items:
            return None
        return self._discard(next(reversed(self._items)))

    def shift(self: 'Collection[K, V]') -> Optional[V]:
        """remove and return the first value; integer keys are renumbered"""
        if not self._items:
            return None
        value = self._items.pop(next(iter(self._items)))
        self._items = renumber(self._items.items())
        return value

    def pull(self: 'Collection[K, V]', key: K, default: Any = None) -> Any:
        if key in self._items:
            return self._discard(key)
        return value_of(default)

    def forget(self: 'Collection[K, V]', keys: Any) -> 'Collection[K, V]':
        for key in (keys if isinstance(keys, (list, tuple, set)) else [keys]):
            self._discard(key)
        return self

    # --- iteration helpers ---

    def each(self: 'Collection[K, V]', callback: Callable[..., Any]) -> 'Collection[K, V]':
        """call callback(value, key) in order; returning False stops early"""
        func = adapt(callback)
        for key, value in list(self._items.items()):
            if func(value, key) is False:
                break
        return self

    def reduce(self: 'Collection[K, V]', callback: Accumulator, initial: Any = MISSING) -> Any:
        """left fold over the values; without an initial value the first value seeds it"""
        values = list(self._items.values())
        if initial is MISSING:
            return fold(callback, values) if values else None
        return fold(callback, values, initial)

    def pipe(self: 'Collection[K, V]', func: Callable[..., U], *args, **kwargs) -> U:
        """
        pass the collection to an external function and return its result.
        example: .pipe(lambda c: c.sum())
        """
        return func(self, *args, **kwargs)
