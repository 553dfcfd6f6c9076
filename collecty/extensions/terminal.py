from __future__ import annotations
import json
import logging
import random
import typing
import numpy as np
import pandas as pd
from collections.abc import Mapping
from ..types import *
from ..compare import contains_value, loose_equals, strict_equals
from ..support import adapt, data_get, value_of

if typing.TYPE_CHECKING:
    from ..collection import Collection

logger = logging.getLogger(__name__)

_ENVELOPE = 'collecty.collection'
_SCALARS = (str, bytes, int, float, bool, type(None))


def _json_default(value: Any) -> Any:
    """json.dumps fallback: convertible values at any depth, numpy values, sets"""
    if isinstance(value, (JsonSerializable, Jsonable, Arrayable)):
        return _json_value(value)
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _array_value(value: Any) -> Any:
    return value.to_array() if isinstance(value, Arrayable) else value


def _json_value(value: Any) -> Any:
    """prefer a value's own json form over its array form"""
    if isinstance(value, JsonSerializable):
        return value.json_serialize()
    if isinstance(value, Jsonable):
        return json.loads(value.to_json())
    if isinstance(value, Arrayable):
        return value.to_array()
    return value


def _text(value: Any) -> str:
    return '' if value is None else str(value)


def _envelope(value: Any) -> Any:
    """
    json-ready form of value where every collection, however deep, becomes
    {"type": ..., "items": [[key, value], ...]} so integer keys survive.
    """
    if isinstance(value, _TerminalOperations):
        return {'type': _ENVELOPE, 'items': [[key, _envelope(item)] for key, item in value._items.items()]}
    if isinstance(value, Mapping):
        return {key: _envelope(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_envelope(item) for item in value]
    converted = _json_value(value)
    return value if converted is value else _envelope(converted)


def _is_envelope(data: Any) -> bool:
    return isinstance(data, Mapping) and data.get('type') == _ENVELOPE and isinstance(data.get('items'), list)


def _restore(data: Any, factory: Callable[[Any], Any]) -> Any:
    if _is_envelope(data):
        return factory({key: _restore(item, factory) for key, item in data['items']})
    if isinstance(data, dict):
        return {key: _restore(item, factory) for key, item in data.items()}
    if isinstance(data, list):
        return [_restore(item, factory) for item in data]
    return data


class _TerminalOperations(Generic[K, V]):

    # --- size ---

    def count(self: 'Collection[K, V]') -> int:
        return len(self._items)

    def is_empty(self: 'Collection[K, V]') -> bool:
        return len(self._items) == 0

    def is_not_empty(self: 'Collection[K, V]') -> bool:
        return not self.is_empty()

    # --- lookup ---

    def first(self: 'Collection[K, V]', callback: Optional[Predicate] = None, default: Any = None) -> Any:
        """first value, or the first where callback(key, value) holds; default otherwise"""
        if callback is None:
            if not self._items:
                return value_of(default)
            return next(iter(self._items.values()))
        func = adapt(callback)
        for key, value in self._items.items():
            if func(key, value):
                return value
        return value_of(default)

    def last(self: 'Collection[K, V]', callback: Optional[Predicate] = None, default: Any = None) -> Any:
        """last value, or the last where callback(key, value) holds; default otherwise"""
        if callback is None:
            if not self._items:
                return value_of(default)
            return next(reversed(self._items.values()))
        func = adapt(callback)
        for key, value in reversed(self._items.items()):
            if func(key, value):
                return value
        return value_of(default)

    def contains(self: 'Collection[K, V]', key: Any, value: Any = MISSING, strict: bool = False) -> bool:
        """
        contains(value): loose membership among the values.
        contains(callback): some entry satisfies callback(key, value).
        contains(path, value): some entry's value at the dot-path equals value.
        """
        equals = strict_equals if strict else loose_equals
        if value is not MISSING:
            return any(equals(data_get(item, key), value) for item in self._items.values())
        if callable(key):
            func = adapt(key)
            return any(func(item_key, item) for item_key, item in self._items.items())
        return contains_value(list(self._items.values()), key, strict)

    def contains_strict(self: 'Collection[K, V]', key: Any, value: Any = MISSING) -> bool:
        return self.contains(key, value, strict=True)

    def search(self: 'Collection[K, V]', value: Any, strict: bool = False) -> Union[K, bool]:
        """
        key of the first value equal to value (or passing callback(value, key)).
        returns False when nothing matches; compare the result with `is False`.
        """
        if callable(value):
            func = adapt(value)
            for key, item in self._items.items():
                if func(item, key):
                    return key
            return False
        equals = strict_equals if strict else loose_equals
        for key, item in self._items.items():
            if equals(item, value):
                return key
        return False

    def random(self: 'Collection[K, V]', amount: int = 1, seed: Optional[int] = None) -> Any:
        """one random value, or a collection of amount distinct entries (keys kept)"""
        count = len(self._items)
        if amount > count:
            raise ValueError(f"You requested {amount} items, but there are only {count} items in the collection.")
        rng = random.Random(seed)
        if amount == 1:
            return rng.choice(list(self._items.values()))
        chosen = set(rng.sample(list(self._items), amount))
        return self._new({key: value for key, value in self._items.items() if key in chosen})

    def implode(self: 'Collection[K, V]', value: Any, glue: Optional[str] = None) -> str:
        """
        join the values with value as glue, or, when entries are records,
        join the field at the dot-path value with glue.
        """
        first = self.first()
        if not isinstance(first, _SCALARS):
            return (glue or '').join(_text(item) for item in self.pluck(value).to_list())
        return str(value).join(_text(item) for item in self._items.values())

    # --- conversion ---

    def _shape(self: 'Collection[K, V]', converted: Dict[K, Any]) -> Union[List[Any], Dict[K, Any]]:
        return list(converted.values()) if self._is_list() else converted

    def to_array(self: 'Collection[K, V]') -> Union[List[Any], Dict[K, Any]]:
        """plain lists/dicts all the way down"""
        return self._shape({key: _array_value(value) for key, value in self._items.items()})

    def json_serialize(self: 'Collection[K, V]') -> Union[List[Any], Dict[K, Any]]:
        return self._shape({key: _json_value(value) for key, value in self._items.items()})

    def to_json(self: 'Collection[K, V]', **options) -> str:
        """json text; options go straight to json.dumps"""
        options.setdefault('default', _json_default)
        return json.dumps(self.json_serialize(), **options)

    def serialize(self: 'Collection[K, V]') -> str:
        """
        json envelope holding [key, value] pairs, so integer and string keys
        survive the trip through deserialize().
        """
        return json.dumps(_envelope(self), default=_json_default)

    @classmethod
    def deserialize(cls, payload: Union[str, bytes]) -> 'Collection':
        data = json.loads(payload)
        if not _is_envelope(data):
            raise ValueError("payload is not a serialized collection")
        logger.debug("deserializing collection with %d entries", len(data['items']))
        return _restore(data, cls)


class TerminalAccessor(Generic[K, V]):
    """conversions out of a collection, reached through `collection.to`."""

    def __init__(self, collection_instance: 'Collection[K, V]'):
        self._collection = collection_instance

    def list(self) -> List[V]:
        """convert to list of values"""
        return self._collection.to_list()

    def dict(self) -> Dict[K, V]:
        """convert to dictionary"""
        return self._collection.to_dict()

    def set(self) -> Set[V]:
        return set(self._collection.to_list())

    def array(self) -> np.ndarray:
        """convert values to numpy array"""
        return np.array(self._collection.to_list())

    def series(self) -> pd.Series:
        """convert to pandas series, indexed by the collection keys"""
        return pd.Series(self._collection.to_list(), index=list(self._collection.to_dict()), dtype=object)

    def df(self) -> pd.DataFrame:
        """convert record-shaped values to a pandas dataframe"""
        return pd.DataFrame([_array_value(value) for value in self._collection.to_list()])

    def json(self, **options) -> str:
        return self._collection.to_json(**options)
