from __future__ import annotations

import json
from collections.abc import Iterable as IterableABC, Mapping
from types import SimpleNamespace

import numpy as np
import pandas as pd
from .types import *
from .registry import ExtensionRegistry
from .support import value_of

# --- operation families ---
from .extensions.core import _CoreOperations
from .extensions.set import _SetOperations
from .extensions.grouping import _GroupingOperations
from .extensions.sorting import _SortingOperations
from .extensions.stats import _StatsOperations
from .extensions.zip import _ZipOperations
from .extensions.terminal import _TerminalOperations, TerminalAccessor


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


# --- storage, element access and dispatch ---

class _BaseCollection(Generic[K, V]):
    # shared by every collection in the process, see extend()
    _extensions = ExtensionRegistry()

    def __init__(self, items: Any = None):
        """normalize any supported source into an ordered key -> value dict"""
        self._items = self._get_arrayable_items(items)
        self.to = TerminalAccessor(self)

    @property
    def _items(self) -> Dict[K, V]:
        return self._entries

    @_items.setter
    def _items(self, items: Dict[K, V]) -> None:
        self._entries = items
        # one past the highest integer key, None until the next append needs it
        self._next_index: Optional[int] = None

    @classmethod
    def from_(cls, items: Any = None) -> 'Collection[K, V]':
        return cls(items)

    make = from_

    def _new(self, items: Any = None) -> 'Collection':
        """build a sibling collection of the same concrete class"""
        return type(self)(items)

    def _get_arrayable_items(self, items: Any) -> Dict[Any, Any]:
        """
        resolution order: None, another collection, a mapping, pandas/numpy
        containers, text (kept whole), a zero-argument callable (its result is
        normalized again), anything with items(), any iterable, then the
        json_serialize / to_json / to_array capabilities, namespaces, and
        finally a single scalar.
        """
        if items is None:
            return {}
        if isinstance(items, _BaseCollection):
            return dict(items._items)
        if isinstance(items, Mapping):
            return dict(items)
        if isinstance(items, pd.DataFrame):
            return dict(enumerate(items.to_dict(orient='records')))
        if isinstance(items, pd.Series):
            return items.to_dict()
        if isinstance(items, np.ndarray):
            return dict(enumerate(items.tolist()))
        if isinstance(items, (str, bytes, bytearray)):
            return {0: items}
        if callable(items) and not isinstance(items, type):
            return self._get_arrayable_items(items())
        if callable(getattr(items, 'items', None)):
            return dict(items.items())
        if isinstance(items, IterableABC):
            return dict(enumerate(items))
        if isinstance(items, JsonSerializable):
            return self._get_arrayable_items(items.json_serialize())
        if isinstance(items, Jsonable):
            return self._get_arrayable_items(json.loads(items.to_json()))
        if isinstance(items, Arrayable):
            return self._get_arrayable_items(items.to_array())
        if isinstance(items, SimpleNamespace):
            return dict(vars(items))
        return {0: items}

    # --- raw views ---

    def _is_list(self) -> bool:
        return list(self._items) == list(range(len(self._items)))

    def all(self) -> Union[List[V], Dict[K, V]]:
        """the items as a list when keyed 0..n-1 in order, otherwise as a dict"""
        if self._is_list():
            return list(self._items.values())
        return dict(self._items)

    def to_dict(self) -> Dict[K, V]:
        return dict(self._items)

    def to_list(self) -> List[V]:
        return list(self._items.values())

    def items(self):
        return self._items.items()

    # --- element access ---

    def has(self, key: K) -> bool:
        return key in self._items

    exists = has

    def get(self, key: K, default: Any = None) -> Any:
        """stored value, or the default (called first if it is callable)"""
        if key in self._items:
            return self._items[key]
        return value_of(default)

    def _next_key(self) -> int:
        if self._next_index is None:
            self._next_index = max((key for key in self._entries if _is_index(key)), default=-1) + 1
        return self._next_index

    def _discard(self, key: Any, default: Any = None) -> Any:
        """remove key and return its value; dropping the highest index resets the append position"""
        if self._next_index is not None and key == self._next_index - 1:
            self._next_index = None
        return self._entries.pop(key, default)

    def set(self, key: Any, value: V) -> 'Collection[K, V]':
        """upsert at key; None or NO_KEY appends with the next integer key"""
        if key is None or key is NO_KEY:
            key = self._next_key()
        self._entries[key] = value
        if self._next_index is not None and _is_index(key) and key >= self._next_index:
            self._next_index = key + 1
        return self

    def unset(self, key: K) -> None:
        self._discard(key)

    def __getitem__(self, key: K) -> V:
        try:
            return self._items[key]
        except KeyError:
            raise KeyError(f"undefined collection key: {key!r}") from None

    def __setitem__(self, key: Any, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: K) -> None:
        self.unset(key)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    # --- protocol ---

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Tuple[K, V]]:
        # iterate a snapshot so in-place operations inside the loop are safe
        return iter(list(self._items.items()))

    def caching_iterator(self) -> CachingIterator[K, V]:
        return CachingIterator(self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _BaseCollection):
            return list(self._items.items()) == list(other._items.items())
        if isinstance(other, dict):
            return self._items == other
        if isinstance(other, list):
            return self._is_list() and self.to_list() == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.all()!r})"

    def __str__(self) -> str:
        return self.to_json()

    # --- extension registry ---

    @classmethod
    def extend(cls, name: str, extension: Callable[..., Any]) -> None:
        """
        register a named operation for every collection.
        invoked on an instance the extension receives the collection as its
        first argument, the way a method receives self.
        """
        cls._extensions.register(name, extension)

    macro = extend

    @classmethod
    def has_extension(cls, name: str) -> bool:
        return name in cls._extensions

    has_macro = has_extension

    def invoke(self, name: str, *args, **kwargs) -> Any:
        """run a registered extension against this collection"""
        return self._extensions.resolve(name)(self, *args, **kwargs)

    @classmethod
    def invoke_static(cls, name: str, *args, **kwargs) -> Any:
        """run a registered extension with no collection bound"""
        return cls._extensions.resolve(name)(*args, **kwargs)


# --- main collection class ---

class Collection(
    _BaseCollection[K, V],
    _CoreOperations[K, V],
    _SetOperations[K, V],
    _GroupingOperations[K, V],
    _SortingOperations[K, V],
    _StatsOperations[K, V],
    _ZipOperations[K, V],
    _TerminalOperations[K, V]
):
    """an ordered key/value collection with eager, chainable operations."""
    pass
