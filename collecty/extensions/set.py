from __future__ import annotations
import typing
from ..types import *
from ..compare import contains_value
from ..support import array_merge, value_retriever

if typing.TYPE_CHECKING:
    from ..collection import Collection


def _key_list(keys: Tuple[Any, ...]) -> Optional[List[Any]]:
    """only('a', 'b') and only(['a', 'b']) are the same call"""
    if len(keys) == 1 and isinstance(keys[0], (list, tuple, set)):
        return list(keys[0])
    if len(keys) == 1 and keys[0] is None:
        return None
    return list(keys)


class _SetOperations(Generic[K, V]):
    """
    key- and value-based set algebra over collections.
    the argument of each operation may be anything a collection can be built from.
    """

    def merge(self: 'Collection[K, V]', items: Any) -> 'Collection':
        """incoming values overwrite on string keys; integer keys are appended"""
        return self._new(array_merge(self._items, self._get_arrayable_items(items)))

    def union(self: 'Collection[K, V]', items: Any) -> 'Collection':
        """existing entries win on key collisions"""
        result = dict(self._items)
        for key, value in self._get_arrayable_items(items).items():
            result.setdefault(key, value)
        return self._new(result)

    def diff(self: 'Collection[K, V]', items: Any) -> 'Collection[K, V]':
        """entries whose value does not appear in items"""
        others = list(self._get_arrayable_items(items).values())
        return self._new({key: value for key, value in self._items.items() if not contains_value(others, value)})

    def diff_keys(self: 'Collection[K, V]', items: Any) -> 'Collection[K, V]':
        others = self._get_arrayable_items(items)
        return self._new({key: value for key, value in self._items.items() if key not in others})

    def intersect(self: 'Collection[K, V]', items: Any) -> 'Collection[K, V]':
        """entries whose value also appears in items, keyed as in this collection"""
        others = list(self._get_arrayable_items(items).values())
        return self._new({key: value for key, value in self._items.items() if contains_value(others, value)})

    def only(self: 'Collection[K, V]', *keys: Any) -> 'Collection[K, V]':
        wanted = _key_list(keys)
        if wanted is None:
            return self._new(self)
        return self._new({key: value for key, value in self._items.items() if key in wanted})

    def except_(self: 'Collection[K, V]', *keys: Any) -> 'Collection[K, V]':
        unwanted = _key_list(keys) or []
        return self._new({key: value for key, value in self._items.items() if key not in unwanted})

    def unique(self: 'Collection[K, V]', key: ValueSelector = None, strict: bool = False) -> 'Collection[K, V]':
        """keep the first entry per resolved value; keys are preserved"""
        retriever = value_retriever(key)
        seen: List[Any] = []

        def is_duplicate(value, item_key):
            identity = retriever(value, item_key)
            if contains_value(seen, identity, strict):
                return True
            seen.append(identity)
            return False

        return self.reject(is_duplicate)

    def unique_strict(self: 'Collection[K, V]', key: ValueSelector = None) -> 'Collection[K, V]':
        return self.unique(key, True)

    def combine(self: 'Collection[K, V]', values: Any) -> 'Collection':
        """this collection's values become keys for the given values, paired by position"""
        incoming = self._get_arrayable_items(values).values()
        return self._new(dict(zip(self._items.values(), incoming)))
