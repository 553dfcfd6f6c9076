from __future__ import annotations
import math
import typing
from ..types import *
from ..support import value_retriever

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _GroupingOperations(Generic[K, V]):

    def group_by(self: 'Collection[K, V]', group_by: ValueSelector,
                 preserve_keys: bool = False) -> 'Collection[Any, Collection[K, V]]':
        """
        bucket entries into sub-collections by the resolved group key.
        a selector that yields a list puts the entry into every listed group.
        """
        from ..collection import Collection
        retriever = value_retriever(group_by)
        results: Dict[Any, Collection] = {}
        for key, value in self._items.items():
            group_keys = retriever(value, key)
            if isinstance(group_keys, Collection):
                group_keys = group_keys.to_list()
            elif not isinstance(group_keys, (list, tuple, set)):
                group_keys = [group_keys]

            for group_key in group_keys:
                if group_key not in results:
                    results[group_key] = self._new()
                results[group_key].set(key if preserve_keys else NO_KEY, value)
        return self._new(results)

    def key_by(self: 'Collection[K, V]', key_by: ValueSelector) -> 'Collection[Any, V]':
        """re-key entries by the resolved value; the last entry wins a collision"""
        retriever = value_retriever(key_by)
        return self._new({retriever(value, key): value for key, value in self._items.items()})

    def chunk(self: 'Collection[K, V]', size: int) -> 'Collection[int, Collection[K, V]]':
        """consecutive sub-collections of at most size entries, original keys kept"""
        if size <= 0:
            return self._new()
        pairs = list(self._items.items())
        return self._new([self._new(dict(pairs[i:i + size])) for i in range(0, len(pairs), size)])

    def split(self: 'Collection[K, V]', number_of_groups: int) -> 'Collection[int, Collection[K, V]]':
        if number_of_groups <= 0:
            raise ValueError("number of groups must be positive")
        if not self._items:
            return self._new()
        return self.chunk(math.ceil(len(self._items) / number_of_groups))

    def every(self: 'Collection[K, V]', step: int, offset: int = 0) -> 'Collection[int, V]':
        """every step-th value, counting positions from offset"""
        if step <= 0:
            raise ValueError("step must be positive")
        return self._new([value for position, value in enumerate(self._items.values())
                          if position % step == offset])

    nth = every
