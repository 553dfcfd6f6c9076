from __future__ import annotations
import random
import typing
from functools import cmp_to_key
from ..types import *
from ..compare import natural_key, sort_key
from ..support import value_retriever

if typing.TYPE_CHECKING:
    from ..collection import Collection


def _sign(result: Any) -> int:
    # comparators may return bools or floats
    return (result > 0) - (result < 0)


class _SortingOperations(Generic[K, V]):
    """every sort here is stable: equal elements keep their original order."""

    def _sorted_by(self: 'Collection[K, V]', key: Callable[[Tuple[K, V]], Any],
                   reverse: bool = False) -> 'Collection[K, V]':
        # python's sort is stable, reverse=True included
        return self._new(dict(sorted(self._items.items(), key=key, reverse=reverse)))

    def _sorted_with(self: 'Collection[K, V]', comparator: Comparer, on_key: bool = False) -> 'Collection[K, V]':
        """comparator sort with explicit tie-breaking on original position"""
        def compare_entries(a, b):
            (index_a, (key_a, value_a)), (index_b, (key_b, value_b)) = a, b
            result = _sign(comparator(key_a, key_b) if on_key else comparator(value_a, value_b))
            return result if result else _sign(index_a - index_b)

        decorated = sorted(enumerate(self._items.items()), key=cmp_to_key(compare_entries))
        return self._new(dict(pair for _, pair in decorated))

    def sort(self: 'Collection[K, V]', callback: Optional[Comparer] = None) -> 'Collection[K, V]':
        """ascending by value, or by a three-way comparator; keys kept"""
        if callback is None:
            return self.asort()
        return self.uasort(callback)

    def sort_by(self: 'Collection[K, V]', callback: ValueSelector, descending: bool = False) -> 'Collection[K, V]':
        retriever = value_retriever(callback)
        resolved = {key: sort_key(retriever(value, key)) for key, value in self._items.items()}
        return self._sorted_by(lambda pair: resolved[pair[0]], descending)

    def sort_by_desc(self: 'Collection[K, V]', callback: ValueSelector) -> 'Collection[K, V]':
        return self.sort_by(callback, True)

    def asort(self: 'Collection[K, V]', natural: bool = False) -> 'Collection[K, V]':
        if natural:
            return self._sorted_by(lambda pair: natural_key(pair[1]))
        return self._sorted_by(lambda pair: sort_key(pair[1]))

    def arsort(self: 'Collection[K, V]', natural: bool = False) -> 'Collection[K, V]':
        if natural:
            return self._sorted_by(lambda pair: natural_key(pair[1]), reverse=True)
        return self._sorted_by(lambda pair: sort_key(pair[1]), reverse=True)

    def ksort(self: 'Collection[K, V]') -> 'Collection[K, V]':
        return self._sorted_by(lambda pair: sort_key(pair[0]))

    def krsort(self: 'Collection[K, V]') -> 'Collection[K, V]':
        return self._sorted_by(lambda pair: sort_key(pair[0]), reverse=True)

    def natsort(self: 'Collection[K, V]') -> 'Collection[K, V]':
        """natural order ('img2' before 'img10'), case-sensitive"""
        return self.asort(natural=True)

    def natcasesort(self: 'Collection[K, V]') -> 'Collection[K, V]':
        return self._sorted_by(lambda pair: natural_key(pair[1], ignore_case=True))

    def uasort(self: 'Collection[K, V]', comparator: Comparer) -> 'Collection[K, V]':
        return self._sorted_with(comparator)

    def uksort(self: 'Collection[K, V]', comparator: Comparer) -> 'Collection[K, V]':
        return self._sorted_with(comparator, on_key=True)

    def usort(self: 'Collection[K, V]', comparator: Comparer) -> 'Collection[int, V]':
        return self._sorted_with(comparator).values()

    def shuffle(self: 'Collection[K, V]', seed: Optional[int] = None) -> 'Collection[int, V]':
        """random order, renumbered; the same seed gives the same order"""
        values = list(self._items.values())
        random.Random(seed).shuffle(values)
        return self._new(values)
