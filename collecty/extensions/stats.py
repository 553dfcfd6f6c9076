from __future__ import annotations
import typing
import numpy as np
from ..types import *
from ..compare import compare, loose_equals, sort_key, to_number
from ..support import value_retriever

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _StatsOperations(Generic[K, V]):
    """
    aggregate statistics. every selector may be None (the raw value), a
    dot-path string, or a callable taking (value, key).
    entries that resolve to None are left out of every statistic.
    """

    def _resolved(self: 'Collection[K, V]', selector: ValueSelector) -> List[Any]:
        """helper to extract the non-None values a statistic works on."""
        retriever = value_retriever(selector)
        resolved = (retriever(value, key) for key, value in self._items.items())
        return [value for value in resolved if value is not None]

    def sum(self: 'Collection[K, V]', selector: ValueSelector = None) -> Any:
        """calc sum, 0 for an empty collection"""
        values = self._resolved(selector)
        if not values:
            return 0
        # numpy only for floats and numpy numbers; python ints would wrap at int64
        if all(isinstance(value, (float, np.number)) for value in values):
            return np.sum(values).item()
        return sum(to_number(value) for value in values)

    def average(self: 'Collection[K, V]', selector: ValueSelector = None) -> Optional[float]:
        """sum / count, None when empty"""
        count = len(self._items)
        if count == 0:
            return None
        return self.sum(selector) / count

    avg = average

    def max(self: 'Collection[K, V]', selector: ValueSelector = None) -> Any:
        result = None
        for value in self._resolved(selector):
            if result is None or compare(value, result) > 0:
                result = value
        return result

    def min(self: 'Collection[K, V]', selector: ValueSelector = None) -> Any:
        result = None
        for value in self._resolved(selector):
            if result is None or compare(value, result) < 0:
                result = value
        return result

    def median(self: 'Collection[K, V]', selector: ValueSelector = None) -> Any:
        """middle value, or the mean of the two middle values for an even count"""
        values = sorted(self._resolved(selector), key=sort_key)
        n = len(values)
        if n == 0:
            return None
        mid = n // 2
        if n % 2 == 0:
            return (to_number(values[mid - 1]) + to_number(values[mid])) / 2
        return values[mid]

    def mode(self: 'Collection[K, V]', selector: ValueSelector = None) -> Optional[List[Any]]:
        """the most frequent value(s), ascending; equal values counted with loose equality"""
        values = self._resolved(selector)
        if not values:
            return None
        counts: List[List[Any]] = []
        for value in values:
            for entry in counts:
                if loose_equals(entry[0], value):
                    entry[1] += 1
                    break
            else:
                counts.append([value, 1])
        highest = max(count for _, count in counts)
        return sorted((value for value, count in counts if count == highest), key=sort_key)
