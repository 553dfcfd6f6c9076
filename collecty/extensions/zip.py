from __future__ import annotations
import typing
from itertools import zip_longest
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import Collection


class _ZipOperations(Generic[K, V]):
    def zip(self: 'Collection[K, V]', *items: Any) -> 'Collection[int, Collection[int, Any]]':
        """position-wise tuples as sub-collections, shorter inputs padded with None"""
        columns = [list(self._items.values())]
        columns.extend(list(self._get_arrayable_items(other).values()) for other in items)
        return self._new([self._new(list(row)) for row in zip_longest(*columns, fillvalue=None)])
