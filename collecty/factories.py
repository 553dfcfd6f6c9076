import typing
from .types import *

if typing.TYPE_CHECKING:
    from .collection import Collection


def collect(items: Any = None) -> 'Collection':
    """create collection from any supported source"""
    from .collection import Collection
    return Collection(items)


def from_range(start: int, count: int) -> 'Collection[int, int]':
    """create collection of count consecutive integers"""
    from .collection import Collection
    return Collection(list(range(start, start + count)))


def times(count: int, callback: Optional[Callable[[int], T]] = None) -> 'Collection[int, T]':
    """call callback(n) for n in 1..count; without a callback the numbers themselves"""
    from .collection import Collection
    if count < 1:
        return Collection()
    numbers = range(1, count + 1)
    return Collection([callback(n) for n in numbers] if callback else list(numbers))


def repeat(item: T, count: int) -> 'Collection[int, T]':
    """create collection with repeated item"""
    from .collection import Collection
    return Collection([item] * count)


def empty() -> 'Collection':
    """create empty collection"""
    from .collection import Collection
    return Collection()


# --- aliases ---
C = collect
