from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Set, Tuple, Protocol, runtime_checkable
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[..., bool]
Selector = Callable[..., Any]
Comparer = Callable[[Any, Any], int]
Accumulator = Callable[[U, T], U]
ValueSelector = Union[None, str, Selector]


class _Sentinel:
    """named marker object, distinct from every user value"""

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False


# "append with the next integer key"
NO_KEY = _Sentinel('NO_KEY')
# "argument not supplied", lets None be a real argument value
MISSING = _Sentinel('MISSING')


class UnknownOperationError(AttributeError):
    """raised when an operation name is not in the extension registry."""
    pass


@runtime_checkable
class Arrayable(Protocol):
    def to_array(self) -> Any: ...


@runtime_checkable
class Jsonable(Protocol):
    def to_json(self) -> str: ...


@runtime_checkable
class JsonSerializable(Protocol):
    def json_serialize(self) -> Any: ...


class CachingIterator(Generic[K, V]):
    """
    one-element look-ahead over (key, value) pairs.
    the pair returned by next() stays available as current()/key() and
    has_next() answers without consuming anything from the caller's view.
    """

    def __init__(self, pairs: Iterable[Tuple[K, V]]):
        self._source = iter(pairs)
        self._current: Optional[Tuple[K, V]] = None
        self._lookahead: Optional[Tuple[K, V]] = None
        self._exhausted = False
        self._advance()

    def _advance(self):
        try:
            self._lookahead = next(self._source)
        except StopIteration:
            self._lookahead = None
            self._exhausted = True

    def has_next(self) -> bool:
        return not self._exhausted

    def current(self) -> Optional[V]:
        return self._current[1] if self._current is not None else None

    def key(self) -> Optional[K]:
        return self._current[0] if self._current is not None else None

    def __iter__(self) -> Iterator[Tuple[K, V]]:
        return self

    def __next__(self) -> Tuple[K, V]:
        if self._exhausted:
            raise StopIteration
        self._current = self._lookahead
        self._advance()
        return self._current

    def __repr__(self) -> str:
        return f"CachingIterator(current={self._current}, has_next={self.has_next()})"
