"""helpers for resolving selectors, dot-paths and user callbacks."""
import inspect
from collections.abc import Mapping
from itertools import chain
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
from .types import MISSING, NO_KEY, ValueSelector

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _arity(func: Callable) -> Optional[int]:
    """number of positional arguments func takes, None when it takes *args"""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without introspectable signatures (str, int, ...) take one value
        return 1
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if parameter.kind in _POSITIONAL:
            count += 1
    return count


def adapt(func: Callable) -> Callable:
    """
    wrap a callback so it can always be called with the full argument list.
    extra trailing arguments are dropped, so `lambda v: ...` and
    `lambda v, k: ...` both work where an operation passes (value, key).
    """
    arity = _arity(func)
    if arity is None:
        return func
    return lambda *args: func(*args[:arity])


def value_of(value: Any) -> Any:
    """resolve a lazily supplied default"""
    return value() if callable(value) else value


def _is_list_like(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def element_values(target: Any) -> Optional[List[Any]]:
    from .collection import Collection
    if isinstance(target, Collection):
        return list(target.to_dict().values())
    if isinstance(target, Mapping):
        return list(target.values())
    if _is_list_like(target):
        return list(target)
    return None


def _lookup(target: Any, segment: Any) -> Any:
    """one path step; MISSING when the segment does not resolve"""
    from .collection import Collection
    int_segment = int(segment) if isinstance(segment, str) and segment.lstrip('-').isdigit() else segment

    if isinstance(target, (Collection, Mapping)):
        for candidate in (segment, int_segment):
            if candidate in target:
                return target[candidate]
        return MISSING

    if _is_list_like(target):
        if isinstance(int_segment, int) and -len(target) <= int_segment < len(target):
            return target[int_segment]
        return MISSING

    if isinstance(target, str) or target is None:
        return MISSING

    if hasattr(target, '__getitem__'):
        try:
            return target[segment]
        except (KeyError, IndexError, TypeError):
            pass

    if isinstance(segment, str):
        return getattr(target, segment, MISSING)
    return MISSING


def collapse_lists(values: Sequence[Any]) -> List[Any]:
    """merge one level of nested lists; anything else is skipped"""
    result = []
    for value in values:
        nested = element_values(value)
        if nested is not None:
            result.extend(nested)
    return result


def data_get(target: Any, path: Union[str, int, List[Any], None], default: Any = None) -> Any:
    """
    walk a dot-path ("user.address.city") through mappings, sequences,
    collections, item-accessible objects and plain attributes.
    a "*" segment applies the rest of the path to every element at that level.
    """
    if path is None:
        return target
    segments = path if isinstance(path, list) else (path.split('.') if isinstance(path, str) else [path])

    for index, segment in enumerate(segments):
        if segment == '*':
            elements = element_values(target)
            if elements is None:
                return value_of(default)
            rest = segments[index + 1:]
            result = [data_get(element, rest) for element in elements]
            return collapse_lists(result) if '*' in rest else result

        target = _lookup(target, segment)
        if target is MISSING:
            return value_of(default)

    return target


def value_retriever(selector: ValueSelector) -> Callable[..., Any]:
    """turn None / a dot-path / a callable into a (value, key) -> resolved function"""
    if selector is None:
        return lambda value, key=None: value
    if callable(selector):
        return adapt(selector)
    return lambda value, key=None: data_get(value, selector)


def renumber(pairs: Iterable[Tuple[Any, Any]]) -> Dict[Any, Any]:
    """rebuild pairs with integer (and NO_KEY) keys renumbered from 0; other keys kept"""
    result, next_index = {}, 0
    for key, value in pairs:
        if key is NO_KEY or (isinstance(key, int) and not isinstance(key, bool)):
            result[next_index] = value
            next_index += 1
        else:
            result[key] = value
    return result


def array_merge(*sources: Mapping) -> Dict[Any, Any]:
    """later string keys overwrite earlier ones, integer keys are appended"""
    return renumber(chain.from_iterable(source.items() for source in sources))
