import logging
from typing import Callable, Dict, Iterator, Any
from .types import UnknownOperationError

logger = logging.getLogger(__name__)

Extension = Callable[..., Any]


class ExtensionRegistry:
    """
    named operations added at runtime.
    entries are meant to be registered during start-up and only read after that;
    there is no removal and no locking.
    """

    def __init__(self):
        self._extensions: Dict[str, Extension] = {}

    def register(self, name: str, extension: Extension) -> None:
        if not callable(extension):
            raise TypeError(f"extension '{name}' must be callable, got {type(extension).__name__}")
        if name in self._extensions:
            logger.debug("replacing collection extension %r", name)
        else:
            logger.debug("registering collection extension %r", name)
        self._extensions[name] = extension

    def resolve(self, name: str) -> Extension:
        try:
            return self._extensions[name]
        except KeyError:
            raise UnknownOperationError(f"Method {name} does not exist.") from None

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    def __iter__(self) -> Iterator[str]:
        return iter(self._extensions)

    def __len__(self) -> int:
        return len(self._extensions)

    def __repr__(self) -> str:
        return f"ExtensionRegistry(names={sorted(self._extensions)})"
