"""
'      ______ ____  __    __    ______ ______ ________  __
'     / ____// __ \/ /   / /   / ____// ____//_  __/\ \/ /
'    / /    / / / / /   / /   / __/  / /      / /    \  /
'   / /___ / /_/ / /___/ /___/ /___ / /___   / /     / /
'   \____/ \____/_____/_____/_____/ \____/  /_/     /_/
"""
import logging

# expose the main class
from .collection import Collection

# expose the factory functions
from .factories import (
    collect,
    from_range,
    times,
    repeat,
    empty,
    C
)

# expose supporting types
from .types import (
    NO_KEY,
    CachingIterator,
    UnknownOperationError,
    Arrayable,
    Jsonable,
    JsonSerializable
)
from .registry import ExtensionRegistry

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Collection",
    "collect",
    "from_range",
    "times",
    "repeat",
    "empty",
    "C",
    "NO_KEY",
    "CachingIterator",
    "UnknownOperationError",
    "Arrayable",
    "Jsonable",
    "JsonSerializable",
    "ExtensionRegistry"
]
