"""
Uniform access to composite values: arrays (lists, dicts) and objects.
"""

from collections.abc import Mapping, Sequence
from types import ModuleType
from typing import Any

from ..errors import InvalidArgumentError
from ..property import is_scalar
from . import arrays, objects


def has_array_access(source: Any) -> bool:
    """Check if the source supports item access."""
    return isinstance(source, (Mapping, Sequence)) and not is_scalar(source)


def _wrapper(source: Any) -> ModuleType:
    if has_array_access(source):
        return arrays
    if source is not None and not is_scalar(source):
        return objects

    raise InvalidArgumentError(f"Type '{type(source).__name__}' is not supported")


def has(source: Any, key: Any) -> bool:
    """Check if an array has the key, or an object has a readable property."""
    return _wrapper(source).has(source, key)


def get(source: Any, key: Any) -> Any:
    """Get an array item or an object property."""
    return _wrapper(source).get(source, key)


def set(source: Any, key: Any, value: Any) -> Any:
    """
    Set an array item or an object property.

    Arrays are copied and the new array is returned. Objects are modified
    in place and returned.
    """
    if _wrapper(source) is objects:
        objects.set(source, key, value)
        return source

    return arrays.set(source if isinstance(source, Mapping) else list(source), key, value)
