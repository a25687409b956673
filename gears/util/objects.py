"""
Object utilities.

Property paths are resolved through gears.property.PropertyAccessor.
"""

import enum
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional

from ..property import PropertyAccessor, RecursivePropertyAccessor, is_scalar
from . import arrays
from .classes import full_name, resolve_class


def identifier(obj: Any) -> int:
    """Return the object identifier, unique among simultaneously existing objects."""
    return id(obj)


def get(obj: Any, path: str) -> Any:
    """Return the value at the end of the property path of the object graph."""
    return PropertyAccessor().get_value(obj, path)


def set(obj: Any, path: str, value: Any) -> None:
    """Set the value at the end of the property path of the object graph."""
    PropertyAccessor().set_value(obj, path, value)


def has(obj: Any, path: str) -> bool:
    """Check whether a property path exists and can be read from an object."""
    return PropertyAccessor().is_readable(obj, path)


def get_recursive(obj: Any, path: str) -> List[Any]:
    """
    Get the values of the property path of the object recursively.

        grandfather = Person('grandfather')
        dad = Person('dad', parent=grandfather)
        me = Person('me', parent=dad)

        get_recursive(me, 'parent')  # [dad, grandfather]
    """
    return RecursivePropertyAccessor().get_value(obj, path)


def _internal_names(obj: Any, name: str, scope: Optional[type]) -> List[str]:
    bare = name.lstrip('_')
    klass = scope or type(obj)
    return [f"_{klass.__name__.lstrip('_')}__{bare}", f"_{bare}", name]


def _find_internal(obj: Any, name: str, scope: Optional[type]) -> str:
    for candidate in _internal_names(obj, name, scope):
        if hasattr(obj, candidate):
            return candidate
    raise AttributeError(f"'{type(obj).__qualname__}' object has no internal member '{name}'")


def get_internal(obj: Any, name: str, scope: Optional[type] = None) -> Any:
    """
    Read a non-public attribute.

    Looks for the name mangled for the scope class (the object class by
    default), then the single underscore name, then the name itself.
    """
    return getattr(obj, _find_internal(obj, name, scope))


def set_internal(obj: Any, name: str, value: Any, scope: Optional[type] = None) -> None:
    """
    Write a non-public attribute.

    An existing attribute is overwritten under its own name, otherwise the
    name mangled for the scope class is created.
    """
    try:
        attribute = _find_internal(obj, name, scope)
    except AttributeError:
        attribute = _internal_names(obj, name, scope)[0]
    setattr(obj, attribute, value)


def call_internal(obj: Any, method: str, args: Optional[list] = None, scope: Optional[type] = None) -> Any:
    """Call a non-public method and return the result."""
    return get_internal(obj, method, scope)(*(args or []))


def to_class_name(target: Any) -> Optional[str]:
    """
    Determine the dotted class name of the target.

    - an object gives the name of its class
    - the name of an importable class is returned as is
    - a class gives its own name
    - anything else gives None
    """
    if isinstance(target, type):
        return full_name(target)
    if isinstance(target, str):
        return target if resolve_class(target) is not None else None
    return full_name(type(target))


def to_string(obj: Any) -> str:
    """
    Get a string representation of an object or an enum member.

    - the str() of an object with its own __str__
    - the value of a str or int valued enum member
    - the name of any other enum member
    - else a generated string like "package.module.Class@140234"
    """
    if isinstance(obj, enum.Enum):
        if isinstance(obj.value, (str, int)) and not isinstance(obj.value, bool):
            return str(obj.value)
        return obj.name

    if type(obj).__str__ is not object.__str__:
        return str(obj)

    return f"{full_name(type(obj))}@{id(obj)}"


def get_property_recursive(obj: Any, prop: str, add_source: bool = False) -> List[Any]:
    """
    Get the values of a property recursively, depth first.

    The property may hold a single object or an iterable of objects; None
    values end the recursion.
    """
    result = [obj] if add_source else []

    items = get(obj, prop)
    if isinstance(items, Mapping):
        items = list(items.values())
    elif is_scalar(items) or not isinstance(items, Iterable):
        items = [items]

    for item in items:
        if item is not None:
            result = arrays.merge(result, get_property_recursive(item, prop, True))

    return result


def get_property_recursive_last(obj: Any, prop: str) -> List[Any]:
    """Get the recursive values of a property that have no further value (the leaves)."""
    return [item for item in get_property_recursive(obj, prop) if get(item, prop) is None]
