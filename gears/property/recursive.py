"""
Null-tolerant and recursive flavours of the property accessor.
"""

from collections.abc import Iterable, Mapping
from typing import Any, List

from ..errors import NoSuchPropertyError, UnexpectedTypeError
from .accessor import PathLike, PropertyAccessor, is_scalar


class NullTolerancePropertyAccessor(PropertyAccessor):
    """Property accessor that reads unreadable paths as None instead of raising."""

    def get_value(self, object_or_array: Any, property_path: PathLike) -> Any:
        try:
            return super().get_value(object_or_array, property_path)
        except (NoSuchPropertyError, UnexpectedTypeError):
            return None


def _values(value: Any) -> List[Any]:
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, Iterable) and not is_scalar(value):
        return list(value)
    return [value]


class RecursivePropertyAccessor(PropertyAccessor):
    """
    Follows a property path again and again and collects everything found.

        grandfather = Person('grandfather')
        dad = Person('dad', parent=grandfather)
        me = Person('me', parent=dad)

        RecursivePropertyAccessor().get_value(me, 'parent')  # [dad, grandfather]

    Collections found at the path are expanded, so 'children' collects a
    whole subtree in depth-first order. None values are skipped and an
    object is never traversed twice, so cyclic graphs terminate.
    """

    def get_value(self, object_or_array: Any, property_path: PathLike) -> List[Any]:
        result: List[Any] = []
        visited = {id(object_or_array)}
        self._collect(object_or_array, property_path, result, visited)
        return result

    def _collect(self, current: Any, property_path: PathLike, result: List[Any], visited: set) -> None:
        for value in _values(super().get_value(current, property_path)):
            if value is None:
                continue

            result.append(value)

            if is_scalar(value) or id(value) in visited:
                continue
            visited.add(id(value))

            self._collect(value, property_path, result, visited)
