"""
Reading and writing values through property paths.

Object segments are resolved through getters first (get_name(),
is_name(), has_name(), getName()), then plain attributes. Mapping
segments and [index] segments are item lookups; a missing item reads
as None.
"""

import inspect
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from decimal import Decimal
from typing import Any, List, Union

from ..errors import NoSuchPropertyError, UnexpectedTypeError
from ..util.strings import camel_to_snake
from .path import PathElement, PropertyPath

SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool, Decimal)

PathLike = Union[str, PropertyPath]

_MISSING = object()


def is_scalar(value: Any) -> bool:
    """Check if a value is a scalar that can not be traversed."""
    return isinstance(value, SCALAR_TYPES)


def _ucfirst(name: str) -> str:
    return name[:1].upper() + name[1:]


def _unique(*names: str) -> List[str]:
    result = []
    for name in names:
        if name not in result:
            result.append(name)
    return result


class PropertyAccessor:
    """
    Reads and writes values of an object graph by property path.

        accessor = PropertyAccessor()
        accessor.get_value(order, 'customer.address[city]')
        accessor.set_value(order, 'customer.name', 'Ann')
    """

    def get_value(self, object_or_array: Any, property_path: PathLike) -> Any:
        """Return the value at the end of the property path."""
        path = PropertyPath(property_path)
        value = object_or_array
        elements = path.elements

        for position, element in enumerate(elements):
            if position > 0 and (value is None or is_scalar(value)):
                raise UnexpectedTypeError(
                    f'PropertyAccessor requires a graph of objects or arrays to operate on, '
                    f'but it found type "{type(value).__name__}" while trying to traverse path '
                    f'"{path}" at property "{element.name}".',
                    path=str(path),
                )
            value = self._read(value, element, path)

        return value

    def set_value(self, object_or_array: Any, property_path: PathLike, value: Any) -> None:
        """Set the value at the end of the property path."""
        path = PropertyPath(property_path)
        parent_path = path.parent
        target = object_or_array if parent_path is None else self.get_value(object_or_array, parent_path)

        if target is None or is_scalar(target):
            raise UnexpectedTypeError(
                f'PropertyAccessor requires a graph of objects or arrays to operate on, '
                f'but it found type "{type(target).__name__}" while trying to write path "{path}".',
                path=str(path),
            )

        self._write(target, path.last, value, path)

    def is_readable(self, object_or_array: Any, property_path: PathLike) -> bool:
        """Check whether the property path can be read."""
        try:
            PropertyAccessor.get_value(self, object_or_array, property_path)
        except (NoSuchPropertyError, UnexpectedTypeError):
            return False

        return True

    def is_writable(self, object_or_array: Any, property_path: PathLike) -> bool:
        """Check whether a value can be written at the end of the property path."""
        path = PropertyPath(property_path)
        parent_path = path.parent
        try:
            target = object_or_array if parent_path is None else self.get_value(object_or_array, parent_path)
        except (NoSuchPropertyError, UnexpectedTypeError):
            return False

        if target is None or is_scalar(target):
            return False

        element = path.last
        if isinstance(target, MutableMapping):
            return True
        if isinstance(target, MutableSequence):
            index = self._sequence_index(element.name)
            return index is not None and -len(target) <= index <= len(target)
        if element.is_index or isinstance(target, (Mapping, Sequence)):
            return False

        if self._find_setter(target, element.name) is not None:
            return True

        return self._attribute_writable(target, element.name)

    # Reading

    def _read(self, value: Any, element: PathElement, path: PropertyPath) -> Any:
        if element.is_index or isinstance(value, Mapping):
            return self._read_index(value, element.name, path)

        if isinstance(value, Sequence):
            raise NoSuchPropertyError(
                f'Cannot read property "{element.name}" from a {type(value).__name__}. '
                f'Maybe you intended to write the property path as "[{element.name}]" instead.',
                path=str(path),
            )

        return self._read_property(value, element.name, path)

    def _read_index(self, container: Any, key: str, path: PropertyPath) -> Any:
        if isinstance(container, Mapping):
            if key in container:
                return container[key]
            index = self._sequence_index(key)
            if index is not None and index in container:
                return container[index]
            return None

        if isinstance(container, Sequence) and not is_scalar(container):
            index = self._sequence_index(key)
            if index is None:
                raise NoSuchPropertyError(
                    f'Index "{key}" of a {type(container).__name__} must be an integer.',
                    path=str(path),
                )
            if -len(container) <= index < len(container):
                return container[index]
            return None

        if hasattr(container, '__getitem__') and not is_scalar(container):
            try:
                return container[key]
            except (KeyError, IndexError):
                return None

        raise UnexpectedTypeError(
            f'Cannot read index "{key}" from an object of type "{type(container).__name__}".',
            path=str(path),
        )

    def _read_property(self, obj: Any, name: str, path: PropertyPath) -> Any:
        getter = self._find_getter(obj, name)
        if getter is not None:
            return getter()

        for attribute in _unique(name, camel_to_snake(name)):
            value = getattr(obj, attribute, _MISSING)
            if value is not _MISSING:
                if inspect.ismethod(value) and not self._requires_arguments(value):
                    return value()
                return value

        raise NoSuchPropertyError(
            f'Can\'t get a way to read the property "{name}" in class "{type(obj).__qualname__}".',
            path=str(path),
        )

    def _find_getter(self, obj: Any, name: str):
        snake = camel_to_snake(name)
        candidates = _unique(
            f"get_{snake}", f"is_{snake}", f"has_{snake}",
            f"get{_ucfirst(name)}", f"is{_ucfirst(name)}", f"has{_ucfirst(name)}",
        )
        for candidate in candidates:
            method = getattr(obj, candidate, None)
            if method is not None and inspect.ismethod(method) and not self._requires_arguments(method):
                return method
        return None

    @staticmethod
    def _requires_arguments(method) -> bool:
        try:
            signature = inspect.signature(method)
        except (TypeError, ValueError):
            return False

        return any(
            p.default is inspect.Parameter.empty
            and p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD,
                           inspect.Parameter.KEYWORD_ONLY)
            for p in signature.parameters.values()
        )

    @staticmethod
    def _sequence_index(key: Any):
        if isinstance(key, int):
            return key
        try:
            return int(key)
        except (TypeError, ValueError):
            return None

    # Writing

    def _write(self, target: Any, element: PathElement, value: Any, path: PropertyPath) -> None:
        if isinstance(target, MutableMapping):
            key = element.name
            if key not in target:
                index = self._sequence_index(key)
                if index is not None and index in target:
                    key = index
            target[key] = value
            return

        if isinstance(target, MutableSequence):
            index = self._sequence_index(element.name)
            if index is None or not -len(target) <= index <= len(target):
                raise NoSuchPropertyError(
                    f'Cannot write index "{element.name}" of a {type(target).__name__} '
                    f'with {len(target)} items.',
                    path=str(path),
                )
            if index == len(target):
                target.append(value)
            else:
                target[index] = value
            return

        if element.is_index or isinstance(target, (Mapping, Sequence)):
            raise UnexpectedTypeError(
                f'Cannot write index "{element.name}" to an object of type "{type(target).__name__}".',
                path=str(path),
            )

        setter = self._find_setter(target, element.name)
        if setter is not None:
            setter(value)
            return

        if not self._attribute_writable(target, element.name):
            raise NoSuchPropertyError(
                f'Can\'t get a way to write the property "{element.name}" in class '
                f'"{type(target).__qualname__}".',
                path=str(path),
            )

        try:
            setattr(target, element.name, value)
        except AttributeError as e:
            raise NoSuchPropertyError(
                f'Can\'t write the property "{element.name}" in class "{type(target).__qualname__}": {e}',
                path=str(path),
                cause=e,
            )

    @staticmethod
    def _find_setter(obj: Any, name: str):
        for candidate in _unique(f"set_{camel_to_snake(name)}", f"set{_ucfirst(name)}"):
            method = getattr(obj, candidate, None)
            if method is not None and inspect.ismethod(method):
                return method
        return None

    @staticmethod
    def _attribute_writable(obj: Any, name: str) -> bool:
        descriptor = inspect.getattr_static(type(obj), name, None)
        if isinstance(descriptor, property):
            return descriptor.fset is not None
        if hasattr(obj, '__dict__'):
            return True

        # Objects with __slots__ only accept declared attributes
        slots = set()
        for klass in type(obj).__mro__:
            declared = getattr(klass, '__slots__', ())
            slots.update([declared] if isinstance(declared, str) else declared)
        return name in slots
