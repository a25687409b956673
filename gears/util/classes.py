"""
Class and callable utilities.
"""

import importlib
import inspect
from typing import Any, Callable, Optional, Union

from ..errors import InvalidArgumentError

SEPARATOR = '::'


def short_name(class_or_object: Union[type, Any]) -> str:
    """Return the class name without module and outer classes."""
    klass = class_or_object if isinstance(class_or_object, type) else type(class_or_object)
    return klass.__qualname__.rsplit('.', 1)[-1]


def full_name(klass: type) -> str:
    """Return the importable dotted name of a class."""
    return f"{klass.__module__}.{klass.__qualname__}"


def _import_attribute(module_name: str, attribute_path: str) -> Any:
    value = importlib.import_module(module_name)
    for attribute in attribute_path.split('.'):
        value = getattr(value, attribute)
    return value


def resolve_class(path: str) -> Optional[type]:
    """
    Resolve a dotted class path ("package.module.Class") to the class.
    Returns None if nothing importable with this name is a class.
    """
    if not isinstance(path, str) or not path:
        return None

    parts = path.split('.')
    for split in range(len(parts) - 1, 0, -1):
        module_name, attribute_path = '.'.join(parts[:split]), '.'.join(parts[split:])
        try:
            value = _import_attribute(module_name, attribute_path)
        except (ImportError, AttributeError, ValueError):
            continue
        return value if isinstance(value, type) else None

    return None


def parse_callable(expression: str) -> Callable:
    """
    Parse a callable from a string expression.

    Supported syntax:
    - 'package.module::function'
    - 'package.module::Class.method'
    - 'package.module.function'
    """
    if SEPARATOR in expression:
        module_name, attribute_path = expression.split(SEPARATOR, 1)
    elif '.' in expression:
        module_name, attribute_path = expression.rsplit('.', 1)
    else:
        module_name, attribute_path = 'builtins', expression

    try:
        value = _import_attribute(module_name, attribute_path)
    except (ImportError, AttributeError) as e:
        raise InvalidArgumentError(f'Unable to resolve callable "{expression}": {e}', cause=e)

    if not callable(value):
        raise InvalidArgumentError(f'"{expression}" is not callable')

    return value


def is_closure(fn: Callable) -> bool:
    """
    Determine if a callable is an anonymous or a nested function.

        is_closure(lambda x: x)  # True
        is_closure(len)          # False
    """
    return inspect.isfunction(fn) and (fn.__name__ == '<lambda>' or '<locals>' in fn.__qualname__)


def is_function(fn: Union[Callable, str]) -> bool:
    """Determine if a callable is a plain module-level function (or names one)."""
    if isinstance(fn, str):
        return SEPARATOR not in fn or '.' not in fn.split(SEPARATOR, 1)[1]
    if is_closure(fn):
        return False
    if inspect.isbuiltin(fn):
        return fn.__self__ is None or inspect.ismodule(fn.__self__)
    return inspect.isfunction(fn) and '.' not in fn.__qualname__


def is_method(fn: Union[Callable, str]) -> bool:
    """Determine if a callable is a method (bound, or referenced through a class)."""
    if isinstance(fn, str):
        return not is_function(fn)
    if isinstance(fn, tuple):
        return True
    if is_closure(fn) or is_function(fn):
        return False
    return inspect.ismethod(fn) or inspect.isfunction(fn) or inspect.ismethoddescriptor(fn) \
        or inspect.isbuiltin(fn)


def is_static_method(fn: Union[Callable, str]) -> bool:
    """
    Determine if a callable is a static method or a class method.

    A method bound to an instance is not static.
    """
    if not is_method(fn):
        return False
    if isinstance(fn, str):
        return True
    if isinstance(fn, tuple):
        return isinstance(fn[0], type)
    if inspect.ismethod(fn):
        return isinstance(fn.__self__, type)
    if inspect.isbuiltin(fn):
        return fn.__self__ is None or isinstance(fn.__self__, type)
    return inspect.isfunction(fn)


def reflection(fn: Union[Callable, str, tuple]) -> inspect.Signature:
    """Return the signature of a callable, a (class_or_object, name) pair or an expression."""
    if isinstance(fn, str):
        fn = parse_callable(fn)
    elif isinstance(fn, tuple):
        owner, name = fn
        fn = getattr(owner, name)

    return inspect.signature(fn)
