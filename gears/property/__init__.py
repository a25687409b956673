"""
Property access package: read and write values of object graphs by path.
"""

from .path import PropertyPath, PathElement
from .accessor import PropertyAccessor, is_scalar
from .recursive import NullTolerancePropertyAccessor, RecursivePropertyAccessor
from ..errors import (
    AccessError, NoSuchPropertyError, UnexpectedTypeError, InvalidPropertyPathError
)

__all__ = [
    'PropertyPath', 'PathElement',
    'PropertyAccessor', 'NullTolerancePropertyAccessor', 'RecursivePropertyAccessor',
    'is_scalar',
    'AccessError', 'NoSuchPropertyError', 'UnexpectedTypeError', 'InvalidPropertyPathError',
]
