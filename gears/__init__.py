"""
Gears Python Package

Everyday helpers for arrays, strings, objects and HTML, plus building
blocks for criteria queries, event stores, message buses, security voters,
validation errors and identifier value objects.
"""

__version__ = "0.1.0"

from .core.config import Config
from .errors import ErrorCode, GearsError

__all__ = [
    "Config",
    "ErrorCode",
    "GearsError",
]
