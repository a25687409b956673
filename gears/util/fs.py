"""
Filesystem path helpers.
"""

import re
from typing import Iterable

UNIX_DIRECTORY_SEPARATOR = '/'
WINDOWS_DIRECTORY_SEPARATOR = '\\'


def join_paths(paths: Iterable[str], separator: str = UNIX_DIRECTORY_SEPARATOR) -> str:
    """
    Join paths and collapse repeated separators.

        >>> join_paths(['a/', '/b/', '/c', 'd'])
        'a/b/c/d'
    """
    joined = separator.join(str(path) for path in paths)
    return re.sub(re.escape(separator) + '+', lambda _: separator, joined)


def normalize_separators(path: str, separator: str = UNIX_DIRECTORY_SEPARATOR) -> str:
    """Replace unix and windows separators with the given one and collapse repeats."""
    return re.sub(r'[\\/]+', lambda _: separator, path)
