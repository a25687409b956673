"""
Property path parsing.

A property path addresses a value inside a graph of objects and
containers:

    author.name          attribute (or getter) "name" of attribute "author"
    [0].name             item 0, then its "name"
    children[2][title]   item 2 of "children", then its item "title"
"""

import re
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from ..errors import InvalidPropertyPathError

_PROPERTY = re.compile(r'[^.\[\]]+')


@dataclass(frozen=True)
class PathElement:
    """A single segment of a property path."""
    name: str
    is_index: bool = False

    def __str__(self) -> str:
        return f"[{self.name}]" if self.is_index else self.name


class PropertyPath:
    """Parsed, immutable property path."""

    def __init__(self, path: Union[str, "PropertyPath"]):
        if isinstance(path, PropertyPath):
            self._path = path._path
            self._elements = path._elements
            return

        if not isinstance(path, str):
            raise InvalidPropertyPathError(
                f"Property path must be a string, got {type(path).__name__}"
            )

        self._path = path
        self._elements = self._parse(path)

    @staticmethod
    def _parse(path: str) -> Tuple[PathElement, ...]:
        if path == '':
            raise InvalidPropertyPathError("The property path should not be empty")

        elements = []
        pos = 0

        while pos < len(path):
            if path[pos] == '[':
                end = path.find(']', pos)
                if end == -1 or end == pos + 1:
                    raise InvalidPropertyPathError(
                        f'Could not parse property path "{path}". Unexpected token "[" at position {pos}.'
                    )
                elements.append(PathElement(path[pos + 1:end], is_index=True))
                pos = end + 1
                continue

            if elements:
                # Properties after the first segment are separated by a dot
                if path[pos] != '.':
                    raise InvalidPropertyPathError(
                        f'Could not parse property path "{path}". Unexpected token "{path[pos]}" at position {pos}.'
                    )
                pos += 1

            match = _PROPERTY.match(path, pos)
            if not match:
                raise InvalidPropertyPathError(
                    f'Could not parse property path "{path}". Unexpected end or token at position {pos}.'
                )
            elements.append(PathElement(match.group(0)))
            pos = match.end()

        return tuple(elements)

    @property
    def elements(self) -> Tuple[PathElement, ...]:
        return self._elements

    @property
    def parent(self) -> "PropertyPath":
        """The path without its last element (None for single-element paths)."""
        if len(self._elements) < 2:
            return None

        last = self._elements[-1]
        suffix_length = len(str(last)) + (0 if last.is_index else 1)
        return PropertyPath(self._path[:len(self._path) - suffix_length])

    @property
    def last(self) -> PathElement:
        return self._elements[-1]

    def __iter__(self) -> Iterator[PathElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"PropertyPath({self._path!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, PropertyPath):
            return self._path == other._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._path)
