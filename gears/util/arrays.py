"""
Array utilities for Gears.

Helpers for lists (sequences) and dicts (ordered mappings). Every
function returns a new container and leaves its input untouched.
Item values are addressed by property paths, see gears.property.
"""

import functools
import json
import logging
import math
from collections.abc import Iterable, Mapping, Sized
from typing import Any, Callable, Dict, List, Optional, Union

from ..errors import AccessError, InvalidArgumentError, JsonParseError
from ..property import PropertyAccessor

logger = logging.getLogger(__name__)

Array = Union[List[Any], Dict[Any, Any]]


def get_real_index(index: Any, array: Sized) -> Any:
    """Return the real index for a negative int index, else the index itself."""
    if isinstance(index, int) and not isinstance(index, bool) and index < 0:
        return len(array) + index
    return index


def has(array: Array, key: Any) -> bool:
    """Check if the key or index exists. Supports negative indexes."""
    real = get_real_index(key, array)
    if isinstance(array, Mapping):
        return real in array
    return isinstance(real, int) and 0 <= real < len(array)


def get(array: Array, key: Any, default: Any = None) -> Any:
    """Get an item, default if the key does not exist. Supports negative indexes."""
    if not has(array, key):
        return default
    return array[get_real_index(key, array)]


def set(array: Array, key: Any, value: Any) -> Array:
    """Return a copy of the array with the item set. Supports negative indexes."""
    real = get_real_index(key, array)
    if isinstance(array, Mapping):
        result = dict(array)
        result[real] = value
        return result

    result = list(array)
    if real == len(result):
        result.append(value)
    elif isinstance(real, int) and 0 <= real < len(result):
        result[real] = value
    else:
        raise InvalidArgumentError(f"Index {key} is out of range")
    return result


def contains(array: Array, value: Any) -> bool:
    """Check if a value exists in an array."""
    values = array.values() if isinstance(array, Mapping) else array
    return value in values


def insert_after(array: Dict[Any, Any], key: Any, insert: Dict[Any, Any]) -> Dict[Any, Any]:
    """Insert items after the key, or at the end if the key does not exist."""
    keys = list(array)
    if key not in array or keys.index(key) == len(keys) - 1:
        return {**array, **{k: v for k, v in insert.items() if k not in array}}

    position = keys.index(key) + 1
    return _splice(array, keys, position, insert)


def insert_before(array: Dict[Any, Any], key: Any, insert: Dict[Any, Any]) -> Dict[Any, Any]:
    """Insert items before the key, or at the beginning if the key does not exist."""
    keys = list(array)
    if key not in array or keys.index(key) == 0:
        return {**insert, **{k: v for k, v in array.items() if k not in insert}}

    return _splice(array, keys, keys.index(key), insert)


def _splice(array, keys, position, insert):
    # Existing keys keep their value and position
    result = {}
    for k in keys[:position]:
        result[k] = array[k]
    for k, v in insert.items():
        if k not in array:
            result[k] = v
    for k in keys[position:]:
        result[k] = array[k]
    return result


def group(items: Iterable[Any], column: Any) -> Dict[Any, List[Any]]:
    """Group items (mappings) by the value of a column; items without the column are skipped."""
    result: Dict[Any, List[Any]] = {}

    for item in _values(items):
        if isinstance(item, Mapping) and column in item:
            result.setdefault(item[column], []).append(item)

    return result


def ranges(values: Iterable[Any]) -> List[List[Any]]:
    """
    Create ranges from a list.

        >>> ranges([1, 3, 7, 9])
        [[1, 3], [3, 7], [7, 9], [9, None]]
    """
    result = []
    current = None

    for item in values:
        if current is not None:
            result.append([current, item])
        current = item

    if current is not None:
        result.append([current, None])

    return result


def unset_value(array: Array, value: Any) -> Array:
    """Remove the first item equal to the value."""
    array = to_array(array)

    if isinstance(array, Mapping):
        result = dict(array)
        for key, item in array.items():
            if item == value:
                del result[key]
                break
        return result

    result = list(array)
    if value in result:
        result.remove(value)
    return result


def to_array(value: Any) -> Array:
    """
    Cast to an array.

    Lists and dicts are returned as is, other iterables are converted to
    a list, anything else is wrapped: [value].
    """
    if isinstance(value, (list, dict)):
        return value
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray)):
        if isinstance(value, Mapping):
            return dict(value)
        return list(value)

    return [value]


def check_assoc(array: Array) -> bool:
    """Check if an array is associative (has string keys)."""
    return isinstance(array, Mapping) and any(isinstance(key, str) for key in array)


def merge(array1: Any, array2: Any) -> Array:
    """
    Merge two arrays.

    Two mappings are merged (the second wins), otherwise the values are
    concatenated into a list. Any iterable is accepted.
    """
    array1, array2 = to_array(array1), to_array(array2)

    if isinstance(array1, Mapping) and isinstance(array2, Mapping):
        return {**array1, **array2}

    return _values(array1) + _values(array2)


def _values(array: Any) -> List[Any]:
    array = to_array(array)
    return list(array.values()) if isinstance(array, Mapping) else list(array)


def _read(accessor: PropertyAccessor, item: Any, path: str) -> Any:
    try:
        return accessor.get_value(item, path)
    except AccessError:
        return None


def sort(
    array: Any,
    property_path: str,
    preserve_keys: bool = False,
    comparison: Optional[Callable[[Any, Any], int]] = None,
    reverse: bool = False,
) -> Array:
    """
    Sort items by the value at the property path.

    Unreadable values are treated as None and None sorts first. The
    optional comparison function follows the cmp() convention. With
    preserve_keys a dict of original key -> item is returned.
    """
    array = to_array(array)
    accessor = PropertyAccessor()

    def compare(left, right) -> int:
        left_value = _read(accessor, left[1], property_path)
        right_value = _read(accessor, right[1], property_path)

        # None is handled here, comparison functions never see it
        if left_value is None and right_value is not None:
            result = -1
        elif left_value is not None and right_value is None:
            result = 1
        elif comparison is not None:
            result = comparison(left_value, right_value)
        elif left_value == right_value:
            result = 0
        else:
            result = -1 if left_value < right_value else 1

        return -result if reverse else result

    pairs = list(array.items()) if isinstance(array, Mapping) else list(enumerate(array))
    pairs.sort(key=functools.cmp_to_key(compare))

    if preserve_keys:
        return dict(pairs)
    return [item for _, item in pairs]


def unique(array: Any, property_path: str) -> Array:
    """Remove the items with duplicate values at the property path, keeping the first."""
    array = to_array(array)
    accessor = PropertyAccessor()
    seen: List[Any] = []

    def is_first(item) -> bool:
        value = _read(accessor, item, property_path)
        if value in seen:
            return False
        seen.append(value)
        return True

    if isinstance(array, Mapping):
        return {key: item for key, item in array.items() if is_first(item)}
    return [item for item in array if is_first(item)]


def collect(array: Any, property_path: Union[str, List[str], Dict[str, str]]) -> List[Any]:
    """
    Collect values by property path from every item.

        collect(people, 'name')                       # ['Ann', 'Bob']
        collect(people, ['name', 'age'])              # [['Ann', 31], ['Bob', 42]]
        collect(people, {'n': 'name', 'a': 'age'})    # [{'n': 'Ann', 'a': 31}, ...]

    With a single path, items whose path can not be read are dropped.
    With several paths, such items are returned as None.
    """
    items = _values(array)
    if not items:
        return []

    accessor = PropertyAccessor()

    if isinstance(property_path, str):
        result = []
        for item in items:
            try:
                result.append(accessor.get_value(item, property_path))
            except AccessError:
                continue
        return result

    paths = property_path if isinstance(property_path, Mapping) else dict(enumerate(property_path))

    def collect_item(item):
        try:
            values = {key: accessor.get_value(item, path) for key, path in paths.items()}
        except AccessError:
            return None
        return values if isinstance(property_path, Mapping) else list(values.values())

    return [collect_item(item) for item in items]


def map(data: Mapping, target: Any) -> Any:
    """Set every key of data onto the target object (or a new instance of a target class)."""
    if isinstance(target, type):
        target = target()

    accessor = PropertyAccessor()
    for key, value in data.items():
        accessor.set_value(target, str(key), value)

    return target


def filter(array: Any, callback: Optional[Callable[[Any], Any]] = None, invert: bool = False) -> Array:
    """
    Filter items with a callback; keys of mappings are preserved.

    Without a callback the falsy items are removed.
    """
    if callback is None:
        callback = bool
    elif not callable(callback):
        raise InvalidArgumentError(
            f"Filter callback must be callable, got {type(callback).__name__}"
        )

    def accept(item) -> bool:
        return bool(callback(item)) != invert

    array = to_array(array)
    if isinstance(array, Mapping):
        return {key: item for key, item in array.items() if accept(item)}
    return [item for item in array if accept(item)]


def average(array: Array) -> float:
    """Calculate the average of values."""
    values = _values(array)
    if not values:
        raise InvalidArgumentError("Cannot calculate the average of an empty array")
    return sum(values) / len(values)


def deviation(array: Array, sample: bool = False) -> Optional[float]:
    """
    Return the standard deviation of the values.

    Returns None (and logs a warning) for an empty array, or for a single
    element when the sample deviation is requested.
    """
    values = _values(array)
    n = len(values)
    if n == 0:
        logger.warning("The array has zero elements")
        return None
    if sample and n == 1:
        logger.warning("The array has only 1 element")
        return None

    mean = sum(values) / n
    carry = sum((float(value) - mean) ** 2 for value in values)
    if sample:
        n -= 1

    return math.sqrt(carry / n)


def unset_column(array: Array, column: Any) -> Array:
    """Remove a column from every row."""
    def without(row):
        if isinstance(row, Mapping) and column in row:
            return {key: value for key, value in row.items() if key != column}
        return row

    if isinstance(array, Mapping):
        return {key: without(row) for key, row in array.items()}
    return [without(row) for row in array]


def first(array: Any) -> Any:
    """Return the first element of an iterable, None if it is empty."""
    for item in _values(array) if isinstance(array, Mapping) else array:
        return item
    return None


def last(array: Any) -> Any:
    """Return the last element of an iterable, None if it is empty."""
    values = _values(array)
    return values[-1] if values else None


def index(array: Any, property_path: str) -> Dict[Any, Any]:
    """Create a dict with the values at the path as keys and the items as values."""
    items = _values(array)
    accessor = PropertyAccessor()
    return {accessor.get_value(item, property_path): item for item in items}


def is_countable(value: Any) -> bool:
    """Check if a value has a length."""
    return isinstance(value, Sized)


def push(array: List[Any], element: Any) -> List[Any]:
    """Return a copy of the list with the element appended."""
    return list(array) + [element]


def unshift(array: List[Any], element: Any) -> List[Any]:
    """Return a copy of the list with the element prepended."""
    return [element] + list(array)


def from_json(text: str) -> Array:
    """
    Decode a JSON array or object.

    Scalars (including null, true and false) decode to an empty list.
    Malformed JSON raises JsonParseError.
    """
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise JsonParseError(e.msg, cause=e)

    return value if isinstance(value, (list, dict)) else []
