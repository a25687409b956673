"""
Number utilities: parsing, step rounding and statistics.
"""

import math
import re
from typing import Any, Optional, Sequence, Union

from . import arrays

Number = Union[int, float]

_THOUSANDS_SEPARATOR = re.compile(r'(?<=\d),(?=\d)')
_NUMBER = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse(value: Any) -> Optional[float]:
    """
    Extract a number from a string.

        >>> parse('Price: 1,234.50 USD')
        1234.5

    Thousands separators are ignored and the first number found (sign,
    fraction and exponent included) is parsed.
    Returns None if the value contains no digits.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)

    sanitized = _THOUSANDS_SEPARATOR.sub('', str(value))
    match = _NUMBER.search(sanitized)
    if match is None:
        return None

    return float(match.group(0))


def _round_half_up(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def round_step(value: Number, step: int = 1) -> float:
    """Round value to the nearest multiple of step (half away from zero)."""
    return _round_half_up(value / step) * step


def floor_step(value: Number, step: int = 1) -> float:
    """Round value down to the nearest multiple of step."""
    return float(math.floor(value / step) * step)


def ceil_step(value: Number, step: int = 1) -> float:
    """Round value up to the nearest multiple of step."""
    return float(math.ceil(value / step) * step)


def standard_deviation(values: Sequence[Number], sample: bool = False) -> Optional[float]:
    """Return the standard deviation, see gears.util.arrays.deviation()."""
    return arrays.deviation(values, sample)
