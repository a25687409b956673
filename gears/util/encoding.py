"""
JSON decoding and cache key helpers.
"""

import json
from types import SimpleNamespace
from typing import Any, Callable, Union

from ..errors import InvalidArgumentError, JsonParseError
from .classes import is_closure

DEFAULT_DEPTH = 512

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def _parse_int(big_int_as_string: bool) -> Callable[[str], Union[int, float, str]]:
    def parse(literal: str):
        value = int(literal)
        if _INT64_MIN <= value <= _INT64_MAX:
            return value
        return literal if big_int_as_string else float(literal)

    return parse


def _reject_constant(name: str):
    raise ValueError(f"Invalid literal {name}")


def _nesting(value: Any) -> int:
    # Deepest container level, scalars are level 0
    if isinstance(value, SimpleNamespace):
        value = vars(value)
    if isinstance(value, dict):
        return 1 + max((_nesting(item) for item in value.values()), default=0)
    if isinstance(value, list):
        return 1 + max((_nesting(item) for item in value), default=0)
    return 0


def json_decode(
    text: Union[str, bytes],
    assoc: bool = False,
    depth: int = DEFAULT_DEPTH,
    big_int_as_string: bool = False,
) -> Any:
    """
    Decode a JSON document.

    Objects become SimpleNamespace instances, or dicts when assoc is true.
    Integers outside the signed 64 bit range become floats, or strings
    with big_int_as_string.

    Raises JsonParseError for malformed JSON, for documents nested deeper
    than depth and for a document that decodes to null.
    """
    try:
        result = json.loads(
            text,
            object_hook=None if assoc else lambda pairs: SimpleNamespace(**pairs),
            parse_int=_parse_int(big_int_as_string),
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise JsonParseError(e.msg, cause=e)
    except (ValueError, RecursionError) as e:
        raise JsonParseError(str(e) or "Maximum stack depth exceeded", cause=e)

    if result is None:
        raise JsonParseError()

    if _nesting(result) > depth:
        raise JsonParseError("Maximum stack depth exceeded")

    return result


def json_decode_to_array(
    text: Union[str, bytes],
    depth: int = DEFAULT_DEPTH,
    big_int_as_string: bool = False,
) -> Union[list, dict]:
    """Decode a JSON document that must hold an array or an object."""
    result = json_decode(text, True, depth, big_int_as_string)
    if not isinstance(result, (list, dict)):
        raise JsonParseError(f"Expected an array or an object, got {type(result).__name__}")

    return result


def generate_cache_key(*parameters: Any) -> str:
    """
    Generate a cache key by serializing the parameters into a JSON string.

        key = generate_cache_key('heavy-duty-computation', identifier)
        cache.get(key, lambda: heavy_duty_computation(identifier))
    """
    try:
        return json.dumps(list(parameters), separators=(',', ':'))
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Cache key parameters are not JSON serializable: {e}", cause=e)


def generate_cache_key_fn(fn: Callable, *parameters: Any) -> str:
    """
    Generate a cache key from the qualified name of a function and the parameters.

    Anonymous and nested functions are rejected since their name does not
    identify them.
    """
    if is_closure(fn):
        raise InvalidArgumentError("generate_cache_key_fn() does not support anonymous functions.")

    name = getattr(fn, '__qualname__', None)
    if name is None:
        raise InvalidArgumentError(f"Can not determine the name of {fn!r}")

    module = getattr(fn, '__module__', None)
    return generate_cache_key(f"{module}.{name}" if module else name, *parameters)
