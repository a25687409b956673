"""
Serializers turning payloads and metadata into JSON compatible envelopes.
"""

import dataclasses
from abc import ABC, abstractmethod
from typing import Any, Dict

from ..errors import InvalidArgumentError
from ..util.classes import full_name, resolve_class


class Serializer(ABC):
    """Converts objects to and from plain data."""

    @abstractmethod
    def serialize(self, obj: Any) -> Dict[str, Any]:
        """Serialize an object into a JSON compatible dict."""

    @abstractmethod
    def deserialize(self, serialized: Dict[str, Any]) -> Any:
        """Restore an object from the output of serialize()."""


class SimpleInterfaceSerializer(Serializer):
    """
    Serializes objects into {"class": ..., "payload": ...} envelopes.

    Objects provide serialize() and a classmethod deserialize(data);
    dataclasses are handled without them.
    """

    def serialize(self, obj: Any) -> Dict[str, Any]:
        if hasattr(obj, 'serialize') and callable(obj.serialize):
            payload = obj.serialize()
        elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            payload = dataclasses.asdict(obj)
        else:
            raise InvalidArgumentError(
                f"Object '{full_name(type(obj))}' does not provide serialize() and is not a dataclass"
            )

        return {'class': full_name(type(obj)), 'payload': payload}

    def deserialize(self, serialized: Dict[str, Any]) -> Any:
        for key in ('class', 'payload'):
            if key not in serialized:
                raise InvalidArgumentError(f"Key '{key}' should be set")

        klass = resolve_class(serialized['class'])
        if klass is None:
            raise InvalidArgumentError(f"Class '{serialized['class']}' does not exist")

        deserialize = getattr(klass, 'deserialize', None)
        if deserialize is not None:
            return deserialize(serialized['payload'])
        if dataclasses.is_dataclass(klass):
            return klass(**serialized['payload'])

        raise InvalidArgumentError(
            f"Class '{serialized['class']}' does not provide deserialize() and is not a dataclass"
        )
