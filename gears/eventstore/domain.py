"""
Domain messages: recorded events with their aggregate id, playhead and metadata.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional

from ..util.classes import full_name


class Metadata:
    """Immutable key/value metadata attached to a domain message."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values = dict(values or {})

    @classmethod
    def kv(cls, key: str, value: Any) -> "Metadata":
        return cls({key: value})

    def merge(self, other: "Metadata") -> "Metadata":
        """Return new metadata with the values of other added (other wins)."""
        return Metadata({**self._values, **other._values})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def all(self) -> Dict[str, Any]:
        return dict(self._values)

    def serialize(self) -> Dict[str, Any]:
        return dict(self._values)

    @classmethod
    def deserialize(cls, data: Dict[str, Any]) -> "Metadata":
        return cls(data)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Metadata) and self._values == other._values

    def __repr__(self) -> str:
        return f"Metadata({self._values!r})"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainMessage:
    """An event that happened to an aggregate, at a position (playhead) of its stream."""
    id: str
    playhead: int
    metadata: Metadata
    payload: Any
    recorded_on: datetime = field(default_factory=_now)

    def __post_init__(self):
        # Stores compare and persist ids as strings
        object.__setattr__(self, 'id', str(self.id))

    @classmethod
    def record_now(cls, id: Any, playhead: int, metadata: Metadata, payload: Any) -> "DomainMessage":
        return cls(str(id), playhead, metadata, payload, _now())

    @property
    def type(self) -> str:
        """Dotted class name of the payload."""
        return full_name(type(self.payload))

    def and_metadata(self, metadata: Metadata) -> "DomainMessage":
        """Return a copy with the metadata merged in."""
        return replace(self, metadata=self.metadata.merge(metadata))


class DomainEventStream:
    """An ordered stream of domain messages."""

    def __init__(self, messages: Iterable[DomainMessage] = ()):
        self._messages: List[DomainMessage] = list(messages)

    def __iter__(self) -> Iterator[DomainMessage]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __getitem__(self, index: int) -> DomainMessage:
        return self._messages[index]

    def __repr__(self) -> str:
        return f"DomainEventStream({self._messages!r})"
