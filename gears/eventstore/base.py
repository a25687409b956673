"""
Event store interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

from ..criteria import Criteria
from .domain import DomainEventStream, DomainMessage


class EventStore(ABC):
    """Loads and appends the event streams of aggregates."""

    @abstractmethod
    def load(self, id: Any) -> DomainEventStream:
        """
        Load the full stream of an aggregate.

        Raises EventStreamNotFoundError if no event was recorded.
        """

    @abstractmethod
    def load_from_playhead(self, id: Any, playhead: int) -> DomainEventStream:
        """Load the events of an aggregate starting at the playhead (may be empty)."""

    @abstractmethod
    def append(self, id: Any, stream: DomainEventStream) -> None:
        """
        Append a stream atomically.

        Raises DuplicatePlayheadError if a playhead of the aggregate is taken.
        """


class SelectableEventStore(EventStore):
    """An event store that can select messages by criteria."""

    @abstractmethod
    def walk(self, criteria: Criteria, callback: Callable[[DomainMessage], Any]) -> None:
        """Pass every message matching the criteria to the callback, in recording order."""
