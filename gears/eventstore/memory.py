"""
In-memory event store for development and testing.
"""

import threading
from typing import Any, Callable, Dict, List

from ..criteria import Criteria, matching
from ..errors import DuplicatePlayheadError, EventStreamNotFoundError
from .base import SelectableEventStore
from .domain import DomainEventStream, DomainMessage
from .related import related_ids


class InMemoryEventStore(SelectableEventStore):
    """
    Event store keeping the messages in a list.

    walk() evaluates the criteria against the same fields the SQL store
    has: id, uuid, playhead, type, recorded_on and _related.

    Note: All data is lost when the process terminates.
    """

    def __init__(self):
        self._messages: List[DomainMessage] = []
        self._lock = threading.RLock()

    def load(self, id: Any) -> DomainEventStream:
        stream = self.load_from_playhead(id, 0)
        if not len(stream):
            raise EventStreamNotFoundError(
                f"EventStream not found for aggregate with id {id}",
                metadata={"id": str(id)},
            )
        return stream

    def load_from_playhead(self, id: Any, playhead: int) -> DomainEventStream:
        with self._lock:
            messages = [
                message for message in self._messages
                if message.id == str(id) and message.playhead >= playhead
            ]

        return DomainEventStream(sorted(messages, key=lambda message: message.playhead))

    def append(self, id: Any, stream: DomainEventStream) -> None:
        with self._lock:
            taken = {(message.id, message.playhead) for message in self._messages}
            for message in stream:
                key = (message.id, message.playhead)
                if key in taken:
                    raise DuplicatePlayheadError(
                        f"An event with the same playhead was already recorded for aggregate {id}",
                        metadata={"id": str(id)},
                    )
                taken.add(key)

            self._messages.extend(stream)

    def walk(self, criteria: Criteria, callback: Callable[[DomainMessage], Any]) -> None:
        with self._lock:
            rows = [self._row(position, message) for position, message in enumerate(self._messages, 1)]

        if not criteria.get_orderings():
            criteria = Criteria(
                criteria.get_where_expression(), {'id': 'ASC'},
                criteria.get_first_result(), criteria.get_max_results(),
            )

        for row in matching(rows, criteria):
            callback(row['message'])

    @staticmethod
    def _row(position: int, message: DomainMessage) -> Dict[str, Any]:
        return {
            'id': position,
            'uuid': message.id,
            'playhead': message.playhead,
            'type': message.type,
            'recorded_on': message.recorded_on.isoformat(),
            '_related': related_ids(message.payload),
            'message': message,
        }
