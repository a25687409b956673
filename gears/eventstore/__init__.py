"""
Event store package: append-only streams of domain messages, selectable
by criteria.
"""

from .domain import DomainEventStream, DomainMessage, Metadata
from .serializer import Serializer, SimpleInterfaceSerializer
from .related import RelatedProcessEvent, related_ids
from .base import EventStore, SelectableEventStore
from .sql import SqlEventStore
from .memory import InMemoryEventStore

__all__ = [
    'DomainEventStream', 'DomainMessage', 'Metadata',
    'Serializer', 'SimpleInterfaceSerializer',
    'RelatedProcessEvent', 'related_ids',
    'EventStore', 'SelectableEventStore',
    'SqlEventStore', 'InMemoryEventStore',
]
