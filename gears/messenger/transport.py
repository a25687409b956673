"""
Transports, and the deferred transport that redispatches messages later.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional

from ..errors import TransportError
from .bus import BusLocator, MessageBus
from .envelope import BusNameStamp, Envelope, ReceivedStamp, SentStamp

logger = logging.getLogger(__name__)

DEFAULT_TRANSPORT_NAME = 'deferred'


class Transport(ABC):
    """Sends envelopes away and receives them back."""

    @abstractmethod
    def get(self) -> Iterable[Envelope]:
        """Receive envelopes."""

    @abstractmethod
    def ack(self, envelope: Envelope) -> None:
        """Acknowledge a received envelope."""

    @abstractmethod
    def reject(self, envelope: Envelope) -> None:
        """Reject a received envelope."""

    @abstractmethod
    def send(self, envelope: Envelope) -> Envelope:
        """Send an envelope."""


class DeferredTransport(Transport):
    """
    Queues messages and redispatches them when flushed.

    A convenient way to answer a client quickly: route the heavy messages
    to this transport and flush it after the response was sent (see
    TerminateMiddleware), or at the end of a command line run.

        transport = DeferredTransport(bus_locator)
        bus.add_sender('deferred', transport, [SendReceipt])

        bus.dispatch(SendReceipt(order_id))  # queued
        transport.flush()                    # handled now

    Every flushed envelope gets a ReceivedStamp, so the bus handles it
    instead of routing it here again.
    """

    def __init__(self, bus_locator: BusLocator):
        self.bus_locator = bus_locator
        self._queue: Deque[Envelope] = deque()

    def get(self) -> Iterable[Envelope]:
        raise TransportError('You cannot receive messages from the DeferredTransport.')

    def ack(self, envelope: Envelope) -> None:
        raise TransportError('You cannot call ack() on the DeferredTransport.')

    def reject(self, envelope: Envelope) -> None:
        raise TransportError('You cannot call reject() on the DeferredTransport.')

    def send(self, envelope: Envelope) -> Envelope:
        if envelope.last(BusNameStamp) is None:
            raise TransportError('Envelope is missing a BusNameStamp.')

        self._queue.append(envelope)
        return envelope

    def __len__(self) -> int:
        return len(self._queue)

    def flush(self) -> List[Envelope]:
        """Dispatch the queued envelopes in order; return the handled envelopes."""
        handled = []

        while self._queue:
            envelope = self._queue.popleft()
            bus_name = envelope.last(BusNameStamp).bus_name
            sent = envelope.last(SentStamp)
            transport_name = self._transport_name(sent)

            logger.debug("Redispatching %s on %s", type(envelope.message).__qualname__, bus_name)
            handled.append(
                self._get_message_bus(bus_name).dispatch(envelope.with_(ReceivedStamp(transport_name)))
            )

        return handled

    on_terminate = flush

    @staticmethod
    def _transport_name(sent: Optional[SentStamp]) -> str:
        if sent is None:
            return DEFAULT_TRANSPORT_NAME
        return sent.sender_alias or sent.sender_class or DEFAULT_TRANSPORT_NAME

    def _get_message_bus(self, bus_name: str) -> MessageBus:
        if not self.bus_locator.has(bus_name):
            raise TransportError(f'Bus named "{bus_name}" does not exist.')
        return self.bus_locator.get(bus_name)


class DeferredTransportFactory:
    """
    Creates deferred transports for "deferred://" DSNs and remembers them,
    so they can all be flushed at once.
    """

    SCHEME = 'deferred://'

    def __init__(self, bus_locator: BusLocator):
        self.bus_locator = bus_locator
        self.transports: List[DeferredTransport] = []

    def supports(self, dsn: str, options: Optional[Dict[str, Any]] = None) -> bool:
        return dsn.startswith(self.SCHEME)

    def create_transport(self, dsn: str, options: Optional[Dict[str, Any]] = None) -> DeferredTransport:
        if not self.supports(dsn, options):
            raise TransportError(f'The DSN "{dsn}" is not supported by the DeferredTransportFactory.')

        transport = DeferredTransport(self.bus_locator)
        self.transports.append(transport)
        return transport

    def flush(self) -> None:
        """Flush every transport created by this factory."""
        for transport in self.transports:
            transport.flush()

    on_terminate = flush
