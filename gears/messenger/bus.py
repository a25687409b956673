"""
Synchronous message bus with routing to transports.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ..errors import HandlerFailedError, NoHandlerForMessageError, TransportError
from ..util.classes import full_name
from .envelope import BusNameStamp, Envelope, HandledStamp, ReceivedStamp, SentStamp, Stamp

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]
MessageKey = Union[type, str]

ALL_MESSAGES = '*'


def _handler_name(handler: Handler) -> str:
    name = getattr(handler, '__qualname__', None) or type(handler).__qualname__
    return f"{getattr(handler, '__module__', '')}.{name}".lstrip('.')


class MessageBus:
    """
    Dispatches messages to handlers, or to transports when routed.

        bus = MessageBus(
            'command.bus',
            handlers={PlaceOrder: [place_order_handler]},
            routing={SendReceipt: ['deferred']},
            senders={'deferred': deferred_transport},
        )
        bus.dispatch(PlaceOrder(order_id))

    Handlers and routing rules are looked up by message class (base classes
    included), by dotted class name, or with '*' for every message.
    Received envelopes (ReceivedStamp) are always handled, never sent.
    """

    def __init__(
        self,
        name: str,
        handlers: Optional[Mapping[MessageKey, Iterable[Handler]]] = None,
        routing: Optional[Mapping[MessageKey, Iterable[str]]] = None,
        senders: Optional[Mapping[str, Any]] = None,
    ):
        self.name = name
        self._handlers: Dict[MessageKey, List[Handler]] = {
            key: list(value) for key, value in (handlers or {}).items()
        }
        self._routing: Dict[MessageKey, List[str]] = {
            key: list(value) for key, value in (routing or {}).items()
        }
        self._senders: Dict[str, Any] = dict(senders or {})

    def add_handler(self, message_key: MessageKey, handler: Handler) -> None:
        self._handlers.setdefault(message_key, []).append(handler)

    def add_sender(self, alias: str, transport: Any, message_keys: Iterable[MessageKey] = ()) -> None:
        """Register a transport and route the message keys to it."""
        self._senders[alias] = transport
        for key in message_keys:
            self._routing.setdefault(key, []).append(alias)

    def dispatch(self, message: Any, stamps: Iterable[Stamp] = ()) -> Envelope:
        envelope = Envelope.wrap(message, stamps)
        if envelope.last(BusNameStamp) is None:
            envelope = envelope.with_(BusNameStamp(self.name))

        if envelope.last(ReceivedStamp) is None:
            aliases = self._lookup(self._routing, envelope.message)
            if aliases:
                return self._send(envelope, aliases)

        return self._handle(envelope)

    def _send(self, envelope: Envelope, aliases: List[str]) -> Envelope:
        for alias in aliases:
            if alias not in self._senders:
                raise TransportError(f'Transport "{alias}" is not registered on bus "{self.name}".')

            sender = self._senders[alias]
            logger.debug("Sending %s to %s", type(envelope.message).__qualname__, alias)
            envelope = sender.send(envelope.with_(SentStamp(full_name(type(sender)), alias)))

        return envelope

    def _handle(self, envelope: Envelope) -> Envelope:
        handlers = self._lookup(self._handlers, envelope.message)
        if not handlers:
            raise NoHandlerForMessageError(
                f'No handler for message "{full_name(type(envelope.message))}".'
            )

        exceptions = []
        for handler in handlers:
            try:
                result = handler(envelope.message)
            except Exception as e:
                logger.warning("Handler %s failed: %s", _handler_name(handler), e)
                exceptions.append(e)
                continue
            envelope = envelope.with_(HandledStamp(result, _handler_name(handler)))

        if exceptions:
            raise HandlerFailedError(envelope, exceptions)

        return envelope

    @staticmethod
    def _lookup(table: Mapping[MessageKey, List[Any]], message: Any) -> List[Any]:
        result: List[Any] = []
        for klass in type(message).__mro__:
            for key in (klass, full_name(klass)):
                for item in table.get(key, ()):
                    if item not in result:
                        result.append(item)
        for item in table.get(ALL_MESSAGES, ()):
            if item not in result:
                result.append(item)
        return result


class BusLocator:
    """Looks up buses by name."""

    def __init__(self, buses: Optional[Iterable[MessageBus]] = None):
        self._buses: Dict[str, MessageBus] = {}
        for bus in buses or ():
            self.add(bus)

    def add(self, bus: MessageBus) -> None:
        self._buses[bus.name] = bus

    def has(self, name: str) -> bool:
        return name in self._buses

    def get(self, name: str) -> MessageBus:
        if name not in self._buses:
            raise TransportError(f'Bus named "{name}" does not exist.')
        return self._buses[name]
