"""
Envelopes wrap messages together with stamps.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar


class Stamp:
    """Marker base class for envelope stamps."""


@dataclass(frozen=True)
class BusNameStamp(Stamp):
    """Name of the bus the message was dispatched on."""
    bus_name: str


@dataclass(frozen=True)
class SentStamp(Stamp):
    """The message was sent to a transport."""
    sender_class: str
    sender_alias: Optional[str] = None


@dataclass(frozen=True)
class ReceivedStamp(Stamp):
    """The message was received from a transport and must be handled, not sent again."""
    transport_name: str


@dataclass(frozen=True)
class HandledStamp(Stamp):
    """Result of a handler."""
    result: Any
    handler_name: str


S = TypeVar('S', bound=Stamp)


class Envelope:
    """
    Immutable wrapper of a message and its stamps.

        envelope = Envelope(PlaceOrder(order_id), [BusNameStamp('command.bus')])
        envelope = envelope.with_(ReceivedStamp('deferred'))
        envelope.last(BusNameStamp).bus_name  # 'command.bus'
    """

    def __init__(self, message: Any, stamps: Iterable[Stamp] = ()):
        if isinstance(message, Envelope):
            raise TypeError("An envelope can not wrap another envelope, use Envelope.wrap()")

        self._message = message
        self._stamps: Dict[type, List[Stamp]] = {}
        for stamp in stamps:
            self._stamps.setdefault(type(stamp), []).append(stamp)

    @classmethod
    def wrap(cls, message: Any, stamps: Iterable[Stamp] = ()) -> "Envelope":
        """Wrap a message, or add the stamps to it if it is an envelope already."""
        if isinstance(message, Envelope):
            return message.with_(*stamps)
        return cls(message, stamps)

    @property
    def message(self) -> Any:
        return self._message

    def with_(self, *stamps: Stamp) -> "Envelope":
        """Return a new envelope with the stamps added."""
        return Envelope(self._message, self._all_stamps() + list(stamps))

    def without_all(self, stamp_class: Type[Stamp]) -> "Envelope":
        """Return a new envelope without the stamps of the class."""
        return Envelope(
            self._message,
            [stamp for stamp in self._all_stamps() if not isinstance(stamp, stamp_class)],
        )

    def last(self, stamp_class: Type[S]) -> Optional[S]:
        stamps = self._stamps.get(stamp_class)
        return stamps[-1] if stamps else None

    def all(self, stamp_class: Optional[Type[S]] = None):
        """All stamps of a class, or a dict of class -> stamps without one."""
        if stamp_class is not None:
            return list(self._stamps.get(stamp_class, []))
        return {klass: list(stamps) for klass, stamps in self._stamps.items()}

    def _all_stamps(self) -> List[Stamp]:
        return [stamp for stamps in self._stamps.values() for stamp in stamps]

    def __repr__(self) -> str:
        return f"Envelope({self._message!r}, {self._all_stamps()!r})"
