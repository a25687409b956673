"""
Messenger package: message buses, envelopes with stamps and a deferred
transport that handles messages after the response was sent.
"""

from .envelope import (
    Envelope, Stamp, BusNameStamp, SentStamp, ReceivedStamp, HandledStamp
)
from .bus import MessageBus, BusLocator
from .transport import Transport, DeferredTransport, DeferredTransportFactory
from .middleware import TerminateMiddleware
from .testing import assert_command_should_fail

__all__ = [
    'Envelope', 'Stamp', 'BusNameStamp', 'SentStamp', 'ReceivedStamp', 'HandledStamp',
    'MessageBus', 'BusLocator',
    'Transport', 'DeferredTransport', 'DeferredTransportFactory',
    'TerminateMiddleware', 'assert_command_should_fail',
]
