"""
WSGI middleware running deferred messages after the response was sent.
"""

import logging
from typing import Any, Callable, Iterable, Iterator, Union

from .transport import DeferredTransport, DeferredTransportFactory

logger = logging.getLogger(__name__)

Flushable = Union[DeferredTransport, DeferredTransportFactory]


class _ClosingIterator:
    """Response body that runs a callback once the server closes it."""

    def __init__(self, body: Iterable[bytes], on_close: Callable[[], None]):
        self._body = body
        self._iterator = iter(body)
        self._on_close = on_close

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        return next(self._iterator)

    def close(self) -> None:
        try:
            close = getattr(self._body, 'close', None)
            if close is not None:
                close()
        finally:
            self._on_close()


class TerminateMiddleware:
    """
    Flushes deferred transports when the server closes the response.

        app = TerminateMiddleware(app, [factory])

    WSGI servers close the response iterable after the last byte was
    written, so deferred messages never delay the client.
    """

    def __init__(self, app: Callable, transports: Iterable[Flushable]):
        self.app = app
        self.transports = list(transports)

    def __call__(self, environ: dict, start_response: Callable) -> Any:
        body = self.app(environ, start_response)
        return _ClosingIterator(body, self.terminate)

    def terminate(self) -> None:
        """Flush every transport; the first failure is raised once all were flushed."""
        errors = []
        for transport in self.transports:
            try:
                transport.flush()
            except Exception as e:
                logger.exception("Flushing deferred transport %r failed", transport)
                errors.append(e)

        logger.debug("Flushed %d deferred transports", len(self.transports))

        if errors:
            raise errors[0]
