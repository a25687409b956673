"""
Error hierarchy for the Gears library.

Every error raised by Gears derives from GearsError and carries a
structured ErrorCode, so callers can branch on the code instead of
parsing messages. Errors that replace a builtin exception family also
derive from that builtin (InvalidArgumentError is a ValueError,
AccessError is a LookupError and so on).
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Structured error codes."""

    # Argument errors
    INVALID_ARGUMENT = "invalid_argument"
    UNSUPPORTED_TYPE = "unsupported_type"

    # Decoding errors
    JSON_PARSE_ERROR = "json_parse_error"
    DECRYPTION_FAILED = "decryption_failed"

    # Property access errors
    NO_SUCH_PROPERTY = "no_such_property"
    UNEXPECTED_TYPE = "unexpected_type"
    INVALID_PROPERTY_PATH = "invalid_property_path"

    # Criteria errors
    UNSUPPORTED_EXPRESSION = "unsupported_expression"

    # Storage errors
    STORAGE_ERROR = "storage_error"
    EVENT_STREAM_NOT_FOUND = "event_stream_not_found"
    DUPLICATE_PLAYHEAD = "duplicate_playhead"

    # Messenger errors
    TRANSPORT_ERROR = "transport_error"
    HANDLER_FAILED = "handler_failed"
    NO_HANDLER = "no_handler"

    # Validation errors
    VALIDATION_FAILED = "validation_failed"


class GearsError(Exception):
    """
    Base exception class for all Gears errors.

    Provides an error code, a message, an optional underlying cause and
    free-form metadata.
    """

    code = ErrorCode.INVALID_ARGUMENT

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        cause: Optional[BaseException] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        if code is not None:
            self.code = code
        self.message = message
        self.cause = cause
        self.metadata = metadata or {}

        super().__init__(self.message)

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "error": self.code.value,
            "error_description": self.message,
        }

        if self.metadata:
            result["metadata"] = self.metadata

        if self.cause:
            result["caused_by"] = str(self.cause)

        return result


class InvalidArgumentError(GearsError, ValueError):
    """An argument has an unsupported value or type."""

    code = ErrorCode.INVALID_ARGUMENT


class JsonParseError(GearsError, ValueError):
    """A JSON document could not be decoded."""

    code = ErrorCode.JSON_PARSE_ERROR

    def __init__(self, reason: Optional[str] = None, cause: Optional[BaseException] = None):
        message = "Unable to parse response as JSON"
        if reason:
            message += f": {reason}"

        super().__init__(message, cause=cause)
        self.reason = reason


class DecryptionError(GearsError, ValueError):
    """An encrypted string could not be decrypted."""

    code = ErrorCode.DECRYPTION_FAILED


class AccessError(GearsError, LookupError):
    """A property path could not be read or written."""

    code = ErrorCode.NO_SUCH_PROPERTY

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        metadata = kwargs.pop("metadata", {})
        if path is not None:
            metadata["path"] = path

        super().__init__(message, metadata=metadata, **kwargs)
        self.path = path


class NoSuchPropertyError(AccessError):
    """The property does not exist or is not accessible."""

    code = ErrorCode.NO_SUCH_PROPERTY


class UnexpectedTypeError(AccessError):
    """A value in the middle of a property path can not be traversed."""

    code = ErrorCode.UNEXPECTED_TYPE


class InvalidPropertyPathError(GearsError, ValueError):
    """The property path string is malformed."""

    code = ErrorCode.INVALID_PROPERTY_PATH


class UnsupportedExpressionError(GearsError, RuntimeError):
    """A criteria expression can not be translated by a visitor."""

    code = ErrorCode.UNSUPPORTED_EXPRESSION


class StorageError(GearsError):
    """Errors related to storage operations."""

    code = ErrorCode.STORAGE_ERROR


class EventStreamNotFoundError(StorageError):
    """No events were recorded for an aggregate."""

    code = ErrorCode.EVENT_STREAM_NOT_FOUND


class DuplicatePlayheadError(StorageError):
    """An event with the same aggregate id and playhead is already stored."""

    code = ErrorCode.DUPLICATE_PLAYHEAD


class TransportError(GearsError):
    """A messenger transport was used in an unsupported way."""

    code = ErrorCode.TRANSPORT_ERROR


class NoHandlerForMessageError(GearsError, LookupError):
    """A message bus has no handler for a message."""

    code = ErrorCode.NO_HANDLER


class HandlerFailedError(GearsError):
    """One or more message handlers raised an exception."""

    code = ErrorCode.HANDLER_FAILED

    def __init__(self, envelope: Any, exceptions: list):
        first = exceptions[0]
        message = f"Handling \"{type(envelope.message).__qualname__}\" failed: {first}"

        super().__init__(message, cause=first)
        self.envelope = envelope
        self.exceptions = list(exceptions)

    def get_previous(self) -> BaseException:
        """Return the first exception raised by a handler."""
        return self.exceptions[0]


def wrap_exception(exc: Exception, code: ErrorCode, message: str) -> GearsError:
    """Wrap a generic exception as a Gears error."""
    return GearsError(message, code=code, cause=exc)
