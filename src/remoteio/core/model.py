from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ResourceMetadata:
    content_size: int          # total length in bytes, as reported by the probe


class RemoteIOError(IOError):
    """Base class for failures talking to the remote resource."""
    pass


class TransportError(RemoteIOError):
    """Raised when the request/response exchange itself fails."""
    pass


class NotSeekableError(RemoteIOError):
    """Raised when the server does not advertise byte-range support."""
    pass


class NoContentSizeError(RemoteIOError):
    """Raised when the server does not report a usable Content-Length."""
    pass


class ReadError(RemoteIOError):
    """Raised when a range request issued by a read fails.

    The originating TransportError is always available as ``__cause__``.
    """
    pass


class InvalidArgumentError(ValueError):
    """Raised for bad URLs, negative seek targets and unknown whence values."""
    pass
