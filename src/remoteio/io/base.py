"""Base protocols and shared defaults for the I/O layer."""

import io
from typing import Protocol, runtime_checkable

import httpx


DEFAULT_TIMEOUT = 60.0  # seconds, applied by the transport clients only

# everything httpx raises for a failed exchange; InvalidURL and StreamError sit outside HTTPError
HTTPX_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)

# sizes and ranges must both address the uncompressed representation
IDENTITY_ENCODING = {"Accept-Encoding": "identity"}


@runtime_checkable
class RemoteReader(Protocol):
    """Protocol for blocking random-access readers."""

    def readinto(self, buffer) -> int:
        """Fill `buffer` from the current position, return the byte count.
        Zero means end of resource.
        """
        ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        ...

    def tell(self) -> int:
        ...


@runtime_checkable
class AsyncRemoteReader(Protocol):
    """Protocol for asynchronous random-access readers."""

    content_size: int
    bytes_fetched: int  # running total
    requests_made: int

    async def readinto(self, buffer) -> int:
        """Fill `buffer` from the current position, return the byte count.
        Zero means end of resource.
        """
        ...

    async def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        ...

    def tell(self) -> int:
        ...
