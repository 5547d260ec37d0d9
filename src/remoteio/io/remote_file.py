"""Remote virtual file: read/seek over HTTP range requests using httpx."""

from __future__ import annotations

import asyncio
import contextlib
import io
import logging
from dataclasses import dataclass
from typing import AsyncGenerator, Optional, Union

import httpx

from ..core.model import ReadError, ResourceMetadata, TransportError
from ..core.util import range_header, resolve_seek
from .base import DEFAULT_TIMEOUT, HTTPX_ERRORS, IDENTITY_ENCODING

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Idle:
    """No request outstanding."""


@dataclass(slots=True)
class AwaitingResponse:
    """Range request sent, headers not received yet."""
    task: asyncio.Task
    start: int
    length: int


@dataclass(slots=True)
class StreamingBody:
    """Headers received, body chunks can be pulled."""
    response: httpx.Response
    chunks: AsyncGenerator[bytes, None]
    length: int


RequestState = Union[Idle, AwaitingResponse, StreamingBody]


class RemoteFile:
    """Random-access view of a remote HTTP resource.

    Every ``readinto`` issues exactly one range request for the size of the
    buffer and walks it through ``Idle -> AwaitingResponse -> StreamingBody ->
    Idle``. ``seek`` only moves the cursor. One instance serves one caller at a
    time: ``readinto`` and ``seek`` must not run concurrently on it.
    """

    def __init__(self, url: str, metadata: ResourceMetadata, *,
                 client: Optional[httpx.AsyncClient] = None,
                 timeout: float = DEFAULT_TIMEOUT, owns_client: bool = False):
        self.url = url
        self._content_size = metadata.content_size
        self._position = 0
        self._state: RequestState = Idle()
        self._client = client
        self._owns_client = owns_client or client is None
        self._timeout = timeout
        self.bytes_fetched = 0
        self.requests_made = 0  # range requests only, the probe is not counted

    @property
    def content_size(self) -> int:
        return self._content_size

    @property
    def state(self) -> RequestState:
        return self._state

    def tell(self) -> int:
        return self._position

    def _get_client(self) -> httpx.AsyncClient:
        # created lazily so it binds to whichever loop drives the first read
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def _step(self, view: memoryview) -> Optional[int]:
        """Advance the request state machine by one transition.

        Returns the number of bytes delivered once the body has been consumed,
        None while the read still has to be driven again.
        """
        state = self._state

        if isinstance(state, Idle):
            start, length = self._position, len(view)
            client = self._get_client()
            request = client.build_request(
                "GET", self.url,
                headers={"Range": range_header(start, length), **IDENTITY_ENCODING},
            )
            logger.debug("GET %s Range: %s", self.url, request.headers["Range"])
            task = asyncio.ensure_future(client.send(request, stream=True))
            self.requests_made += 1
            self._state = AwaitingResponse(task, start, length)
            return None

        if isinstance(state, AwaitingResponse):
            try:
                response = await state.task
            except HTTPX_ERRORS as e:
                raise TransportError(f"Range request failed: {e}") from e

            # 200 means the server ignored Range; its body only lines up when we asked from 0
            if response.status_code != 206 and not (response.status_code == 200 and state.start == 0):
                await response.aclose()
                raise TransportError(f"Range request failed with status {response.status_code}")

            self._state = StreamingBody(response, response.aiter_raw(), state.length)
            return None

        limit = min(state.length, len(view))
        filled = 0
        try:
            while filled < limit:
                chunk = await anext(state.chunks, None)
                if chunk is None:
                    break
                take = min(len(chunk), limit - filled)
                view[filled:filled + take] = chunk[:take]
                filled += take
        except HTTPX_ERRORS as e:
            raise TransportError(f"Reading response body failed: {e}") from e
        finally:
            await state.chunks.aclose()
            await state.response.aclose()

        self._position += filled
        self.bytes_fetched += filled
        self._state = Idle()
        return filled

    async def _discard(self) -> None:
        """Drop whatever request is in flight and return to Idle."""
        state = self._state
        self._state = Idle()

        if isinstance(state, AwaitingResponse):
            task = state.task
            if not task.done():
                task.cancel()
            with contextlib.suppress(asyncio.CancelledError, *HTTPX_ERRORS):
                response = await task
                await response.aclose()
        elif isinstance(state, StreamingBody):
            await state.chunks.aclose()
            await state.response.aclose()

    async def readinto(self, buffer) -> int:
        """Read up to ``len(buffer)`` bytes at the current position into ``buffer``.

        Returns the number of bytes written, 0 for an empty buffer or at/after
        the end of the resource. Transport failures raise ReadError.
        """
        view = memoryview(buffer).cast("B")
        if len(view) == 0:
            return 0
        if self._position >= self._content_size:
            return 0

        try:
            while (count := await self._step(view)) is None:
                pass
        except TransportError as e:
            await self._discard()
            raise ReadError(f"Read of {self.url} at offset {self._position} failed: {e}") from e
        except BaseException:
            # cancellation or a bad buffer: never leave a half-consumed request behind
            await self._discard()
            raise

        logger.debug("Read %d bytes from %s, position now %d", count, self.url, self._position)
        return count

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (the rest of the resource when negative)."""
        if size < 0:
            size = max(self._content_size - self._position, 0)
        buffer = bytearray(size)
        count = await self.readinto(buffer)
        return bytes(buffer[:count])

    async def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the cursor; no network activity. Returns the new absolute position."""
        target = resolve_seek(self._position, self._content_size, offset, whence)
        if not isinstance(self._state, Idle):
            logger.debug("Seek on %s discards in-flight %s", self.url, type(self._state).__name__)
            await self._discard()
        self._position = target
        return target

    def blocking(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Wrap this file in a blocking io.RawIOBase adapter."""
        from .sync_adapter import BlockingRemoteFile
        return BlockingRemoteFile(self, loop=loop)

    async def aclose(self) -> None:
        await self._discard()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def __repr__(self) -> str:
        return f"RemoteFile(url={self.url!r}, size={self._content_size}, pos={self._position})"
