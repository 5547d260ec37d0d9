"""Blocking adapter: drives a RemoteFile on a private event loop."""

import asyncio
import io
from typing import Optional

from .remote_file import RemoteFile


class BlockingRemoteFile(io.RawIOBase):
    """Synchronous, file-like view of a RemoteFile.

    Each call runs the matching coroutine to completion on the calling
    thread. There is no timeout beyond the transport's own; a stalled server
    blocks the caller. Wrap in ``io.BufferedReader`` for small reads.
    """

    def __init__(self, remote: RemoteFile, *, loop: Optional[asyncio.AbstractEventLoop] = None):
        super().__init__()
        self._remote = remote
        self._loop = loop or asyncio.new_event_loop()
        self._owns_loop = loop is None

    @property
    def remote(self) -> RemoteFile:
        return self._remote

    @property
    def url(self) -> str:
        return self._remote.url

    @property
    def content_size(self) -> int:
        return self._remote.content_size

    def _run(self, coro):
        return self._loop.run_until_complete(coro)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        self._checkClosed()
        return self._run(self._remote.readinto(buffer))

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._checkClosed()
        return self._run(self._remote.seek(offset, whence))

    def tell(self) -> int:
        self._checkClosed()
        return self._remote.tell()

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._run(self._remote.aclose())
        finally:
            if self._owns_loop:
                self._loop.close()
            super().close()

    def __repr__(self) -> str:
        return f"BlockingRemoteFile({self._remote!r})"
