"""I/O layer for remoteio - remote resources behind a local-file interface."""

from typing import Optional

import httpx
import requests

# Re-export these for import convenience
from .base import AsyncRemoteReader, RemoteReader, DEFAULT_TIMEOUT
from .probe import probe, probe_async
from .remote_file import RemoteFile, Idle, AwaitingResponse, StreamingBody
from .sync_adapter import BlockingRemoteFile


def open_remote_file(url: str, *, session: Optional[requests.Session] = None,
                     timeout: float = DEFAULT_TIMEOUT) -> BlockingRemoteFile:
    """Probe `url` with a blocking HEAD request and return a blocking file object."""
    metadata = probe(url, session=session, timeout=timeout)
    return RemoteFile(url, metadata, timeout=timeout).blocking()


async def open_remote_file_async(url: str, *, client: Optional[httpx.AsyncClient] = None,
                                 timeout: float = DEFAULT_TIMEOUT) -> RemoteFile:
    """Probe `url` and return an asynchronous RemoteFile sharing the probe's client."""
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)
    try:
        metadata = await probe_async(url, client=client)
    except BaseException:
        if owns_client:
            await client.aclose()
        raise

    return RemoteFile(url, metadata, client=client, timeout=timeout, owns_client=owns_client)
