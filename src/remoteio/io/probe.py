"""Capability probe: one HEAD request to learn range support and size."""

import logging
from typing import Mapping, Optional

import httpx
import requests

from ..core.model import (
    NoContentSizeError,
    NotSeekableError,
    ResourceMetadata,
    TransportError,
)
from ..core.util import accepts_byte_ranges, check_url, parse_content_length
from .base import DEFAULT_TIMEOUT, HTTPX_ERRORS, IDENTITY_ENCODING

logger = logging.getLogger(__name__)


# Module-level session for connection pooling
_session: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


def _metadata_from_headers(url: str, headers: Mapping[str, str]) -> ResourceMetadata:
    """Validate HEAD response headers and extract the resource size."""
    if not accepts_byte_ranges(headers.get("accept-ranges")):
        raise NotSeekableError(f"Server does not accept byte ranges for {url}")

    content_size = parse_content_length(headers.get("content-length"))
    if content_size is None:
        raise NoContentSizeError(f"Server did not report a usable Content-Length for {url}")

    logger.debug("Probed %s: %d bytes, ranges supported", url, content_size)
    return ResourceMetadata(content_size=content_size)


def probe(url: str, *, session: Optional[requests.Session] = None,
          timeout: float = DEFAULT_TIMEOUT) -> ResourceMetadata:
    """Blocking capability probe using requests."""
    check_url(url)
    session = session or _get_session()
    try:
        response = session.head(url, headers=IDENTITY_ENCODING, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        raise TransportError(f"HEAD request failed: {e}") from e

    if response.status_code >= 400:
        raise TransportError(f"HEAD request failed with status {response.status_code}")

    return _metadata_from_headers(url, response.headers)


async def probe_async(url: str, *, client: httpx.AsyncClient) -> ResourceMetadata:
    """Asynchronous capability probe using the given httpx client."""
    check_url(url)
    try:
        response = await client.head(url, headers=IDENTITY_ENCODING, follow_redirects=True)
    except HTTPX_ERRORS as e:
        raise TransportError(f"HEAD request failed: {e}") from e

    if response.status_code >= 400:
        raise TransportError(f"HEAD request failed with status {response.status_code}")

    return _metadata_from_headers(url, response.headers)
