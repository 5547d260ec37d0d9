"""Tests for the capability probe."""

import httpx
import pytest
import requests

from remoteio import open_remote_file, open_remote_file_async
from remoteio.core.model import (
    InvalidArgumentError, NoContentSizeError, NotSeekableError, ResourceMetadata, TransportError,
)
from remoteio.io.probe import probe, probe_async

from range_server import RangeServer


def _dead_url() -> str:
    """URL of a server that has already been shut down."""
    server = RangeServer().start()
    url = server.url()
    server.stop()
    return url


class TestProbe:
    """Test the blocking probe (requests)."""

    def setup_method(self):
        self.server = RangeServer().start()

    def teardown_method(self):
        self.server.stop()

    def test_range_capable_resource(self):
        assert probe(self.server.url()) == ResourceMetadata(content_size=1000)

    def test_explicit_session(self):
        with requests.Session() as session:
            metadata = probe(self.server.url(), session=session)
        assert metadata.content_size == 1000

    def test_size_of_uncompressed_representation(self):
        metadata = probe(self.server.url("/compressible"))
        assert metadata.content_size == 1000
        assert self.server.head_encodings == ["identity"]

    def test_no_accept_ranges(self):
        with pytest.raises(NotSeekableError):
            probe(self.server.url("/no-ranges"))

    def test_accept_ranges_none(self):
        with pytest.raises(NotSeekableError):
            probe(self.server.url("/ranges-none"))

    def test_no_content_length(self):
        with pytest.raises(NoContentSizeError):
            probe(self.server.url("/no-length"))

    def test_error_status(self):
        with pytest.raises(TransportError, match="404"):
            probe(self.server.url("/missing"))

    def test_connection_refused(self):
        with pytest.raises(TransportError, match="HEAD request failed"):
            probe(_dead_url())

    def test_bad_scheme(self):
        with pytest.raises(InvalidArgumentError):
            probe("file:///etc/passwd")

    def test_factory_surfaces_probe_errors(self):
        with pytest.raises(NotSeekableError):
            open_remote_file(self.server.url("/no-ranges"))


class TestProbeAsync:
    """Test the asynchronous probe (httpx)."""

    def setup_method(self):
        self.server = RangeServer().start()

    def teardown_method(self):
        self.server.stop()

    @pytest.mark.asyncio
    async def test_range_capable_resource(self):
        async with httpx.AsyncClient() as client:
            metadata = await probe_async(self.server.url(), client=client)
        assert metadata == ResourceMetadata(content_size=1000)

    @pytest.mark.asyncio
    async def test_size_of_uncompressed_representation(self):
        async with httpx.AsyncClient() as client:
            metadata = await probe_async(self.server.url("/compressible"), client=client)
        assert metadata.content_size == 1000
        assert self.server.head_encodings == ["identity"]

    @pytest.mark.asyncio
    async def test_not_seekable(self):
        async with httpx.AsyncClient() as client:
            with pytest.raises(NotSeekableError):
                await probe_async(self.server.url("/no-ranges"), client=client)
            with pytest.raises(NotSeekableError):
                await probe_async(self.server.url("/ranges-none"), client=client)

    @pytest.mark.asyncio
    async def test_no_content_length(self):
        async with httpx.AsyncClient() as client:
            with pytest.raises(NoContentSizeError):
                await probe_async(self.server.url("/no-length"), client=client)

    @pytest.mark.asyncio
    async def test_error_status(self):
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError, match="404"):
                await probe_async(self.server.url("/missing"), client=client)

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        url = _dead_url()
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError):
                await probe_async(url, client=client)

    @pytest.mark.asyncio
    async def test_factory_surfaces_probe_errors(self):
        with pytest.raises(NoContentSizeError):
            await open_remote_file_async(self.server.url("/no-length"))

    @pytest.mark.asyncio
    async def test_factory_keeps_caller_client_open(self):
        async with httpx.AsyncClient() as client:
            with pytest.raises(NotSeekableError):
                await open_remote_file_async(self.server.url("/no-ranges"), client=client)
            assert not client.is_closed
