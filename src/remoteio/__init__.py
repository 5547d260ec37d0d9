"""remoteio - read and seek remote HTTP resources as if they were local files."""

from .core.model import (                                              # re-export
    ResourceMetadata, RemoteIOError, TransportError, NotSeekableError,
    NoContentSizeError, ReadError, InvalidArgumentError,
)
from .io import (
    RemoteFile, BlockingRemoteFile, probe, probe_async,
    open_remote_file, open_remote_file_async,
)

__version__ = "0.1.0"

__all__ = [
    "RemoteFile", "BlockingRemoteFile",
    "probe", "probe_async", "open_remote_file", "open_remote_file_async",
    "ResourceMetadata", "RemoteIOError", "TransportError", "NotSeekableError",
    "NoContentSizeError", "ReadError", "InvalidArgumentError",
]
