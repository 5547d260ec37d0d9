from __future__ import annotations
import io

from .model import InvalidArgumentError


def check_url(url: str) -> None:
    if not url.startswith(("http://", "https://")):
        raise InvalidArgumentError(f"URL must start with 'http://' or 'https://': {url!r}")


def range_header(start: int, length: int) -> str:
    """Inclusive byte range covering ``length`` bytes from ``start``."""
    return f"bytes={start}-{start + length - 1}"


def accepts_byte_ranges(value: str | None) -> bool:
    if not value:
        return False
    units = {unit.strip().lower() for unit in value.split(",")}
    return "bytes" in units


def parse_content_length(value: str | None) -> int | None:
    """Return the length as an int, or None when missing or malformed."""
    if value is None:
        return None
    value = value.strip()
    if not (value.isascii() and value.isdigit()):   # rejects signs, blanks and garbage
        return None
    return int(value)


def resolve_seek(position: int, content_size: int, offset: int, whence: int) -> int:
    """Turn a (offset, whence) pair into an absolute, non-negative position."""
    if whence == io.SEEK_SET:
        target = offset
    elif whence == io.SEEK_CUR:
        target = position + offset
    elif whence == io.SEEK_END:
        target = content_size + offset
    else:
        raise InvalidArgumentError(f"Invalid whence value: {whence}")

    if target < 0:
        raise InvalidArgumentError(f"Negative seek position {target}")
    return target
