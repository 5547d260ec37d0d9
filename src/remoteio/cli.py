"""CLI implementation for remoteio."""

import io
import json
import logging
import sys
import zipfile
from pathlib import Path
from typing import NoReturn, Optional

import typer

from .core.model import RemoteIOError, InvalidArgumentError
from .io import open_remote_file, probe

app = typer.Typer(add_completion=False, help="Read remote HTTP resources with range requests.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every range request"),
):
    """Read remote HTTP resources with range requests."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def info(url: str = typer.Argument(..., help="HTTP(S) URL to probe")):
    """Probe URL for range support and print its size as JSON."""
    try:
        metadata = probe(url)
    except (RemoteIOError, InvalidArgumentError) as e:
        _fail(e)
    typer.echo(json.dumps({"url": url, "content_size": metadata.content_size}, indent=2))


@app.command()
def read(
    url: str = typer.Argument(..., help="HTTP(S) URL to read from"),
    offset: int = typer.Option(0, "--offset", help="Absolute start offset; negative counts from the end"),
    length: int = typer.Option(1024, "--length", min=1, help="Number of bytes to request"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
):
    """Fetch one byte range of URL."""
    try:
        with open_remote_file(url) as remote:
            if offset < 0:
                remote.seek(offset, io.SEEK_END)
            else:
                remote.seek(offset)
            data = remote.read(length)
    except (RemoteIOError, InvalidArgumentError) as e:
        _fail(e)

    if output:
        output.write_bytes(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()


@app.command("zip-list")
def zip_list(
    url: str = typer.Argument(..., help="HTTP(S) URL of a ZIP archive"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Force JSON-lines output"),
):
    """List the entries of a remote ZIP archive without downloading it."""
    try:
        with open_remote_file(url) as remote:
            with zipfile.ZipFile(io.BufferedReader(remote)) as archive:
                entries = [
                    {"name": zi.filename, "file_size": zi.file_size, "compress_size": zi.compress_size}
                    for zi in archive.infolist()
                ]
            logging.getLogger(__name__).debug(
                "Listed %d entries with %d range requests", len(entries), remote.remote.requests_made
            )
    except (RemoteIOError, InvalidArgumentError, zipfile.BadZipFile) as e:
        _fail(e)

    if jsonl:
        for entry in entries:
            typer.echo(json.dumps(entry))
    else:
        typer.echo(json.dumps(entries, indent=2))


if __name__ == "__main__":
    app()
