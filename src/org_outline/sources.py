"""Line sources: in-memory text, file paths, URLs and open streams."""

import io
import os
import re
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional, Union

import httpx
import structlog

logger = structlog.get_logger()

Source = Union[str, os.PathLike, IO]

LINE_BREAK_RE = re.compile(r"\r?\n")
UNIVERSAL_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
URL_SCHEMES = ("http://", "https://")


def split_lines(text: str) -> list[str]:
    """Split text on \\n or \\r\\n, dropping trailing empty lines.

    Examples:
        >>> split_lines("* A\\r\\nbody\\n\\n")
        ['* A', 'body']
    """
    lines = LINE_BREAK_RE.split(text)
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def is_url(source: object) -> bool:
    return isinstance(source, str) and source.lower().startswith(URL_SCHEMES)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _stream_lines(stream: Iterable[str]) -> Iterator[str]:
    for line in stream:
        yield _strip_terminator(line)


def _split_text_chunks(chunks: Iterable[str]) -> Iterator[str]:
    """Split decoded text chunks on \\n, \\r\\n and \\r only.

    Matches how text files are read, so a document yields the same lines
    whether it comes from disk or over HTTP.
    """
    pending = ""
    for chunk in chunks:
        pending += chunk
        # A trailing \r may be the first half of \r\n
        held = pending.endswith("\r")
        if held:
            pending = pending[:-1]
        lines = UNIVERSAL_LINE_BREAK_RE.split(pending)
        pending = lines.pop()
        if held:
            pending += "\r"
        yield from lines

    if pending:
        lines = UNIVERSAL_LINE_BREAK_RE.split(pending)
        if lines[-1] == "":
            lines.pop()
        yield from lines


@contextmanager
def open_source(
    source: Source,
    encoding: str = "utf-8",
    timeout: float = 10.0,
    client: Optional[httpx.Client] = None,
) -> Iterator[Iterator[str]]:
    """Open a source and yield an iterator over its lines.

    Lines are yielded without line terminators. The underlying file or HTTP
    response is closed when the with-block exits, including on errors.
    Streams passed in by the caller are read but not closed.

    Args:
        source: File path (str or Path), http(s) URL, or open text/binary stream
        encoding: Encoding for files, byte streams and URL bodies without a charset
        timeout: Request timeout for URL sources (seconds)
        client: Optional httpx.Client to fetch URLs with (one is created otherwise)

    Raises:
        OSError: If a file cannot be opened or read
        httpx.HTTPError: If a URL cannot be fetched or returns an error status

    Example:
        >>> with open_source("notes.org") as lines:
        ...     for line in lines:
        ...         print(line)
    """
    if is_url(source):
        with _open_url(source, encoding, timeout, client) as lines:
            yield lines
    elif isinstance(source, (str, os.PathLike)):
        path = Path(source)
        logger.debug("source_opened", kind="file", path=str(path))
        with open(path, encoding=encoding) as f:
            yield _stream_lines(f)
        logger.debug("source_closed", kind="file", path=str(path))
    else:
        logger.debug("source_opened", kind="stream")
        if isinstance(source, (io.BufferedIOBase, io.RawIOBase)):
            # detach() hands the stream back to the caller unclosed
            text = io.TextIOWrapper(source, encoding=encoding)
            try:
                yield _stream_lines(text)
            finally:
                text.detach()
        else:
            yield _stream_lines(source)


@contextmanager
def _open_url(
    url: str,
    encoding: str,
    timeout: float,
    client: Optional[httpx.Client],
) -> Iterator[Iterator[str]]:
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    try:
        logger.debug("source_opened", kind="url", url=url)
        with client.stream("GET", url) as response:
            response.raise_for_status()
            if response.charset_encoding is None:
                response.encoding = encoding
            yield _split_text_chunks(response.iter_text())
        logger.debug("source_closed", kind="url", url=url)
    finally:
        if owns_client:
            client.close()
