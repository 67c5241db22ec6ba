"""
Text sources for the bulk loaders.

Opens in-memory text, plain files and compressed files (gzip, bzip2) as
text streams. Compressed files are decompressed incrementally as the stream
is read. All streams are opened with ``newline=""`` so that the CSV
tokenizer and the line iterator see identical input whatever the source.
"""

import bz2
import gzip
import io
import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import IO, Iterator, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Compression(str, Enum):
    """Compression of a source file."""
    AUTO = "auto"
    NONE = "none"
    GZIP = "gzip"
    BZ2 = "bz2"


# Leading bytes that identify each compressed format.
MAGIC_BYTES = {
    Compression.GZIP: b'\x1f\x8b',
    Compression.BZ2: b'BZh',
}


def detect_compression(file_path: PathLike) -> Compression:
    """Detect the compression of a file from its magic bytes.

    Args:
        file_path: Path to the file to check

    Returns:
        The matching compression, or NONE for plain or unreadable files
    """
    try:
        with open(file_path, 'rb') as f:
            head = f.read(max(len(magic) for magic in MAGIC_BYTES.values()))
    except OSError:
        return Compression.NONE
    for compression, magic in MAGIC_BYTES.items():
        if head.startswith(magic):
            return compression
    return Compression.NONE


def _open_stream(file_path: PathLike, compression: Compression, encoding: str) -> IO[str]:
    if compression == Compression.GZIP:
        return gzip.open(file_path, 'rt', encoding=encoding, newline='')
    if compression == Compression.BZ2:
        return bz2.open(file_path, 'rt', encoding=encoding, newline='')
    return open(file_path, 'r', encoding=encoding, newline='')


@contextmanager
def open_text_source(file_path: PathLike, compression: Union[Compression, str] = Compression.AUTO,
                     encoding: str = "utf-8") -> Iterator[IO[str]]:
    """Open a plain or compressed file as a text stream.

    The stream is closed when the block exits, including on error.

    Args:
        file_path: Path to the source file
        compression: Compression of the file; AUTO sniffs the magic bytes
        encoding: Text encoding of the (decompressed) content

    Yields:
        Text stream reading the decompressed content

    Raises:
        OSError: If the file cannot be opened or decompressed
        ValueError: If compression is not a known value
    """
    compression = Compression(compression)
    if compression == Compression.AUTO:
        compression = detect_compression(file_path)
        logger.debug(f"Detected compression for {file_path}: {compression.value}")

    stream = _open_stream(file_path, compression, encoding)
    try:
        yield stream
    finally:
        stream.close()


def text_stream(data: str) -> IO[str]:
    """Wrap in-memory text in a stream read the same way as a file."""
    if not isinstance(data, str):
        raise TypeError(f"Expected text data, got {type(data).__name__}")
    return io.StringIO(data, newline='')


def skip_lines(stream: IO[str], count: int) -> None:
    """Skip the first ``count`` physical lines of a stream."""
    for _ in range(count):
        if next(stream, None) is None:
            break
    if count:
        logger.debug(f"Skipped {count} leading line(s)")
