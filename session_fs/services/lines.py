"""
Line boundary scanning for session JSONL files.

Session logs are append-only, one JSON record per line, and can run to tens
of megabytes. Consumers address records by byte range instead of splitting the
file into per-line strings, so the scan only records offsets.

The search itself is bytes.find / mmap.find, which runs in C - one forward
pass over the buffer with no per-line allocation besides the offset tuple.
"""

from __future__ import annotations

import math
import mmap
import os
from collections.abc import Iterator
from pathlib import Path

from session_fs.schemas.types import LineRange

__all__ = [
    'AVERAGE_MESSAGE_SIZE_BYTES',
    'estimate_message_count_from_size',
    'find_line_ranges',
    'find_line_starts',
    'iter_lines',
    'scan_file_line_ranges',
]

# Typical Claude message records are 800-1200 bytes
AVERAGE_MESSAGE_SIZE_BYTES = 1000.0

_NEWLINE = b'\n'

type Buffer = bytes | bytearray | mmap.mmap


def find_line_ranges(data: Buffer) -> list[LineRange]:
    """
    Find the byte range of every non-empty line in a buffer.

    Ranges are half-open and exclude the newline. Empty lines (consecutive
    newlines, or the empty segment after a trailing newline) are skipped, and
    an unterminated last line still gets a range ending at len(data).

    Args:
        data: Raw file contents (bytes, bytearray or a memory map)

    Returns:
        (start, end) offsets in ascending order

    Examples:
        >>> find_line_ranges(b'line1\\n\\nline3\\n')
        [(0, 5), (7, 12)]
    """
    ranges: list[LineRange] = []
    find = data.find
    start = 0

    pos = find(_NEWLINE, start)
    while pos != -1:
        if pos > start:
            ranges.append((start, pos))
        start = pos + 1
        pos = find(_NEWLINE, start)

    # Last line without trailing newline
    if start < len(data):
        ranges.append((start, len(data)))

    return ranges


def find_line_starts(data: Buffer) -> list[int]:
    """
    Find the offset where each line starts.

    Offset 0 is always included. A trailing newline does not add a start past
    the end of the data.

    Examples:
        >>> find_line_starts(b'line1\\nline2\\n')
        [0, 6]
    """
    starts = [0]
    find = data.find
    size = len(data)

    pos = find(_NEWLINE)
    while pos != -1:
        if pos + 1 < size:
            starts.append(pos + 1)
        pos = find(_NEWLINE, pos + 1)

    return starts


def iter_lines(data: Buffer) -> Iterator[bytes | bytearray]:
    """Yield the contents of each non-empty line, newline excluded."""
    for start, end in find_line_ranges(data):
        yield data[start:end]


def scan_file_line_ranges(path: Path | str) -> list[LineRange]:
    """
    Memory-map a session file and find its line ranges.

    Args:
        path: Session JSONL file

    Returns:
        Line ranges as returned by find_line_ranges()

    Raises:
        OSError: If the file cannot be opened or mapped
    """
    with open(path, 'rb') as f:
        # mmap refuses zero-length files
        if os.fstat(f.fileno()).st_size == 0:
            return []
        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
            return find_line_ranges(mapped)


def estimate_message_count_from_size(file_size: int) -> int:
    """
    Estimate how many messages a session file holds from its size alone.

    Small files are treated as having at least one message.

    Examples:
        >>> estimate_message_count_from_size(2500)
        3
        >>> estimate_message_count_from_size(0)
        1
    """
    if file_size < 0:
        raise ValueError(f'file_size must be non-negative, got {file_size}')
    return max(math.ceil(file_size / AVERAGE_MESSAGE_SIZE_BYTES), 1)
