"""
Tests for line boundary scanning.

Covers empty input, missing trailing newlines, skipped empty lines, and the
size-based message count estimate.
"""

from __future__ import annotations

import mmap
from pathlib import Path

import pytest

from session_fs.services.lines import (
    estimate_message_count_from_size,
    find_line_ranges,
    find_line_starts,
    iter_lines,
    scan_file_line_ranges,
)

# ==============================================================================
# find_line_ranges
# ==============================================================================


def test_find_line_ranges_empty() -> None:
    assert find_line_ranges(b'') == []


def test_find_line_ranges_single_line_no_newline() -> None:
    assert find_line_ranges(b'hello world') == [(0, 11)]


def test_find_line_ranges_single_line_with_newline() -> None:
    assert find_line_ranges(b'hello world\n') == [(0, 11)]


def test_find_line_ranges_multiple_lines() -> None:
    assert find_line_ranges(b'line1\nline2\nline3') == [(0, 5), (6, 11), (12, 17)]


def test_find_line_ranges_skips_empty_lines() -> None:
    """Consecutive newlines produce no range."""
    assert find_line_ranges(b'line1\n\nline3\n') == [(0, 5), (7, 12)]


def test_find_line_ranges_only_newlines() -> None:
    assert find_line_ranges(b'\n\n\n') == []


def test_find_line_ranges_leading_newline() -> None:
    assert find_line_ranges(b'\nabc') == [(1, 4)]


def test_find_line_ranges_last_range_ends_at_buffer_length() -> None:
    data = b'{"a":1}\n{"b":2}'
    assert find_line_ranges(data)[-1][1] == len(data)


@pytest.mark.parametrize(
    'data',
    [
        b'{"type":"user"}\n{"type":"assistant"}\n',
        b'\n\nx\n\n\nyz\n',
        b'no newline at all',
        b'a\nb\nc\nd\ne',
    ],
)
def test_find_line_ranges_covers_all_non_newline_bytes(data: bytes) -> None:
    """Concatenating the ranges gives the buffer with every newline removed."""
    ranges = find_line_ranges(data)

    assert b''.join(data[start:end] for start, end in ranges) == data.replace(b'\n', b'')
    assert all(start < end for start, end in ranges)
    assert ranges == sorted(ranges)


def test_find_line_ranges_accepts_bytearray() -> None:
    assert find_line_ranges(bytearray(b'ab\ncd')) == [(0, 2), (3, 5)]


# ==============================================================================
# find_line_starts
# ==============================================================================


def test_find_line_starts_empty() -> None:
    assert find_line_starts(b'') == [0]


def test_find_line_starts_single_line() -> None:
    assert find_line_starts(b'hello') == [0]


def test_find_line_starts_multiple_lines() -> None:
    assert find_line_starts(b'line1\nline2\nline3') == [0, 6, 12]


def test_find_line_starts_trailing_newline_adds_no_start() -> None:
    assert find_line_starts(b'line1\nline2\n') == [0, 6]


def test_find_line_starts_keeps_empty_lines() -> None:
    """Unlike ranges, starts include empty lines (except past the end)."""
    assert find_line_starts(b'a\n\nb') == [0, 2, 3]


# ==============================================================================
# iter_lines / scan_file_line_ranges
# ==============================================================================


def test_iter_lines_yields_line_contents() -> None:
    assert list(iter_lines(b'{"a":1}\n\n{"b":2}\n')) == [b'{"a":1}', b'{"b":2}']


def test_scan_file_line_ranges(tmp_path: Path) -> None:
    session_file = tmp_path / 'abc123.jsonl'
    session_file.write_bytes(b'{"type":"user"}\n{"type":"assistant"}\n')

    assert scan_file_line_ranges(session_file) == [(0, 15), (16, 36)]


def test_scan_file_line_ranges_empty_file(tmp_path: Path) -> None:
    session_file = tmp_path / 'empty.jsonl'
    session_file.touch()

    assert scan_file_line_ranges(session_file) == []


def test_scan_file_line_ranges_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        scan_file_line_ranges(tmp_path / 'missing.jsonl')


def test_find_line_ranges_on_mmap(tmp_path: Path) -> None:
    session_file = tmp_path / 'mapped.jsonl'
    session_file.write_bytes(b'x\ny\n')

    with open(session_file, 'rb') as f, mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
        assert find_line_ranges(mapped) == [(0, 1), (2, 3)]
        assert list(iter_lines(mapped)) == [b'x', b'y']


# ==============================================================================
# estimate_message_count_from_size
# ==============================================================================


@pytest.mark.parametrize(
    ('file_size', 'expected'),
    [
        (0, 1),  # Minimum is 1
        (500, 1),  # ceil(0.5)
        (1000, 1),  # Exact boundary
        (1001, 2),
        (2500, 3),  # ceil(2.5)
        (10000, 10),
    ],
)
def test_estimate_message_count_from_size(file_size: int, expected: int) -> None:
    assert estimate_message_count_from_size(file_size) == expected


def test_estimate_message_count_rejects_negative_size() -> None:
    with pytest.raises(ValueError):
        estimate_message_count_from_size(-1)
