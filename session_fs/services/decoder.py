"""
Project path decoding for Claude Code session storage folders.

Claude Code names each storage folder after the project path with separators
replaced by '-' (see session_fs.paths.encode_path). A '-' in the folder name can
therefore be a path separator OR a literal character of a directory name:

    -Users-jack-client-claude-code-history-viewer
    -> /Users/jack/client/claude-code-history-viewer   (if that directory exists)

The only way to tell is to look at the live filesystem. Decoding walks the
encoded name left to right, treating each '-' as a candidate separator and
descending into candidates that are real directories, with a bounded amount of
backtracking. When the project directory is gone, positional heuristics give a
best-effort answer instead of failing.

Resolution order (first hit wins):
1. originalPath from sessions-index.json inside the storage folder (exact)
2. Unix-style names (-Users-jack-project): filesystem probe, then heuristic
3. Windows-style names (C--Users-jack-project): filesystem probe, then partial
   probe past Users\\<name>\\, then heuristic
4. The input unchanged
"""

from __future__ import annotations

import logging
import os
import re
import stat
from pathlib import Path

import attrs
import pydantic

from session_fs.paths import (
    ENCODED_SEPARATOR,
    PROJECTS_DIR_MARKER,
    PROJECTS_DIR_MARKER_WINDOWS,
    SESSIONS_INDEX_FILENAME,
)
from session_fs.schemas.operations.discovery import SessionsIndex

__all__ = [
    'MAX_DECODE_DEPTH',
    'PartialDecode',
    'decode_project_path',
    'decode_recursive',
    'extract_project_name',
    'find_deepest_existing_dir',
    'read_original_path',
]

logger = logging.getLogger(__name__)

# Recursion limit for pathological names (e.g. hundreds of '-')
MAX_DECODE_DEPTH = 20

# Minimum separators in a partial Windows decode, i.e. past C:\Users\<name>\
MIN_TRUSTED_WINDOWS_DEPTH = 3

# C--Users-jack-project: drive letter, then the encoded ':\'
_WINDOWS_ENCODED_PATTERN = re.compile(r'([A-Za-z])--(.*)', re.DOTALL)


@attrs.define(frozen=True)
class PartialDecode:
    """Deepest existing directory reached, plus the encoded suffix left over."""

    deepest: str
    remaining: str


# ==============================================================================
# Public API
# ==============================================================================


def decode_project_path(session_storage_path: str) -> str:
    """
    Decode a Claude session storage path to the project path it stands for.

    Never raises. When nothing can be decoded the input is returned unchanged,
    so plain project paths pass straight through.

    Args:
        session_storage_path: Path of a ~/.claude/projects/{encoded} folder

    Returns:
        Best-effort project path

    Examples:
        >>> decode_project_path('/Users/jack/.claude/projects/-Users-jack-my-project')
        '/Users/jack/my-project'

        >>> decode_project_path('/some/other/path')
        '/some/other/path'
    """
    original_path = read_original_path(session_storage_path)
    if original_path is not None:
        return original_path

    encoded = _extract_encoded_name(session_storage_path)
    if encoded is None:
        return session_storage_path

    if encoded.startswith(ENCODED_SEPARATOR):
        return _decode_unix(encoded)

    match = _WINDOWS_ENCODED_PATTERN.fullmatch(encoded)
    if match is not None:
        return _decode_windows(drive_letter=match.group(1), after_drive=match.group(2))

    return session_storage_path


def read_original_path(session_storage_path: str) -> str | None:
    """
    Read the authoritative project path from sessions-index.json.

    Returns:
        originalPath if the index exists and holds a non-empty absolute path, else None
    """
    index_path = Path(session_storage_path) / SESSIONS_INDEX_FILENAME
    try:
        content = index_path.read_bytes()
    except (OSError, ValueError):  # ValueError: embedded NUL byte
        return None

    try:
        index = SessionsIndex.model_validate_json(content)
    except pydantic.ValidationError as e:
        logger.debug('Ignoring unreadable %s: %s', index_path, e)
        return None

    original = index.originalPath
    if original and os.path.isabs(original):
        return original
    return None


def decode_recursive(encoded: str, base_path: str, sep: str, depth: int = 0) -> str | None:
    """
    Decode an encoded suffix below base_path by probing the filesystem.

    Each '-' is tried as a separator, left to right. On the first prefix that is
    a real directory (symlinks don't count), the whole remainder is first tried
    as a single leaf - project names often contain '-' - and otherwise decoding
    recurses into that directory. Later '-' positions are only tried if the
    recursion comes back empty.

    Args:
        encoded: Encoded suffix, without the leading '-'
        base_path: Path decoded so far ('' for the filesystem root)
        sep: Separator to join segments with ('/' or '\\')
        depth: Current recursion depth

    Returns:
        A path that exists on disk, or None
    """
    if depth > MAX_DECODE_DEPTH:
        return None
    if not encoded:
        if base_path and os.path.exists(base_path):
            return base_path
        return None

    for pos in _separator_positions(encoded):
        segment = encoded[:pos]
        if not segment:
            continue

        candidate = _join(base_path, segment, sep)
        if not _is_real_dir(candidate):
            continue

        remaining = encoded[pos + 1 :]
        if not remaining:
            return candidate

        leaf = f'{candidate}{sep}{remaining}'
        if _exists_without_symlink(leaf):
            return leaf

        decoded = decode_recursive(remaining, candidate, sep, depth + 1)
        if decoded is not None:
            return decoded

    # No '-' worked as a separator - the whole suffix is one segment
    if base_path:
        full_path = f'{base_path}{sep}{encoded}'
        if os.path.exists(full_path):
            return full_path

    return None


def find_deepest_existing_dir(encoded: str, base_path: str, sep: str, depth: int = 0) -> PartialDecode:
    """
    Best-effort partial decode for projects whose directory no longer exists.

    Descends as deep as possible through existing directories, always taking
    the first '-' whose prefix is a real directory (no backtracking).

    Args:
        encoded: Encoded suffix, without the leading '-'
        base_path: Path decoded so far
        sep: Separator to join segments with
        depth: Current recursion depth

    Returns:
        PartialDecode(deepest existing path, encoded suffix that didn't match)
    """
    if depth > MAX_DECODE_DEPTH or not encoded:
        return PartialDecode(deepest=base_path, remaining=encoded)

    for pos in _separator_positions(encoded):
        segment = encoded[:pos]
        if not segment:
            continue

        candidate = _join(base_path, segment, sep)
        if _is_real_dir(candidate):
            remaining = encoded[pos + 1 :]
            if not remaining:
                return PartialDecode(deepest=candidate, remaining='')
            return find_deepest_existing_dir(remaining, candidate, sep, depth + 1)

    return PartialDecode(deepest=base_path, remaining=encoded)


def extract_project_name(raw_project_name: str) -> str:
    """
    Extract a display name from an encoded storage folder name.

    Args:
        raw_project_name: Folder name under ~/.claude/projects/

    Returns:
        The project's own directory name where it can be told apart,
        otherwise the input unchanged

    Examples:
        >>> extract_project_name('-Users-jack-my-project')
        'my-project'

        >>> extract_project_name('simple-project')
        'simple-project'
    """
    match = _WINDOWS_ENCODED_PATTERN.fullmatch(raw_project_name)

    if match is not None:
        # Partial decode knows exactly where the existing directories stop
        drive_letter, after_drive = match.group(1), match.group(2)
        partial = find_deepest_existing_dir(after_drive, f'{drive_letter}:', '\\')
        if partial.remaining and partial.deepest.count('\\') >= MIN_TRUSTED_WINDOWS_DEPTH:
            return partial.remaining

    if raw_project_name.startswith(ENCODED_SEPARATOR):
        # -Users-jack-my-project: skip root, Users and jack
        parts = raw_project_name.split(ENCODED_SEPARATOR, 3)
        return parts[3] if len(parts) == 4 else raw_project_name

    if match is not None:
        # C--Users-jack-my-project: skip the drive, Users and jack
        parts = match.group(2).split(ENCODED_SEPARATOR, 2)
        return parts[2] if len(parts) == 3 else raw_project_name

    return raw_project_name


# ==============================================================================
# Platform-specific strategies
# ==============================================================================


def _decode_unix(encoded: str) -> str:
    """Decode -Users-jack-project (leading '-' is the root '/')."""
    decoded = decode_recursive(encoded[1:], '', '/')
    if decoded is not None:
        return decoded

    # Heuristic: assume /<root>/<user>/<project> (e.g. /Users/jack/my-project)
    logger.debug('No existing directory matches %r, using positional heuristic', encoded)
    parts = encoded.split(ENCODED_SEPARATOR, 3)
    return '/' + '/'.join(parts[1:])


def _decode_windows(drive_letter: str, after_drive: str) -> str:
    """Decode C--Users-jack-project (the doubled '-' is the encoded ':\\')."""
    drive = f'{drive_letter}:'

    decoded = decode_recursive(after_drive, drive, '\\')
    if decoded is not None:
        return decoded

    # Project directory deleted: keep the existing prefix, append the rest verbatim.
    # Shallow matches (C:\Users) say nothing about where the project name starts.
    partial = find_deepest_existing_dir(after_drive, drive, '\\')
    if partial.deepest.count('\\') >= MIN_TRUSTED_WINDOWS_DEPTH:
        if partial.remaining:
            return f'{partial.deepest}\\{partial.remaining}'
        return partial.deepest

    # Heuristic: assume <drive>:\<seg1>\<seg2>\<rest>
    logger.debug('No trusted partial decode for %r, using positional heuristic', after_drive)
    parts = after_drive.split(ENCODED_SEPARATOR, 2)
    return f'{drive}\\' + '\\'.join(parts)


# ==============================================================================
# Helpers
# ==============================================================================


def _extract_encoded_name(session_storage_path: str) -> str | None:
    """Everything after the .claude/projects/ marker, or None without a marker."""
    for marker in (PROJECTS_DIR_MARKER, PROJECTS_DIR_MARKER_WINDOWS):
        pos = session_storage_path.find(marker)
        if pos != -1:
            return session_storage_path[pos + len(marker) :]
    return None


def _separator_positions(encoded: str) -> list[int]:
    return [i for i, char in enumerate(encoded) if char == ENCODED_SEPARATOR]


def _join(base_path: str, segment: str, sep: str) -> str:
    if not base_path:
        return f'/{segment}'
    return f'{base_path}{sep}{segment}'


def _is_real_dir(path: str) -> bool:
    """True for a directory that is not a symlink."""
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except (OSError, ValueError):
        return False


def _exists_without_symlink(path: str) -> bool:
    try:
        return not stat.S_ISLNK(os.lstat(path).st_mode)
    except (OSError, ValueError):
        return False
