"""
Session delete service - validated removal of a session file and its companion directory.

A session is ~/.claude/projects/<enc>/{session_id}.jsonl plus an optional
companion directory ~/.claude/projects/<enc>/{session_id}/ (subagents,
tool-results). Both are removed together.

Validation runs in a fixed order so the most specific error is reported first:
1. Target exists                                   -> SessionNotFoundError
2. Path is absolute                                -> PathNotAbsoluteError
3. No symlink in any parent, target not a symlink  -> SymlinkRejectedError
4. Filename stem matches [A-Za-z0-9_-]+            -> InvalidFilenameError
5. Canonical path is inside the projects directory -> CanonicalizeError / OutsideAllowedRootError

Known limitation: the filesystem can change between validation and removal
(TOCTOU). Checks run immediately before the removal, which narrows but does
not close that window.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from session_fs.config import settings
from session_fs.exceptions import (
    CanonicalizeError,
    CompanionDirDeletionError,
    DeletionIOError,
    InvalidFilenameError,
    InvalidSessionIdError,
    OutsideAllowedRootError,
    PathNotAbsoluteError,
    SessionNotFoundError,
    SymlinkRejectedError,
)
from session_fs.paths import companion_dir_for
from session_fs.schemas.operations.delete import DeleteOutcome, DeletePreview

__all__ = [
    'FILENAME_PATTERN',
    'SESSION_ID_PATTERN',
    'delete_session',
    'preview_delete',
    'validate_delete_path',
    'validate_session_id',
]

logger = logging.getLogger(__name__)

# Session file stems: UUIDs and agent-{id} names. No dots, no separators.
FILENAME_PATTERN = re.compile(r'[A-Za-z0-9_-]+')

# Session IDs handed to `claude --resume`
SESSION_ID_PATTERN = re.compile(r'[A-Za-z0-9_-]+')


def delete_session(file_path: str, projects_dir: Path | None = None) -> DeleteOutcome:
    """
    Delete a session file and its companion directory.

    The file is always removed before the companion directory. If the file is
    gone but the directory can't be removed, CompanionDirDeletionError is
    raised - the session no longer exists, but cleanup is incomplete.

    Args:
        file_path: Absolute path to the session JSONL file
        projects_dir: Storage root deletions must stay inside
            (default: settings.CLAUDE_PROJECTS_DIR)

    Returns:
        DeleteOutcome with companion_dir_deleted=True if a companion directory was removed

    Raises:
        SessionDeletionError: On any validation failure or I/O error (see module docstring)
    """
    canonical_path = _validate_existing(file_path, projects_dir)

    try:
        canonical_path.unlink()
    except OSError as e:
        raise DeletionIOError(file_path, e) from e

    logger.info('Deleted session file: %s', canonical_path)

    companion_dir = companion_dir_for(canonical_path)
    companion_dir_deleted = False

    if companion_dir.is_symlink():
        # Remove the link entry only, never its target
        try:
            companion_dir.unlink()
        except OSError as e:
            raise CompanionDirDeletionError(file_path, companion_dir, e) from e
        companion_dir_deleted = True
        logger.warning('Removed symlinked companion entry without following it: %s', companion_dir)
    elif companion_dir.is_dir():
        try:
            shutil.rmtree(companion_dir)
        except OSError as e:
            raise CompanionDirDeletionError(file_path, companion_dir, e) from e
        companion_dir_deleted = True
        logger.info('Deleted companion directory: %s', companion_dir)

    return DeleteOutcome(
        success=True,
        file_path=file_path,
        companion_dir_deleted=companion_dir_deleted,
    )


def preview_delete(file_path: str, projects_dir: Path | None = None) -> DeletePreview:
    """
    Run every delete_session() check without removing anything.

    Raises:
        SessionDeletionError: Same validation errors delete_session() would raise
    """
    canonical_path = _validate_existing(file_path, projects_dir)
    companion_dir = companion_dir_for(canonical_path)
    has_companion = companion_dir.is_symlink() or companion_dir.is_dir()

    return DeletePreview(
        file_path=file_path,
        canonical_path=str(canonical_path),
        size_bytes=canonical_path.stat().st_size,
        companion_dir=str(companion_dir) if has_companion else None,
    )


def validate_delete_path(file_path: str, projects_dir: Path | None = None) -> Path:
    """
    Validate that a path is safe to delete (checks 2-5 of the module docstring).

    Args:
        file_path: Path to validate
        projects_dir: Storage root (default: settings.CLAUDE_PROJECTS_DIR)

    Returns:
        Canonical (resolved) path of the file

    Raises:
        PathNotAbsoluteError: Relative path
        SymlinkRejectedError: A parent directory or the file itself is a symlink
        InvalidFilenameError: Filename stem has characters outside [A-Za-z0-9_-]
        CanonicalizeError: Path can't be resolved (e.g. doesn't exist)
        OutsideAllowedRootError: Resolved path is not below the storage root
    """
    path = Path(file_path)

    if not path.is_absolute():
        raise PathNotAbsoluteError(file_path)

    # lstat-based: a swapped-in symlink anywhere above the file is an escape route
    for parent in path.parents:
        if parent.is_symlink():
            raise SymlinkRejectedError(file_path, parent)

    if path.is_symlink():
        raise SymlinkRejectedError(file_path, path)

    if not FILENAME_PATTERN.fullmatch(path.stem):
        raise InvalidFilenameError(file_path, path.stem)

    try:
        canonical_path = path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise CanonicalizeError(file_path, e) from e

    root = projects_dir if projects_dir is not None else settings.CLAUDE_PROJECTS_DIR
    try:
        canonical_root = root.resolve(strict=True)
    except OSError:
        canonical_root = root

    # Strictly below the root - the root itself is not a session
    if canonical_path == canonical_root or not canonical_path.is_relative_to(canonical_root):
        raise OutsideAllowedRootError(file_path, canonical_root)

    return canonical_path


def validate_session_id(session_id: str) -> str:
    """
    Validate a session ID before it is passed to a shell command.

    Raises:
        InvalidSessionIdError: Empty ID or characters outside [A-Za-z0-9_-]
    """
    if not SESSION_ID_PATTERN.fullmatch(session_id):
        raise InvalidSessionIdError(session_id)
    return session_id


def _validate_existing(file_path: str, projects_dir: Path | None) -> Path:
    # lstat-based so a dangling symlink is reported as a symlink, not as missing
    if not Path(file_path).exists(follow_symlinks=False):
        raise SessionNotFoundError(file_path)
    return validate_delete_path(file_path, projects_dir)
