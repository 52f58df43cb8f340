"""
Shared exceptions for claude-session-fs.

Domain-specific exceptions used across services. Every message is written to be
shown to a user as-is (the CLI prints str(exc)).

Exception Hierarchy:
    SessionStorageError (base)
    ├── InvalidSessionIdError (session ID fails the safe-character pattern)
    └── SessionDeletionError (deletion precondition or I/O failures)
        ├── SessionNotFoundError
        ├── PathNotAbsoluteError
        ├── SymlinkRejectedError
        ├── InvalidFilenameError
        ├── CanonicalizeError
        ├── OutsideAllowedRootError
        ├── DeletionIOError
        └── CompanionDirDeletionError (partial success - file already removed)

Decoding and git detection never raise - they degrade to best-effort results.
"""

from __future__ import annotations

from pathlib import Path


class SessionStorageError(Exception):
    """Base exception for all claude-session-fs errors."""


class InvalidSessionIdError(SessionStorageError):
    """Raised when a session ID contains anything but letters, digits, '_' and '-'."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f'Invalid session ID format: {session_id!r}')


class SessionDeletionError(SessionStorageError):
    """Base exception for session deletion failures."""

    def __init__(self, file_path: str, message: str) -> None:
        self.file_path = file_path
        super().__init__(message)


class SessionNotFoundError(SessionDeletionError):
    """Raised when the session file to delete does not exist."""

    def __init__(self, file_path: str) -> None:
        super().__init__(file_path, f'Session file not found: {file_path}')


class PathNotAbsoluteError(SessionDeletionError):
    """Raised when a relative path is supplied for deletion."""

    def __init__(self, file_path: str) -> None:
        super().__init__(file_path, f'File path must be absolute: {file_path}')


class SymlinkRejectedError(SessionDeletionError):
    """Raised when the target or any of its parent directories is a symlink."""

    def __init__(self, file_path: str, symlink: Path) -> None:
        self.symlink = symlink
        if symlink == Path(file_path):
            message = f'File path cannot be a symlink: {file_path}'
        else:
            message = f'Symlinks are not allowed in path: {symlink} (in {file_path})'
        super().__init__(file_path, message)


class InvalidFilenameError(SessionDeletionError):
    """Raised when the filename stem fails the safe-character pattern."""

    def __init__(self, file_path: str, stem: str) -> None:
        self.stem = stem
        super().__init__(
            file_path,
            f'Filename must contain only alphanumeric characters, underscores, and hyphens: {stem!r}',
        )


class CanonicalizeError(SessionDeletionError):
    """Raised when the OS cannot resolve the path to its canonical form."""

    def __init__(self, file_path: str, reason: OSError | RuntimeError) -> None:
        self.reason = reason
        super().__init__(file_path, f'Failed to resolve path {file_path}: {reason}')


class OutsideAllowedRootError(SessionDeletionError):
    """Raised when the canonical path is not inside the session storage root."""

    def __init__(self, file_path: str, allowed_root: Path) -> None:
        self.allowed_root = allowed_root
        super().__init__(file_path, f'File path must be within {allowed_root}: {file_path}')


class DeletionIOError(SessionDeletionError):
    """Raised when removing the session file itself fails."""

    def __init__(self, file_path: str, reason: OSError) -> None:
        self.reason = reason
        super().__init__(file_path, f'Failed to delete session file {file_path}: {reason}')


class CompanionDirDeletionError(SessionDeletionError):
    """
    Raised when the session file was removed but its companion directory was not.

    This is a partial success: callers must not assume the session still exists.
    """

    file_deleted = True

    def __init__(self, file_path: str, companion_dir: Path, reason: OSError) -> None:
        self.companion_dir = companion_dir
        self.reason = reason
        super().__init__(
            file_path,
            f'Session file deleted but failed to remove companion directory {companion_dir}: {reason}',
        )
