"""
Delete operation schemas.

Models for session deletion results.
"""

from __future__ import annotations

from session_fs.schemas.base import StrictModel
from session_fs.schemas.types import PathStr


class DeleteOutcome(StrictModel):
    """Result of deleting a session file and its companion directory."""

    success: bool
    file_path: PathStr  # As supplied by the caller, not the canonical form
    companion_dir_deleted: bool  # True if ~/.claude/projects/<enc>/{session_id}/ existed and was removed


class DeletePreview(StrictModel):
    """Dry-run result: what delete_session would remove, without removing it."""

    file_path: PathStr
    canonical_path: PathStr
    size_bytes: int
    companion_dir: PathStr | None  # None when no companion directory exists
