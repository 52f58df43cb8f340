"""
claude-session-fs: filesystem utilities for Claude Code session storage.

Decodes ~/.claude/projects/{encoded} folder names back to project paths,
classifies projects against git worktrees, deletes session files safely and
scans session JSONL files for line boundaries.
"""

from session_fs.exceptions import SessionDeletionError, SessionStorageError
from session_fs.schemas.operations import DeleteOutcome, GitInfo, GitWorktreeType
from session_fs.services import (
    SessionStorageService,
    decode_project_path,
    delete_session,
    detect_git_worktree_info,
    estimate_message_count_from_size,
    find_line_ranges,
    find_line_starts,
)

__all__ = [
    'DeleteOutcome',
    'GitInfo',
    'GitWorktreeType',
    'SessionDeletionError',
    'SessionStorageError',
    'SessionStorageService',
    'decode_project_path',
    'delete_session',
    'detect_git_worktree_info',
    'estimate_message_count_from_size',
    'find_line_ranges',
    'find_line_starts',
]
