"""Service layer for session storage operations."""

from session_fs.services.decoder import decode_project_path, extract_project_name
from session_fs.services.delete import delete_session, preview_delete, validate_delete_path, validate_session_id
from session_fs.services.git import detect_git_worktree_info
from session_fs.services.lines import (
    estimate_message_count_from_size,
    find_line_ranges,
    find_line_starts,
    scan_file_line_ranges,
)
from session_fs.services.storage import SessionStorageService

__all__ = [
    'SessionStorageService',
    'decode_project_path',
    'delete_session',
    'detect_git_worktree_info',
    'estimate_message_count_from_size',
    'extract_project_name',
    'find_line_ranges',
    'find_line_starts',
    'preview_delete',
    'scan_file_line_ranges',
    'validate_delete_path',
    'validate_session_id',
]
