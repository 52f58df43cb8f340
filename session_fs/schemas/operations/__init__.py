"""
Operation schemas for service results.

This package contains Pydantic models for operation results returned by services.
These are kept out of the service modules to enable reuse and cleaner separation.
"""

from __future__ import annotations

from session_fs.schemas.operations.delete import DeleteOutcome, DeletePreview
from session_fs.schemas.operations.discovery import DecodeResult, LineScanResult, ProjectInfo, SessionsIndex
from session_fs.schemas.operations.git import GitInfo, GitWorktreeType

__all__ = [
    # Delete
    'DeleteOutcome',
    'DeletePreview',
    # Discovery
    'DecodeResult',
    'LineScanResult',
    'ProjectInfo',
    'SessionsIndex',
    # Git
    'GitInfo',
    'GitWorktreeType',
]
