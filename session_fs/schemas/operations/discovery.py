"""
Discovery operation schemas.

Models for decoded project directories and scanned session files.
"""

from __future__ import annotations

from session_fs.schemas.base import StrictModel
from session_fs.schemas.operations.git import GitInfo
from session_fs.schemas.types import PathStr, PermissiveModel


class SessionsIndex(PermissiveModel):
    """
    The optional sessions-index.json file inside a project storage folder.

    Only originalPath is read - it is the one exact record of the project path,
    since the folder name itself is lossy. Everything else Claude Code writes
    there is kept as extra fields and ignored.
    """

    originalPath: str | None = None


class DecodeResult(StrictModel):
    """Decoded form of a ~/.claude/projects/{encoded}/ folder."""

    storage_path: PathStr  # Input as given
    project_path: PathStr  # Best-effort decoded path (input unchanged if undecodable)
    project_name: str  # Display name derived from the encoded folder name


class ProjectInfo(StrictModel):
    """
    A project storage folder found under the projects directory.

    Note: project_path may be approximate when the original directories no
    longer exist on disk - see decode_project_path().
    """

    storage_folder: PathStr  # The ~/.claude/projects/{encoded}/ folder, NOT decoded path
    project_path: PathStr
    project_name: str
    session_count: int  # Number of *.jsonl files directly in the folder
    git: GitInfo | None


class LineScanResult(StrictModel):
    """Line boundary scan of a single session JSONL file."""

    file_path: PathStr
    size_bytes: int
    line_count: int  # Non-empty lines only
    estimated_message_count: int  # Size-based estimate, see estimate_message_count_from_size()
