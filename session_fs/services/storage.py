"""
Session storage service - async entry point for callers on an event loop.

Every component function does blocking filesystem I/O. This service runs each
call on a worker thread (asyncio.to_thread) so a shared event loop never stalls,
and reports progress through a LoggerProtocol.

The components themselves are stateless; the only state here is the storage
root, so one service instance can serve concurrent calls.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from session_fs.config import settings
from session_fs.paths import SESSION_FILE_SUFFIX, encode_path
from session_fs.protocols import LoggerProtocol, NullLogger
from session_fs.schemas.operations.delete import DeleteOutcome, DeletePreview
from session_fs.schemas.operations.discovery import DecodeResult, LineScanResult, ProjectInfo
from session_fs.schemas.operations.git import GitInfo
from session_fs.services.decoder import decode_project_path, extract_project_name
from session_fs.services.delete import delete_session, preview_delete
from session_fs.services.git import detect_git_worktree_info
from session_fs.services.lines import estimate_message_count_from_size, scan_file_line_ranges

__all__ = ['SessionStorageService']


class SessionStorageService:
    """
    Service for locating, classifying and deleting Claude Code sessions.

    Wraps the synchronous components in session_fs.services with worker-thread
    dispatch. Searches the projects directory (~/.claude/projects/ by default).
    """

    def __init__(self, projects_dir: Path | None = None) -> None:
        """
        Initialize storage service.

        Args:
            projects_dir: Storage root (default: settings.CLAUDE_PROJECTS_DIR)
        """
        self.projects_dir = projects_dir if projects_dir is not None else settings.CLAUDE_PROJECTS_DIR

    def storage_folder_for(self, project_path: Path | str) -> Path:
        """Storage folder Claude Code uses for a project path."""
        return self.projects_dir / encode_path(project_path)

    async def decode(self, storage_path: str, logger: LoggerProtocol | None = None) -> DecodeResult:
        """
        Decode a storage folder path to its project path and display name.

        Args:
            storage_path: ~/.claude/projects/{encoded} path (other paths pass through)
            logger: Optional logger

        Returns:
            DecodeResult (never fails - undecodable input is returned unchanged)
        """
        logger = logger or NullLogger()
        project_path = await asyncio.to_thread(decode_project_path, storage_path)
        project_name = await asyncio.to_thread(extract_project_name, Path(storage_path).name)
        await logger.info(f'Decoded {storage_path} -> {project_path}')
        return DecodeResult(storage_path=storage_path, project_path=project_path, project_name=project_name)

    async def git_info(self, project_path: str, logger: LoggerProtocol | None = None) -> GitInfo | None:
        """Classify a project (or storage folder) against git worktrees."""
        logger = logger or NullLogger()
        info = await asyncio.to_thread(detect_git_worktree_info, project_path)
        if info is not None:
            await logger.info(f'{project_path}: {info.worktree_type}')
        return info

    async def list_projects(self, logger: LoggerProtocol | None = None) -> list[ProjectInfo]:
        """
        List every project storage folder with its decoded path and git info.

        Returns:
            ProjectInfo per folder, sorted by folder name (empty if the projects
            directory doesn't exist)
        """
        logger = logger or NullLogger()
        if not await asyncio.to_thread(self.projects_dir.is_dir):
            await logger.warning(f'Projects directory not found: {self.projects_dir}')
            return []

        folders = await asyncio.to_thread(self._list_storage_folders)
        await logger.info(f'Found {len(folders)} project folders in {self.projects_dir}')
        return await asyncio.gather(*(asyncio.to_thread(self._describe_project, folder) for folder in folders))

    async def scan_session_file(self, file_path: Path, logger: LoggerProtocol | None = None) -> LineScanResult:
        """
        Scan a session file for line boundaries.

        Raises:
            OSError: If the file cannot be read
        """
        logger = logger or NullLogger()
        size_bytes = (await asyncio.to_thread(file_path.stat)).st_size
        ranges = await asyncio.to_thread(scan_file_line_ranges, file_path)
        await logger.info(f'Scanned {file_path.name}: {len(ranges)} lines, {size_bytes:,} bytes')
        return LineScanResult(
            file_path=str(file_path),
            size_bytes=size_bytes,
            line_count=len(ranges),
            estimated_message_count=estimate_message_count_from_size(size_bytes),
        )

    async def delete_session(
        self,
        file_path: str,
        logger: LoggerProtocol | None = None,
    ) -> DeleteOutcome:
        """
        Delete a session file and its companion directory.

        Raises:
            SessionDeletionError: Validation or I/O failure (CompanionDirDeletionError
                means the file itself is already gone)
        """
        logger = logger or NullLogger()
        await logger.info(f'Deleting session file: {file_path}')
        outcome = await asyncio.to_thread(delete_session, file_path, self.projects_dir)
        if outcome.companion_dir_deleted:
            await logger.info('Removed companion directory')
        return outcome

    async def preview_delete(self, file_path: str, logger: LoggerProtocol | None = None) -> DeletePreview:
        """Validate a deletion without performing it."""
        logger = logger or NullLogger()
        preview = await asyncio.to_thread(preview_delete, file_path, self.projects_dir)
        await logger.info(f'Validated {preview.canonical_path}')
        return preview

    def _list_storage_folders(self) -> list[Path]:
        return sorted(path for path in self.projects_dir.iterdir() if path.is_dir() and not path.is_symlink())

    def _describe_project(self, storage_folder: Path) -> ProjectInfo:
        return ProjectInfo(
            storage_folder=str(storage_folder),
            project_path=decode_project_path(str(storage_folder)),
            project_name=extract_project_name(storage_folder.name),
            session_count=sum(1 for _ in storage_folder.glob(f'*{SESSION_FILE_SUFFIX}')),
            git=detect_git_worktree_info(str(storage_folder)),
        )
