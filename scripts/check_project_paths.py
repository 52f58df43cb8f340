#!/usr/bin/env -S uv run
"""
Check which Claude Code project folders still point at an existing directory.

Decodes every folder in ~/.claude/projects (or CLAUDE_PROJECTS_DIR), reports
projects whose directory is gone, and totals session records per project.
Useful before cleaning up storage for deleted projects.

Usage:
    uv run scripts/check_project_paths.py [projects_dir]
"""

from __future__ import annotations

import sys
from pathlib import Path

from session_fs.config import settings
from session_fs.paths import SESSION_FILE_SUFFIX
from session_fs.services.decoder import decode_project_path, extract_project_name
from session_fs.services.lines import scan_file_line_ranges


def count_records(storage_folder: Path) -> tuple[int, int, list[tuple[Path, str]]]:
    """
    Count session files and their non-empty lines.

    A file that cannot be opened or mapped is listed as unreadable instead of
    aborting the whole report.

    Returns:
        (session_files, total_records, unreadable) where unreadable holds
        (path, error) pairs
    """
    session_files = sorted(storage_folder.glob(f'*{SESSION_FILE_SUFFIX}'))
    total_records = 0
    unreadable: list[tuple[Path, str]] = []
    for path in session_files:
        try:
            total_records += len(scan_file_line_ranges(path))
        except OSError as e:
            unreadable.append((path, str(e)))
    return len(session_files), total_records, unreadable


def main() -> None:
    print('=' * 80)
    print('Claude Code Project Path Check')
    print('=' * 80)
    print()

    projects_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.CLAUDE_PROJECTS_DIR

    if not projects_dir.is_dir():
        print(f'Directory not found: {projects_dir}')
        sys.exit(1)

    storage_folders = sorted(path for path in projects_dir.iterdir() if path.is_dir())

    print(f'Found {len(storage_folders)} project folders')
    print()

    missing_projects = []
    total_sessions = 0
    total_records = 0
    unreadable_files: list[tuple[Path, str]] = []

    for storage_folder in storage_folders:
        project_path = decode_project_path(str(storage_folder))
        session_count, record_count, unreadable = count_records(storage_folder)
        total_sessions += session_count
        total_records += record_count
        unreadable_files.extend(unreadable)

        if not Path(project_path).exists():
            missing_projects.append((storage_folder, project_path, session_count))
            print(f'✗ MISSING: {extract_project_name(storage_folder.name)}')
            print(f'  Decoded path: {project_path}')
            print(f'  Sessions: {session_count} ({record_count:,} records)')
            print()

    print()
    print('SUMMARY')
    print('-' * 80)
    print(f'Project folders checked: {len(storage_folders)}')
    print(f'Existing projects: {len(storage_folders) - len(missing_projects)}')
    print(f'Missing projects: {len(missing_projects)}')
    print(f'Total sessions: {total_sessions:,}')
    print(f'Total records: {total_records:,}')
    print(f'Unreadable session files: {len(unreadable_files)}')
    print()

    if unreadable_files:
        print('UNREADABLE SESSION FILES:')
        for path, error in unreadable_files:
            print(f'  {path}')
            print(f'    {error}')
        print()

    if missing_projects:
        print('FOLDERS FOR MISSING PROJECTS:')
        for storage_folder, project_path, session_count in missing_projects:
            print(f'  {storage_folder}')
            print(f'    -> {project_path} ({session_count} sessions)')
        print()
        print('✗ Some projects no longer exist (decoded paths may be approximate)')
        sys.exit(1)
    else:
        print('✓ Every project folder points at an existing directory!')
        sys.exit(0)


if __name__ == '__main__':
    main()
