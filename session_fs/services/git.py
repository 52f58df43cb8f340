"""
Git worktree detection for decoded project paths.

Detection method:
1. .git is a directory -> MAIN (main repository checkout)
2. .git is a file      -> parse "gitdir: <main>/.git/worktrees/<name>" -> LINKED
3. .git doesn't exist  -> NOT_GIT

Anything that can't be parsed is reported as NOT_GIT - this feeds display
only, so a wrong guess is better than an error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from session_fs.schemas.operations.git import GitInfo, GitWorktreeType
from session_fs.services.decoder import decode_project_path

__all__ = [
    'detect_git_worktree_info',
    'extract_main_git_dir',
]

logger = logging.getLogger(__name__)

GITDIR_PREFIX = 'gitdir: '
WORKTREES_MARKER = '/.git/worktrees/'


def detect_git_worktree_info(project_path: str) -> GitInfo | None:
    """
    Detect how a project relates to a git working tree.

    The path is decoded first, so both storage folders
    (~/.claude/projects/-Users-jack-project) and plain project paths work.

    Args:
        project_path: Storage folder path or project path

    Returns:
        GitInfo classification (main_project_path set for linked worktrees only)
    """
    actual_path = decode_project_path(project_path)
    git_path = Path(actual_path) / '.git'

    if not git_path.exists():
        return GitInfo(worktree_type=GitWorktreeType.NOT_GIT)

    if git_path.is_dir():
        return GitInfo(worktree_type=GitWorktreeType.MAIN)

    if git_path.is_file():
        main_project_path = _read_main_project_path(git_path)
        if main_project_path is not None:
            return GitInfo(worktree_type=GitWorktreeType.LINKED, main_project_path=main_project_path)

    return GitInfo(worktree_type=GitWorktreeType.NOT_GIT)


def extract_main_git_dir(gitdir: str) -> str | None:
    """
    Extract the main repository's .git directory from a worktree gitdir.

    Examples:
        >>> extract_main_git_dir('/Users/jack/main/.git/worktrees/feature')
        '/Users/jack/main/.git'

        >>> extract_main_git_dir('/some/path/without/worktrees') is None
        True
    """
    pos = gitdir.find(WORKTREES_MARKER)
    if pos == -1:
        return None
    return f'{gitdir[:pos]}/.git'


def _read_main_project_path(git_file: Path) -> str | None:
    """Main checkout path from a linked worktree's .git file, or None if unparseable."""
    try:
        content = git_file.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.debug('Cannot read %s: %s', git_file, e)
        return None

    if not content.startswith(GITDIR_PREFIX):
        return None

    # /path/to/main/.git/worktrees/branch -> /path/to/main/.git -> /path/to/main
    main_git_dir = extract_main_git_dir(content[len(GITDIR_PREFIX) :].strip())
    if main_git_dir is None:
        return None
    return str(Path(main_git_dir).parent)
