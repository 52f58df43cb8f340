"""Tests for git worktree detection."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from session_fs.paths import encode_path
from session_fs.schemas.operations.git import GitInfo, GitWorktreeType
from session_fs.services.git import detect_git_worktree_info, extract_main_git_dir


def test_not_a_git_repository(tmp_path: Path) -> None:
    info = detect_git_worktree_info(str(tmp_path))

    assert info == GitInfo(worktree_type=GitWorktreeType.NOT_GIT)


def test_nonexistent_project_is_not_git() -> None:
    info = detect_git_worktree_info('/nonexistent/project/path')

    assert info is not None
    assert info.worktree_type is GitWorktreeType.NOT_GIT


def test_nul_byte_in_storage_folder_is_not_git() -> None:
    info = detect_git_worktree_info('/x/.claude/projects/-a\x00b')

    assert info == GitInfo(worktree_type=GitWorktreeType.NOT_GIT)


def test_main_repository(tmp_path: Path) -> None:
    (tmp_path / '.git').mkdir()

    info = detect_git_worktree_info(str(tmp_path))

    assert info == GitInfo(worktree_type=GitWorktreeType.MAIN)
    assert info.main_project_path is None


def test_linked_worktree(tmp_path: Path) -> None:
    (tmp_path / '.git').write_text('gitdir: /Users/jack/main-project/.git/worktrees/feature-branch\n')

    info = detect_git_worktree_info(str(tmp_path))

    assert info is not None
    assert info.worktree_type is GitWorktreeType.LINKED
    assert info.main_project_path == '/Users/jack/main-project'


@pytest.mark.parametrize(
    'content',
    [
        '/Users/jack/main-project/.git/worktrees/feature-branch\n',  # No "gitdir: " prefix
        'gitdir: /Users/jack/main-project/.git/modules/sub\n',  # Submodule, not a worktree
        '',
    ],
)
def test_unparseable_git_file_is_not_git(tmp_path: Path, content: str) -> None:
    (tmp_path / '.git').write_text(content)

    info = detect_git_worktree_info(str(tmp_path))

    assert info == GitInfo(worktree_type=GitWorktreeType.NOT_GIT)


def test_undecodable_git_file_is_not_git(tmp_path: Path) -> None:
    (tmp_path / '.git').write_bytes(b'gitdir: \xff\xfe/.git/worktrees/x')

    info = detect_git_worktree_info(str(tmp_path))

    assert info == GitInfo(worktree_type=GitWorktreeType.NOT_GIT)


def test_storage_folder_is_decoded_first(projects_dir: Path, workspace: Path) -> None:
    project = workspace / 'main-project'
    (project / '.git').mkdir(parents=True)

    info = detect_git_worktree_info(str(projects_dir / encode_path(project)))

    assert info == GitInfo(worktree_type=GitWorktreeType.MAIN)


def test_storage_folder_with_original_path(projects_dir: Path, tmp_path: Path) -> None:
    """sessions-index.json points at the real project, wherever it is."""
    project = tmp_path / 'some.dotted project'
    project.mkdir()
    (project / '.git').write_text('gitdir: /srv/repo/.git/worktrees/wt\n')
    storage_folder = projects_dir / encode_path(project)
    storage_folder.mkdir()
    (storage_folder / 'sessions-index.json').write_text(f'{{"originalPath": "{project}"}}')

    info = detect_git_worktree_info(str(storage_folder))

    assert info == GitInfo(worktree_type=GitWorktreeType.LINKED, main_project_path='/srv/repo')


# ==============================================================================
# extract_main_git_dir
# ==============================================================================


def test_extract_main_git_dir() -> None:
    assert extract_main_git_dir('/Users/jack/main/.git/worktrees/feature') == '/Users/jack/main/.git'


def test_extract_main_git_dir_without_worktrees() -> None:
    assert extract_main_git_dir('/some/path/without/worktrees') is None


# ==============================================================================
# GitInfo invariants
# ==============================================================================


def test_linked_requires_main_project_path() -> None:
    with pytest.raises(pydantic.ValidationError):
        GitInfo(worktree_type=GitWorktreeType.LINKED)


@pytest.mark.parametrize('worktree_type', [GitWorktreeType.MAIN, GitWorktreeType.NOT_GIT])
def test_only_linked_has_main_project_path(worktree_type: GitWorktreeType) -> None:
    with pytest.raises(pydantic.ValidationError):
        GitInfo(worktree_type=worktree_type, main_project_path='/somewhere')


def test_git_info_serializes_worktree_type_as_string() -> None:
    info = GitInfo(worktree_type=GitWorktreeType.LINKED, main_project_path='/repo')

    assert info.model_dump(mode='json') == {'worktree_type': 'linked', 'main_project_path': '/repo'}
