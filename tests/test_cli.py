"""
Tests for the claude-session-fs command-line interface.

Commands run in-process through typer's CliRunner.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from session_fs.cli.main import app

runner = CliRunner()


@pytest.fixture
def session_file(projects_dir: Path) -> Path:
    folder = projects_dir / '-zz-jack-my-project'
    folder.mkdir()
    path = folder / 'abc-123.jsonl'
    path.write_text('{"type":"user"}\n{"type":"assistant"}\n')
    (folder / 'abc-123' / 'tool-results').mkdir(parents=True)
    return path


# ==============================================================================
# decode / git-info
# ==============================================================================


def test_decode_text() -> None:
    result = runner.invoke(app, ['decode', '/Users/jack/.claude/projects/-Users-jack-my-project'])

    assert result.exit_code == 0
    assert result.output.strip() == '/Users/jack/my-project'


def test_decode_json() -> None:
    result = runner.invoke(app, ['decode', '/Users/jack/.claude/projects/-Users-jack-my-project', '--format', 'json'])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data['project_path'] == '/Users/jack/my-project'
    assert data['project_name'] == 'my-project'


def test_invalid_format_rejected() -> None:
    result = runner.invoke(app, ['decode', '/some/path', '--format', 'yaml'])

    assert result.exit_code != 0
    assert "Must be 'text' or 'json'" in result.output


def test_git_info(tmp_path: Path) -> None:
    (tmp_path / '.git').write_text('gitdir: /srv/main/.git/worktrees/topic\n')

    result = runner.invoke(app, ['git-info', str(tmp_path)])

    assert result.exit_code == 0
    assert 'Worktree: linked' in result.output
    assert 'Main project: /srv/main' in result.output


def test_git_info_json(tmp_path: Path) -> None:
    result = runner.invoke(app, ['git-info', str(tmp_path), '-f', 'json'])

    assert result.exit_code == 0
    assert json.loads(result.output) == {'worktree_type': 'not_git', 'main_project_path': None}


# ==============================================================================
# projects / lines
# ==============================================================================


def test_projects(session_file: Path, projects_dir: Path) -> None:
    result = runner.invoke(app, ['projects', '--projects-dir', str(projects_dir)])

    assert result.exit_code == 0
    assert 'my-project: /zz/jack/my-project [1 sessions]' in result.output


def test_projects_json(session_file: Path, projects_dir: Path) -> None:
    result = runner.invoke(app, ['projects', '--projects-dir', str(projects_dir), '--format', 'json'])

    assert result.exit_code == 0
    (project,) = json.loads(result.output)
    assert project['storage_folder'] == str(session_file.parent)
    assert project['session_count'] == 1
    assert project['git'] == {'worktree_type': 'not_git', 'main_project_path': None}


def test_projects_json_empty(projects_dir: Path) -> None:
    result = runner.invoke(app, ['projects', '--projects-dir', str(projects_dir), '-f', 'json'])

    assert result.exit_code == 0
    assert json.loads(result.output) == []


def test_projects_empty(projects_dir: Path) -> None:
    result = runner.invoke(app, ['projects', '--projects-dir', str(projects_dir)])

    assert result.exit_code == 0
    assert 'No projects found' in result.output


def test_lines(session_file: Path) -> None:
    result = runner.invoke(app, ['lines', str(session_file)])

    assert result.exit_code == 0
    assert 'Lines: 2' in result.output
    assert 'Estimated messages: 1' in result.output


def test_lines_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ['lines', str(tmp_path / 'missing.jsonl')])

    assert result.exit_code == 1
    assert 'Error:' in result.output


# ==============================================================================
# delete
# ==============================================================================


def test_delete_with_yes(session_file: Path, projects_dir: Path) -> None:
    result = runner.invoke(app, ['delete', str(session_file), '--yes', '--projects-dir', str(projects_dir)])

    assert result.exit_code == 0
    assert 'Session deleted successfully' in result.output
    assert 'Companion directory removed: yes' in result.output
    assert not session_file.exists()
    assert not session_file.with_suffix('').exists()


def test_delete_confirmed_at_prompt(session_file: Path, projects_dir: Path) -> None:
    result = runner.invoke(app, ['delete', str(session_file), '--projects-dir', str(projects_dir)], input='y\n')

    assert result.exit_code == 0
    assert not session_file.exists()


def test_delete_aborted_at_prompt(session_file: Path, projects_dir: Path) -> None:
    result = runner.invoke(app, ['delete', str(session_file), '--projects-dir', str(projects_dir)], input='n\n')

    assert result.exit_code == 1
    assert 'Aborted.' in result.output
    assert session_file.exists()


def test_delete_dry_run(session_file: Path, projects_dir: Path) -> None:
    result = runner.invoke(app, ['delete', str(session_file), '--dry-run', '--projects-dir', str(projects_dir)])

    assert result.exit_code == 0
    assert 'Dry run' in result.output
    assert str(session_file.with_suffix('')) in result.output
    assert session_file.exists()


def test_delete_outside_root(session_file: Path, tmp_path: Path) -> None:
    other_root = tmp_path.resolve() / 'other-root'
    other_root.mkdir()

    result = runner.invoke(app, ['delete', str(session_file), '--yes', '--projects-dir', str(other_root)])

    assert result.exit_code == 1
    assert 'must be within' in result.output
    assert session_file.exists()


def test_delete_relative_path(
    session_file: Path, projects_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(session_file.parent)

    result = runner.invoke(app, ['delete', session_file.name, '--yes', '--projects-dir', str(projects_dir)])

    assert result.exit_code == 1
    assert 'must be absolute' in result.output
    assert session_file.exists()
