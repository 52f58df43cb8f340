"""
Shared fixtures for claude-session-fs tests.

Tests build their own ~/.claude/projects tree under tmp_path - nothing here
touches the real home directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    """An empty storage root at <tmp>/.claude/projects (symlink-free, see delete checks)."""
    path = tmp_path.resolve() / '.claude' / 'projects'
    path.mkdir(parents=True)
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """
    A directory whose path survives encode -> decode.

    encode_path() maps '.', ' ' and '~' to '-' as well as '/', so a tmp_path
    containing any of them can never decode back to itself.
    """
    tmp_path = tmp_path.resolve()
    if any(char in str(tmp_path) for char in '. ~'):
        pytest.skip(f'tmp_path is not losslessly encodable: {tmp_path}')
    path = tmp_path / 'work'
    path.mkdir()
    return path

