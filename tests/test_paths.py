"""Tests for storage path conventions."""

from __future__ import annotations

from pathlib import Path

import pytest

from session_fs.paths import companion_dir_for, encode_path


@pytest.mark.parametrize(
    ('path', 'expected'),
    [
        ('/Users/chris/project', '-Users-chris-project'),
        ('/Users/chris/My Project.app', '-Users-chris-My-Project-app'),
        ('/home/user/.config', '-home-user--config'),
        ('~/work', '--work'),
        ('/Users/jack/client/claude-code-history-viewer', '-Users-jack-client-claude-code-history-viewer'),
    ],
)
def test_encode_path(path: str, expected: str) -> None:
    assert encode_path(path) == expected


def test_encode_path_accepts_path_objects() -> None:
    assert encode_path(Path('/tmp/a.b')) == '-tmp-a-b'


def test_companion_dir_for() -> None:
    session_file = Path('/home/u/.claude/projects/-home-u-app/019b53ff-8f6a.jsonl')

    assert companion_dir_for(session_file) == Path('/home/u/.claude/projects/-home-u-app/019b53ff-8f6a')
