"""
Path conventions for Claude Code session storage.

Claude Code stores each project's sessions in ~/.claude/projects/{encoded}/,
where {encoded} is the project path with these characters replaced by `-`:
- `/` -> `-`
- `.` -> `-`
- ` ` -> `-`
- `~` -> `-`

WARNING: This encoding is LOSSY. Decoding has to consult the filesystem and is
best-effort - see session_fs.services.decoder.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    'ENCODED_SEPARATOR',
    'PROJECTS_DIR_MARKER',
    'PROJECTS_DIR_MARKER_WINDOWS',
    'SESSION_FILE_SUFFIX',
    'SESSIONS_INDEX_FILENAME',
    'companion_dir_for',
    'default_projects_dir',
    'encode_path',
]

ENCODED_SEPARATOR = '-'

# Everything after the marker in a storage path is the encoded project name
PROJECTS_DIR_MARKER = '.claude/projects/'
PROJECTS_DIR_MARKER_WINDOWS = '.claude\\projects\\'

# Optional file inside a project storage folder: {"originalPath": "/abs/path", ...}
SESSIONS_INDEX_FILENAME = 'sessions-index.json'

SESSION_FILE_SUFFIX = '.jsonl'


def default_projects_dir() -> Path:
    """The storage root Claude Code uses: ~/.claude/projects."""
    return Path.home() / '.claude' / 'projects'


def encode_path(path: Path | str) -> str:
    """
    Encode path for Claude's directory naming.

    Args:
        path: Filesystem path to encode

    Returns:
        Encoded string for use as directory name in ~/.claude/projects/

    Examples:
        >>> encode_path("/Users/chris/project")
        '-Users-chris-project'

        >>> encode_path("/Users/chris/My Project.app")
        '-Users-chris-My-Project-app'
    """
    result = str(path) if isinstance(path, Path) else path
    for char in ['/', '.', ' ', '~']:
        result = result.replace(char, ENCODED_SEPARATOR)
    return result


def companion_dir_for(session_file: Path) -> Path:
    """
    Companion directory of a session file (same path, extension stripped).

    Holds per-session data such as subagents/ and tool-results/:
        ~/.claude/projects/<enc>/{session_id}.jsonl -> ~/.claude/projects/<enc>/{session_id}/
    """
    return session_file.with_suffix('')
