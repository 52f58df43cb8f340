"""
Base configuration for claude-session-fs.

Settings are read from environment variables (case-sensitive), optionally
from a .env file named by LOAD_ENV_FILE.
"""

from __future__ import annotations

import os
import pathlib
from typing import TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

from session_fs.paths import default_projects_dir

T = TypeVar('T', bound='BaseSessionSettings')


class BaseSessionSettings(pydantic_settings.BaseSettings):
    """Shared configuration for the library and the CLI."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='forbid',  # Reject unknown variables in the .env file
    )

    # Application metadata
    APP_NAME: str = 'claude-session-fs'
    VERSION: str = '0.1.0'


class StorageSettings(BaseSessionSettings):
    """Where Claude Code keeps session files."""

    # Deletions are only allowed below this directory
    CLAUDE_PROJECTS_DIR: pathlib.Path = pydantic.Field(default_factory=default_projects_dir)

    @pydantic.field_validator('CLAUDE_PROJECTS_DIR')
    @classmethod
    def validate_projects_dir(cls, v: pathlib.Path) -> pathlib.Path:
        """Validate the storage root is absolute (relative roots depend on cwd)."""
        v = v.expanduser()
        if not v.is_absolute():
            raise ValueError(f'CLAUDE_PROJECTS_DIR must be an absolute path, got: {v}')
        return v


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Build settings from the environment, plus a .env file when one is named.

    The file comes from env_file, else LOAD_ENV_FILE. With neither, the
    default .env lookup is disabled too: a .env in the working directory is
    never read implicitly.

    Raises:
        FileNotFoundError: If the named .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class(_env_file=None)  # No .env file, load from environment only

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)


def lazy_settings(settings_class: type[T]) -> T:
    """Proxy that builds the settings on first attribute access."""
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))


# Shared instance, read by the delete service and the storage facade
settings = lazy_settings(StorageSettings)
