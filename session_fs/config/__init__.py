"""Configuration for claude-session-fs."""

from __future__ import annotations

from session_fs.config.base import BaseSessionSettings, StorageSettings, get_settings, lazy_settings, settings

__all__ = [
    'BaseSessionSettings',
    'StorageSettings',
    'get_settings',
    'lazy_settings',
    'settings',
]
