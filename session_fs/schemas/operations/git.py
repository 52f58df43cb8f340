"""
Git worktree schemas.

Classification of a project directory's relationship to a git working tree.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

import pydantic

from session_fs.schemas.base import StrictModel
from session_fs.schemas.types import PathStr


class GitWorktreeType(StrEnum):
    """How a project directory relates to git."""

    MAIN = 'main'  # .git is a directory
    LINKED = 'linked'  # .git is a file pointing into <main>/.git/worktrees/
    NOT_GIT = 'not_git'


class GitInfo(StrictModel):
    """Git worktree classification for a project.

    main_project_path is set if and only if worktree_type is LINKED.
    """

    worktree_type: GitWorktreeType
    main_project_path: PathStr | None = None

    @pydantic.model_validator(mode='after')
    def validate_main_project_path(self) -> Self:
        """Only linked worktrees point at a main checkout."""
        is_linked = self.worktree_type is GitWorktreeType.LINKED
        if is_linked != (self.main_project_path is not None):
            raise ValueError('main_project_path must be set for linked worktrees and only for them')
        return self
