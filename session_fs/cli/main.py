#!/usr/bin/env python3
"""
Command-line interface for claude-session-fs.

Provides commands to decode Claude Code storage folders, inspect git worktree
status, scan session files and delete sessions.
"""

from __future__ import annotations

import asyncio
import logging
import traceback
from pathlib import Path
from typing import Literal, TypeGuard

import pydantic
import typer

from session_fs.cli.logger import CLILogger
from session_fs.exceptions import CompanionDirDeletionError, SessionStorageError
from session_fs.schemas.operations.discovery import ProjectInfo
from session_fs.schemas.operations.git import GitWorktreeType
from session_fs.services.storage import SessionStorageService

app = typer.Typer(
    name='claude-session-fs',
    help='Inspect and clean up Claude Code session storage',
    add_completion=False,
)

OutputFormat = Literal['text', 'json']

ProjectInfoListAdapter: pydantic.TypeAdapter[list[ProjectInfo]] = pydantic.TypeAdapter(list[ProjectInfo])


def _is_output_format(value: str) -> TypeGuard[OutputFormat]:
    """Type guard for valid output formats."""
    return value in ('text', 'json')


def _validate_output_format(value: str) -> OutputFormat:
    """Validate and narrow output format for typer callback."""
    if _is_output_format(value):
        return value
    raise typer.BadParameter("Must be 'text' or 'json'")


def _configure_logging(verbose: bool) -> None:
    """Show library debug logging in verbose mode."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='[%(levelname)s] %(name)s: %(message)s')


@app.command()
def decode(
    storage_path: str = typer.Argument(..., help='Storage folder path (~/.claude/projects/<encoded>)'),
    format: str = typer.Option(
        'text', '--format', '-f', help='Output format: text or json', callback=_validate_output_format
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Decode a storage folder name back to the project path.

    Decoding checks which directories exist on disk; when the project has been
    deleted the result is a best-effort guess.

    Examples:
        claude-session-fs decode ~/.claude/projects/-Users-jack-my-project
    """
    _configure_logging(verbose)
    asyncio.run(_decode_async(storage_path, format, verbose))


async def _decode_async(storage_path: str, format: OutputFormat, verbose: bool) -> None:
    """Async implementation of decode command."""
    logger = CLILogger(verbose=verbose)
    result = await SessionStorageService().decode(storage_path, logger)

    if format == 'json':
        typer.echo(result.model_dump_json(indent=2))
        return

    typer.echo(result.project_path)
    if verbose:
        typer.echo(f'Name: {result.project_name}')


@app.command('git-info')
def git_info(
    project_path: str = typer.Argument(..., help='Project path or storage folder path'),
    format: str = typer.Option(
        'text', '--format', '-f', help='Output format: text or json', callback=_validate_output_format
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Show whether a project is a main checkout, a linked worktree, or not a git repo."""
    _configure_logging(verbose)
    asyncio.run(_git_info_async(project_path, format, verbose))


async def _git_info_async(project_path: str, format: OutputFormat, verbose: bool) -> None:
    """Async implementation of git-info command."""
    logger = CLILogger(verbose=verbose)
    info = await SessionStorageService().git_info(project_path, logger)

    if info is None:
        typer.secho(f'Error: Could not classify {project_path}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if format == 'json':
        typer.echo(info.model_dump_json(indent=2))
        return

    typer.echo(f'Worktree: {info.worktree_type}')
    if info.main_project_path:
        typer.echo(f'Main project: {info.main_project_path}')


@app.command()
def projects(
    projects_dir: Path | None = typer.Option(
        None, '--projects-dir', help='Storage root (default: ~/.claude/projects or CLAUDE_PROJECTS_DIR)'
    ),
    format: str = typer.Option(
        'text', '--format', '-f', help='Output format: text or json', callback=_validate_output_format
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """List project storage folders with their decoded paths."""
    _configure_logging(verbose)
    asyncio.run(_projects_async(projects_dir, format, verbose))


async def _projects_async(projects_dir: Path | None, format: OutputFormat, verbose: bool) -> None:
    """Async implementation of projects command."""
    logger = CLILogger(verbose=verbose)
    service = SessionStorageService(projects_dir)
    project_infos = await service.list_projects(logger)

    if format == 'json':
        typer.echo(ProjectInfoListAdapter.dump_json(project_infos, indent=2).decode())
        return

    if not project_infos:
        typer.echo(f'No projects found in {service.projects_dir}')
        return

    for info in project_infos:
        suffix = ''
        if info.git is not None and info.git.worktree_type is GitWorktreeType.LINKED:
            suffix = f' (worktree of {info.git.main_project_path})'
        elif info.git is not None and info.git.worktree_type is GitWorktreeType.MAIN:
            suffix = ' (git)'
        typer.echo(f'{info.project_name}: {info.project_path} [{info.session_count} sessions]{suffix}')


@app.command()
def lines(
    file_path: Path = typer.Argument(..., help='Session JSONL file'),
    format: str = typer.Option(
        'text', '--format', '-f', help='Output format: text or json', callback=_validate_output_format
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Count the records in a session file."""
    _configure_logging(verbose)
    asyncio.run(_lines_async(file_path, format, verbose))


async def _lines_async(file_path: Path, format: OutputFormat, verbose: bool) -> None:
    """Async implementation of lines command."""
    logger = CLILogger(verbose=verbose)
    try:
        result = await SessionStorageService().scan_session_file(file_path, logger)
    except OSError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if format == 'json':
        typer.echo(result.model_dump_json(indent=2))
        return

    typer.echo(f'File: {result.file_path}')
    typer.echo(f'  Size: {result.size_bytes:,} bytes')
    typer.echo(f'  Lines: {result.line_count}')
    typer.echo(f'  Estimated messages: {result.estimated_message_count}')


@app.command()
def delete(
    file_path: str = typer.Argument(..., help='Absolute path to the session JSONL file'),
    yes: bool = typer.Option(False, '--yes', '-y', help='Skip the confirmation prompt'),
    dry_run: bool = typer.Option(False, '--dry-run', help='Preview what would be deleted'),
    projects_dir: Path | None = typer.Option(
        None, '--projects-dir', help='Storage root (default: ~/.claude/projects or CLAUDE_PROJECTS_DIR)'
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Permanently delete a session file and its companion directory.

    The file must live below the projects directory, have a plain
    [A-Za-z0-9_-] name, and no part of its path may be a symlink.
    There is no backup - use --dry-run to check first.
    """
    _configure_logging(verbose)
    asyncio.run(_delete_async(file_path, yes, dry_run, projects_dir, verbose))


async def _delete_async(
    file_path: str,
    yes: bool,
    dry_run: bool,
    projects_dir: Path | None,
    verbose: bool,
) -> None:
    """Async implementation of delete command."""
    logger = CLILogger(verbose=verbose)
    service = SessionStorageService(projects_dir)

    try:
        preview = await service.preview_delete(file_path, logger)

        if dry_run:
            typer.secho('Dry run - would delete:', fg=typer.colors.YELLOW)
            typer.echo(f'  File: {preview.canonical_path} ({preview.size_bytes:,} bytes)')
            if preview.companion_dir:
                typer.echo(f'  Directory: {preview.companion_dir}')
            return

        if not yes and not typer.confirm(f'Permanently delete {preview.canonical_path}?'):
            typer.echo('Aborted.')
            raise typer.Exit(1)

        outcome = await service.delete_session(file_path, logger)

        typer.secho('✓ Session deleted successfully!', fg=typer.colors.GREEN)
        typer.echo(f'  File: {outcome.file_path}')
        typer.echo(f'  Companion directory removed: {"yes" if outcome.companion_dir_deleted else "no"}')

    except typer.Exit:
        raise
    except CompanionDirDeletionError as e:
        typer.secho('Session file deleted, but cleanup is incomplete.', fg=typer.colors.YELLOW, err=True)
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except SessionStorageError as e:
        typer.secho(f'Error: {e}', fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except Exception as e:
        await logger.error(f'Failed to delete session: {e}')
        if verbose:
            traceback.print_exc()
        raise typer.Exit(1)


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == '__main__':
    main()
