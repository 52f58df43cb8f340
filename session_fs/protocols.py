"""
Logger protocol for the async storage facade.

SessionStorageService reports progress through whatever logger the caller
passes in: the CLI prints, an embedding application can forward messages to
its own UI, and library callers can pass nothing at all.
"""

from __future__ import annotations

from typing import Protocol


class LoggerProtocol(Protocol):
    """
    Async progress logger accepted by SessionStorageService methods.

    Implementations:
    - CLILogger (cli/logger.py): stdout, stderr for warnings and errors
    - NullLogger (below): discards everything
    """

    async def info(self, message: str) -> None: ...
    async def warning(self, message: str) -> None: ...
    async def error(self, message: str) -> None: ...


class NullLogger:
    """Default logger when the caller passes none."""

    async def info(self, message: str) -> None:
        pass

    async def warning(self, message: str) -> None:
        pass

    async def error(self, message: str) -> None:
        pass
