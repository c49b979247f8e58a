"""
Error types for neo4j-admin commands.

This module defines the exceptions raised while running an admin command:
- AdminError: Base exception
- IncorrectUsage: Malformed or missing command arguments
- CommandFailed: Operational failure, reported to the operator as-is
- StoreLockError: The store lock is held by another process
- StoreLockPermissionError: The store lock file cannot be written

Invariants:
    - All errors inherit from AdminError
    - CommandFailed messages are final, operator-facing text
    - Usage errors are raised before any resource is touched
"""

from __future__ import annotations

from pathlib import Path


class AdminError(Exception):
    """Base exception for all admin command errors.

    Attributes:
        message: Error message
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class IncorrectUsage(AdminError):
    """The command was invoked with invalid arguments.

    Raised when:
    - A required argument is missing
    - An unknown argument is supplied
    """


class CommandFailed(AdminError):
    """The command could not complete.

    Attributes:
        cause: Underlying exception, if any
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StoreLockError(AdminError):
    """Unable to obtain the store lock.

    Raised when:
    - Another process holds the lock
    - The database directory does not exist

    Attributes:
        directory: Directory whose lock was requested
    """

    def __init__(self, message: str, directory: Path | None = None) -> None:
        super().__init__(message)
        self.directory = directory


class StoreLockPermissionError(StoreLockError):
    """The store lock file exists but is not writable by this user."""
