"""
Store lock for Neo4j database directories.

A running Neo4j instance holds an exclusive advisory lock on the
``store_lock`` file inside each mounted database directory. Offline admin
commands take the same lock so they never operate on a live store.

Invariants:
    - Taking the lock never creates the database directory
    - The lock is exclusive and non-blocking: a held lock fails immediately
    - The lock file itself is left in place after release

How to change safely:
    - Keep STORE_LOCK_FILENAME in sync with the server
    - Archive code must keep excluding the lock file (see is_store_lock_file)
"""

from __future__ import annotations

import errno
import fcntl
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePath

from .errors import StoreLockError, StoreLockPermissionError

logger = logging.getLogger(__name__)

STORE_LOCK_FILENAME = "store_lock"


def is_store_lock_file(path: str | PurePath) -> bool:
    """Return True if ``path`` names the store lock file.

    Only the final path component is compared, so both relative archive
    entries and absolute paths work.
    """
    return PurePath(path).name == STORE_LOCK_FILENAME


class StoreLocker:
    """Exclusive advisory lock on a database directory.

    Attributes:
        directory: Database directory being locked
        lock_file: Path of the store lock file

    Example:
        >>> with StoreLocker(database_dir) as locker:
        ...     locker.check_lock()
        ...     # store is ours until the block exits
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.lock_file = self.directory / STORE_LOCK_FILENAME
        self._fd: int | None = None

    @property
    def is_locked(self) -> bool:
        """Whether this locker currently holds the lock."""
        return self._fd is not None

    def check_lock(self) -> None:
        """Acquire the store lock.

        Raises:
            StoreLockPermissionError: If the lock file cannot be opened for writing
            StoreLockError: If the directory is missing or the lock is held elsewhere
        """
        if self._fd is not None:
            return

        if not self.directory.is_dir():
            raise StoreLockError(
                f"Unable to obtain lock on store lock file: {self.lock_file}. "
                "Database directory does not exist.",
                directory=self.directory,
            )

        try:
            fd = os.open(self.lock_file, os.O_RDWR | os.O_CREAT, 0o644)
        except PermissionError as e:
            raise StoreLockPermissionError(
                f"Unable to write store lock file: {self.lock_file}",
                directory=self.directory,
            ) from e

        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError as e:
            os.close(fd)
            if e.errno in (errno.EAGAIN, errno.EACCES, errno.EWOULDBLOCK):
                raise StoreLockError(
                    f"Unable to obtain lock on store lock file: {self.lock_file}. "
                    "Please ensure no other process is using this database, "
                    "and that the directory is writable (required even for read-only access)",
                    directory=self.directory,
                ) from e
            raise

        self._fd = fd
        logger.debug("Acquired store lock", extra={"lock_file": str(self.lock_file)})

    def release(self) -> None:
        """Release the store lock. Safe to call when not held."""
        if self._fd is None:
            return

        fd, self._fd = self._fd, None
        try:
            fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)
        logger.debug("Released store lock", extra={"lock_file": str(self.lock_file)})

    def __enter__(self) -> StoreLocker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


@contextmanager
def store_lock_checker(directory: str | Path) -> Iterator[StoreLocker]:
    """Hold the store lock on ``directory`` for the duration of the block.

    The lock is released on every exit path, including exceptions raised
    inside the block.

    Raises:
        StoreLockPermissionError: If the lock file cannot be written
        StoreLockError: If the lock is held by another process
    """
    locker = StoreLocker(directory)
    locker.check_lock()
    try:
        yield locker
    finally:
        locker.release()
