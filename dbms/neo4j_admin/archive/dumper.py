"""
Database dumper for neo4j-admin.

The Dumper packs a database directory, and its transaction log directory
when that lives elsewhere, into a single-file archive.

Archive format:
    A tar stream, gzip-compressed by default. Store files are stored
    relative to the database directory; transaction logs kept outside the
    database directory are stored relative to their own directory.

Invariants:
    - An existing archive is never overwritten, even one created while dumping
    - A failed dump leaves no partial archive at the destination
    - Paths accepted by the exclusion predicate are not archived

How to change safely:
    - Archive layout changes must be mirrored by the load command
    - Keep raising FileExistsError/FileNotFoundError, callers map them to messages
    - Publish with os.link, not os.replace; a link fails on an existing target
"""

from __future__ import annotations

import errno
import logging
import os
import tarfile
import time
from collections.abc import Callable, Iterator
from enum import Enum
from pathlib import Path, PurePath
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

ExcludePredicate = Callable[[PurePath], bool]


class ArchiveFormat(Enum):
    """Supported archive compressions."""

    GZIP = "gzip"
    NONE = "none"

    @property
    def tar_mode(self) -> str:
        return "w:gz" if self is ArchiveFormat.GZIP else "w"


@runtime_checkable
class DumperProtocol(Protocol):
    """Anything that can dump a database directory into an archive."""

    def dump(
        self,
        database_directory: Path,
        transaction_logs_directory: Path,
        archive: Path,
        exclude: ExcludePredicate,
    ) -> None: ...


class Dumper:
    """Writes database archives.

    Attributes:
        archive_format: Compression used for new archives

    Example:
        >>> dumper = Dumper()
        >>> dumper.dump(db_dir, db_dir, Path("/backups/graph.db.dump"), is_store_lock_file)
    """

    def __init__(self, archive_format: ArchiveFormat = ArchiveFormat.GZIP) -> None:
        self.archive_format = archive_format

    def dump(
        self,
        database_directory: Path,
        transaction_logs_directory: Path,
        archive: Path,
        exclude: ExcludePredicate,
    ) -> None:
        """Dump a database into ``archive``.

        Args:
            database_directory: Directory holding the store files
            transaction_logs_directory: Directory holding transaction logs
            archive: Destination archive file
            exclude: Predicate over paths relative to their source directory

        Raises:
            FileExistsError: If ``archive`` already exists
            FileNotFoundError: If the parent directory of ``archive`` is missing
            OSError: On any other I/O failure
        """
        if archive.exists():
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(archive))
        if not archive.parent.is_dir():
            raise FileNotFoundError(str(archive.parent))

        start_time = time.time()
        logger.info(
            "Dumping database",
            extra={"database_directory": str(database_directory), "archive": str(archive)},
        )

        sources = [database_directory]
        if not _is_same_or_child(database_directory, transaction_logs_directory):
            sources.append(transaction_logs_directory)

        tmp_archive = archive.with_name(f".{archive.name}.tmp")
        file_count = 0
        try:
            with tarfile.open(tmp_archive, self.archive_format.tar_mode) as tar:
                for source in sources:
                    for path, relative in _walk(source, exclude):
                        if path == tmp_archive:
                            continue
                        tar.add(path, arcname=relative.as_posix(), recursive=False)
                        if path.is_file():
                            file_count += 1
            try:
                os.link(tmp_archive, archive)
            except FileExistsError as e:
                raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(archive)) from e
        finally:
            tmp_archive.unlink(missing_ok=True)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Dumped {file_count} files to {archive}",
            extra={
                "size_bytes": archive.stat().st_size,
                "duration_ms": duration_ms,
            },
        )


def _walk(root: Path, exclude: ExcludePredicate) -> Iterator[tuple[Path, PurePath]]:
    """Yield (path, path relative to root) for everything under ``root``.

    Excluded directories are pruned together with their contents.
    """
    if not root.is_dir():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(root))

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        kept = []
        for name in sorted(dirnames):
            relative = (current / name).relative_to(root)
            if exclude(relative):
                logger.debug(f"Excluding {relative}")
                continue
            kept.append(name)
            yield current / name, relative
        dirnames[:] = kept

        for name in sorted(filenames):
            relative = (current / name).relative_to(root)
            if exclude(relative):
                logger.debug(f"Excluding {relative}")
                continue
            yield current / name, relative


def _is_same_or_child(parent: Path, candidate: Path) -> bool:
    return candidate == parent or parent in candidate.parents
