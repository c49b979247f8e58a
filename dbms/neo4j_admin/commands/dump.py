"""
Dump command for neo4j-admin.

Dumps one offline database into a single-file archive:

    neo4j-admin dump [--database=<name>] --to=<destination-path>

The command:
1. Parses arguments (usage errors are raised before any I/O)
2. Resolves the database and transaction log directories from neo4j.conf
3. Resolves the archive path (directory targets get <database>.dump)
4. Checks the database exists (its directory holds a neostore file)
5. Takes the store lock on the database directory
6. Hands the directories to the dumper, excluding the store lock file
7. Releases the lock and maps any failure to a CommandFailed message

Invariants:
    - The store lock is held for the whole dump and released on every path
    - The database directory is never created by this command
    - Low-level errors never escape; they become CommandFailed
    - Exception class names are kept in generic I/O failure messages

How to change safely:
    - Operator-facing messages are matched by scripts; change them additively
    - Add failure kinds to translate_failure rather than to execute
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError

from ..archive import Dumper, DumperProtocol
from ..config import DEFAULT_DATABASE_NAME, DatabaseSettings, is_existing_database
from ..errors import (
    CommandFailed,
    IncorrectUsage,
    StoreLockError,
    StoreLockPermissionError,
)
from ..locker import is_store_lock_file, store_lock_checker
from ..usage import NamedArgument

logger = logging.getLogger(__name__)

DUMP_FILE_EXTENSION = ".dump"

DATABASE_IN_USE_MESSAGE = "the database is in use -- stop Neo4j and try again"
NO_PERMISSION_MESSAGE = (
    "you do not have permission to dump the database -- is Neo4j running as a different user?"
)

DATABASE_ARGUMENT = NamedArgument(
    name="database",
    example_value="name",
    description="Name of database.",
    default=DEFAULT_DATABASE_NAME,
)
TO_ARGUMENT = NamedArgument(
    name="to",
    example_value="destination-path",
    description="Destination (file or folder) of database dump.",
)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises IncorrectUsage instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise IncorrectUsage(message)


@dataclass(frozen=True)
class ResolvedPaths:
    """Paths computed once per dump.

    Attributes:
        database_directory: Real path of the database's store directory
        transaction_logs_directory: Directory holding the transaction logs
        archive: Canonical path of the archive to write
    """

    database_directory: Path
    transaction_logs_directory: Path
    archive: Path


def build_archive_path(database: str, to: Path) -> Path:
    """Choose the archive file for ``to``.

    An existing directory gets ``<database>.dump`` inside it; anything else
    is taken literally as the archive file.
    """
    if to.is_dir():
        return to / f"{database}{DUMP_FILE_EXTENSION}"
    return to


def translate_failure(
    error: BaseException,
    database: str | None = None,
    database_directory: Path | None = None,
) -> CommandFailed:
    """Map a lock or I/O failure to the operator-facing CommandFailed.

    Args:
        error: Failure raised while locking or dumping
        database: Requested database name, for "does not exist" messages
        database_directory: Resolved database directory

    Returns:
        CommandFailed carrying ``error`` as its cause
    """
    if isinstance(error, StoreLockPermissionError):
        return CommandFailed(NO_PERMISSION_MESSAGE, error)

    if isinstance(error, StoreLockError):
        return CommandFailed(DATABASE_IN_USE_MESSAGE, error)

    if isinstance(error, FileExistsError):
        return CommandFailed(f"archive already exists: {error.filename or error}", error)

    if (
        isinstance(error, FileNotFoundError)
        and database is not None
        and database_directory is not None
        and _names_path(error, database_directory)
    ):
        return CommandFailed(f"database does not exist: {database}", error)

    return CommandFailed(f"unable to dump database: {type(error).__name__}: {error}", error)


def _names_path(error: OSError, path: Path) -> bool:
    named = error.filename if error.filename is not None else str(error)
    return Path(named).absolute() == path


class DumpCommand:
    """Dumps a database to an archive file.

    Attributes:
        home_dir: Neo4j home directory
        config_dir: Directory containing neo4j.conf
        dumper: Archiving engine

    Example:
        >>> command = DumpCommand(home_dir, config_dir, Dumper())
        >>> command.execute(["--database=graph.db", "--to=/backups"])
    """

    def __init__(
        self,
        home_dir: str | Path,
        config_dir: str | Path,
        dumper: DumperProtocol | None = None,
    ) -> None:
        self.home_dir = Path(home_dir)
        self.config_dir = Path(config_dir)
        self.dumper = dumper if dumper is not None else Dumper()

    def execute(self, args: Sequence[str]) -> None:
        """Run the dump.

        Args:
            args: Raw command arguments

        Raises:
            IncorrectUsage: If arguments are missing or malformed
            CommandFailed: If the dump could not be made
        """
        database, to = self._parse_arguments(args)

        try:
            settings = DatabaseSettings.from_config_dir(self.config_dir)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise CommandFailed(
                f"unable to read configuration: {type(e).__name__}: {e}", e
            ) from e

        database_directory = settings.resolve_database_directory(self.home_dir, database)
        if not is_existing_database(database_directory):
            raise CommandFailed(f"database does not exist: {database}")

        paths = ResolvedPaths(
            database_directory=database_directory,
            transaction_logs_directory=settings.resolve_transaction_logs_directory(
                database_directory
            ),
            archive=build_archive_path(database, Path(to)).resolve(),
        )

        logger.info(
            f"Dumping database {database}",
            extra={
                "database_directory": str(paths.database_directory),
                "transaction_logs_directory": str(paths.transaction_logs_directory),
                "archive": str(paths.archive),
            },
        )

        try:
            self._check_lock_and_dump(paths)
        except (StoreLockError, OSError) as e:
            logger.debug("Dump failed", exc_info=True)
            raise translate_failure(e, database, paths.database_directory) from e

        logger.info(f"Dumped database {database} to {paths.archive}")

    def _check_lock_and_dump(self, paths: ResolvedPaths) -> None:
        with store_lock_checker(paths.database_directory):
            self.dumper.dump(
                paths.database_directory,
                paths.transaction_logs_directory,
                paths.archive,
                is_store_lock_file,
            )

    @staticmethod
    def _parse_arguments(args: Sequence[str]) -> tuple[str, str]:
        parser = _ArgumentParser(prog="dump", add_help=False, allow_abbrev=False)
        parser.add_argument(
            f"--{DATABASE_ARGUMENT.name}",
            dest="database",
            default=DATABASE_ARGUMENT.default,
        )
        parser.add_argument(f"--{TO_ARGUMENT.name}", dest="to")

        parsed = parser.parse_args(list(args))
        if parsed.to is None:
            raise IncorrectUsage(f"Missing argument '{TO_ARGUMENT.name}'")
        return parsed.database, parsed.to


class DumpCommandProvider:
    """Describes the dump command to the command dispatcher."""

    name = "dump"
    summary = "Dump a database into a single-file archive."
    description = (
        "Dump a database into a single-file archive. The archive can be used by the load "
        "command. <destination-path> can be a file or directory (in which case a file "
        "called <database>.dump will be created). It is not possible to dump a database "
        "that is mounted in a running Neo4j server."
    )
    arguments = (DATABASE_ARGUMENT, TO_ARGUMENT)

    def create(
        self,
        home_dir: str | Path,
        config_dir: str | Path,
        dumper: DumperProtocol | None = None,
    ) -> DumpCommand:
        return DumpCommand(home_dir, config_dir, dumper)
