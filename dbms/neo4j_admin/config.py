"""
Configuration for neo4j-admin.

Two sources are consulted:
- Environment variables (NEO4J_HOME, NEO4J_CONF, NEO4J_DEBUG) supplied by
  the hosting shell, loaded with pydantic-settings
- The server configuration file ``<conf>/neo4j.conf``, a Java-properties
  style ``key=value`` file, of which only directory settings are used

Invariants:
    - A missing neo4j.conf is equivalent to an empty one
    - Unknown settings in neo4j.conf are ignored
    - The database directory is symlink-resolved exactly once, here

How to change safely:
    - New settings must default to the server's own default
    - Keep both the dotted server name and the short alias for each setting
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "graph.db"
DEFAULT_CONFIG_FILE_NAME = "neo4j.conf"
STORE_FILE_NAME = "neostore"


def is_existing_database(directory: str | Path) -> bool:
    """Return True if ``directory`` holds a database store (its neostore file)."""
    return (Path(directory) / STORE_FILE_NAME).is_file()


def load_config_file(path: str | Path) -> dict[str, str]:
    """Parse a neo4j.conf file into a mapping of setting name to value.

    Args:
        path: Path to the configuration file

    Returns:
        Settings in file order, later duplicates overriding earlier ones.
        Empty if the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("No configuration file", extra={"config_file": str(path)})
        return {}

    settings: dict[str, str] = {}
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if not sep:
                logger.warning(f"Ignoring malformed line in {path}: {line}")
                continue
            settings[key.strip()] = value.strip()

    return settings


class DatabaseSettings(BaseModel):
    """Directory settings read from neo4j.conf.

    Attributes:
        data_directory: Root of per-database directories (default <home>/data)
        logical_logs_location: Transaction log directory (default the database directory)
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    data_directory: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("dbms.directories.data", "data_directory"),
    )
    logical_logs_location: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("dbms.directories.tx_log", "logical_logs_location"),
    )

    @field_validator("data_directory", "logical_logs_location", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_config_dir(cls, config_dir: str | Path) -> DatabaseSettings:
        """Load settings from ``<config_dir>/neo4j.conf``."""
        return cls.model_validate(load_config_file(Path(config_dir) / DEFAULT_CONFIG_FILE_NAME))

    def resolve_data_directory(self, home_dir: str | Path) -> Path:
        """Data directory, relative settings resolved against ``home_dir``."""
        home_dir = Path(home_dir).absolute()
        if self.data_directory is None:
            return home_dir / "data"
        return home_dir / self.data_directory

    def resolve_database_directory(self, home_dir: str | Path, database: str) -> Path:
        """Real path of the directory holding ``database``'s store files."""
        return (self.resolve_data_directory(home_dir) / "databases" / database).resolve()

    def resolve_transaction_logs_directory(self, database_directory: Path) -> Path:
        """Transaction log directory, relative settings resolved against the database directory."""
        if self.logical_logs_location is None:
            return database_directory
        return database_directory / self.logical_logs_location


class AdminEnvironment(BaseSettings):
    """Environment supplied to neo4j-admin by the hosting shell.

    Attributes:
        home: Neo4j home directory (NEO4J_HOME, default: working directory)
        conf: Directory containing neo4j.conf (NEO4J_CONF, default: <home>/conf)
        debug: Set to anything to enable debug output (NEO4J_DEBUG)
    """

    home: Path = Field(default_factory=Path.cwd)
    conf: Path | None = None
    debug: str | None = None

    model_config = SettingsConfigDict(env_prefix="NEO4J_")

    @property
    def config_dir(self) -> Path:
        return self.conf if self.conf is not None else self.home / "conf"

    @property
    def debug_enabled(self) -> bool:
        return self.debug is not None
