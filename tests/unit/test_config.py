"""
Unit tests for neo4j-admin configuration.

Tests cover:
- neo4j.conf parsing
- Directory setting resolution
- Environment loading
- Database existence
"""

from pathlib import Path

import pytest

from dbms.neo4j_admin.config import (
    DEFAULT_CONFIG_FILE_NAME,
    STORE_FILE_NAME,
    AdminEnvironment,
    DatabaseSettings,
    is_existing_database,
    load_config_file,
)


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_missing_file_is_empty(self, tmp_path):
        assert load_config_file(tmp_path / "nope.conf") == {}

    def test_parses_properties(self, tmp_path):
        """Comments and blank lines are skipped; whitespace is stripped."""
        conf = tmp_path / DEFAULT_CONFIG_FILE_NAME
        conf.write_text(
            "# a comment\n"
            "\n"
            "dbms.directories.data=/var/lib/neo4j/data\n"
            "  dbms.memory.heap.max_size = 1G  \n"
            "dbms.connector.bolt.listen_address=:7687\n"
        )

        assert load_config_file(conf) == {
            "dbms.directories.data": "/var/lib/neo4j/data",
            "dbms.memory.heap.max_size": "1G",
            "dbms.connector.bolt.listen_address": ":7687",
        }

    def test_last_duplicate_wins(self, tmp_path):
        conf = tmp_path / DEFAULT_CONFIG_FILE_NAME
        conf.write_text("data_directory=/a\ndata_directory=/b\n")

        assert load_config_file(conf) == {"data_directory": "/b"}

    def test_values_may_contain_equals(self, tmp_path):
        conf = tmp_path / DEFAULT_CONFIG_FILE_NAME
        conf.write_text("dbms.jvm.additional=-Dfoo=bar\nnot a setting\n")

        assert load_config_file(conf) == {"dbms.jvm.additional": "-Dfoo=bar"}


class TestDatabaseSettings:
    """Tests for DatabaseSettings path resolution."""

    @pytest.fixture
    def home(self, tmp_path):
        path = tmp_path.resolve() / "home"
        path.mkdir()
        return path

    def test_defaults(self, home):
        """Without settings, data lives under <home>/data."""
        settings = DatabaseSettings()
        database_dir = settings.resolve_database_directory(home, "foo.db")

        assert settings.resolve_data_directory(home) == home / "data"
        assert database_dir == home / "data" / "databases" / "foo.db"
        assert settings.resolve_transaction_logs_directory(database_dir) == database_dir

    def test_dotted_and_short_names(self):
        dotted = DatabaseSettings.model_validate(
            {"dbms.directories.data": "/x", "dbms.directories.tx_log": "/y"}
        )
        short = DatabaseSettings.model_validate(
            {"data_directory": "/x", "logical_logs_location": "/y"}
        )

        assert dotted == short
        assert dotted.data_directory == Path("/x")
        assert dotted.logical_logs_location == Path("/y")

    def test_unknown_settings_are_ignored(self):
        settings = DatabaseSettings.model_validate({"dbms.memory.heap.max_size": "1G"})

        assert settings.data_directory is None

    def test_blank_values_are_unset(self):
        settings = DatabaseSettings.model_validate({"dbms.directories.data": "  "})

        assert settings.data_directory is None

    def test_relative_data_directory_resolves_against_home(self, home):
        settings = DatabaseSettings.model_validate({"dbms.directories.data": "elsewhere"})

        assert settings.resolve_data_directory(home) == home / "elsewhere"

    def test_relative_tx_log_resolves_against_database_directory(self, home):
        settings = DatabaseSettings.model_validate({"dbms.directories.tx_log": "logs"})
        database_dir = home / "data" / "databases" / "foo.db"

        assert settings.resolve_transaction_logs_directory(database_dir) == database_dir / "logs"

    def test_from_config_dir(self, tmp_path):
        (tmp_path / DEFAULT_CONFIG_FILE_NAME).write_text("dbms.directories.data=/srv/neo4j\n")

        settings = DatabaseSettings.from_config_dir(tmp_path)

        assert settings.data_directory == Path("/srv/neo4j")
        assert settings.logical_logs_location is None

    def test_database_directory_follows_symlinks(self, home, tmp_path):
        real = tmp_path.resolve() / "real" / "foo.db"
        real.mkdir(parents=True)
        (home / "data" / "databases").mkdir(parents=True)
        (home / "data" / "databases" / "foo.db").symlink_to(real)

        assert DatabaseSettings().resolve_database_directory(home, "foo.db") == real


class TestAdminEnvironment:
    """Tests for AdminEnvironment."""

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("NEO4J_HOME", str(tmp_path))
        monkeypatch.setenv("NEO4J_CONF", str(tmp_path / "etc"))
        monkeypatch.setenv("NEO4J_DEBUG", "yes")

        env = AdminEnvironment()

        assert env.home == tmp_path
        assert env.config_dir == tmp_path / "etc"
        assert env.debug_enabled

    def test_conf_defaults_to_home_conf(self, monkeypatch, tmp_path):
        monkeypatch.setenv("NEO4J_HOME", str(tmp_path))
        monkeypatch.delenv("NEO4J_CONF", raising=False)
        monkeypatch.delenv("NEO4J_DEBUG", raising=False)

        env = AdminEnvironment()

        assert env.config_dir == tmp_path / "conf"
        assert not env.debug_enabled


class TestIsExistingDatabase:
    """Tests for is_existing_database()."""

    def test_directory_with_store_file(self, tmp_path):
        (tmp_path / STORE_FILE_NAME).write_bytes(b"store")

        assert is_existing_database(tmp_path)

    def test_empty_directory(self, tmp_path):
        assert not is_existing_database(tmp_path)

    def test_missing_directory(self, tmp_path):
        assert not is_existing_database(tmp_path / "nope.db")

    def test_store_name_must_be_a_file(self, tmp_path):
        (tmp_path / STORE_FILE_NAME).mkdir()

        assert not is_existing_database(tmp_path)
