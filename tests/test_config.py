"""Tests for persondb.config."""

from __future__ import annotations

import pytest

from persondb.config import DATABASE_ENV_VAR, ProviderConfig, resolve_database_filename
from persondb.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _no_env(monkeypatch):
    monkeypatch.delenv(DATABASE_ENV_VAR, raising=False)


class TestResolveDatabaseFilename:
    def test_explicit_setting(self):
        config = ProviderConfig(database_filename="/tmp/db.json")
        assert resolve_database_filename(config) == "/tmp/db.json"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv(DATABASE_ENV_VAR, "/env/db.json")
        assert resolve_database_filename(ProviderConfig()) == "/env/db.json"

    def test_env_fallback_without_config(self, monkeypatch):
        monkeypatch.setenv(DATABASE_ENV_VAR, "/env/db.json")
        assert resolve_database_filename() == "/env/db.json"

    def test_explicit_setting_wins(self, monkeypatch):
        monkeypatch.setenv(DATABASE_ENV_VAR, "/env/db.json")
        config = ProviderConfig(database_filename="/tmp/db.json")
        assert resolve_database_filename(config) == "/tmp/db.json"

    def test_missing_raises(self):
        with pytest.raises(ConfigurationError, match=DATABASE_ENV_VAR):
            resolve_database_filename(ProviderConfig())

    def test_empty_env_raises(self, monkeypatch):
        monkeypatch.setenv(DATABASE_ENV_VAR, "")
        with pytest.raises(ConfigurationError):
            resolve_database_filename()

    def test_explicit_empty_is_not_replaced(self, monkeypatch):
        monkeypatch.setenv(DATABASE_ENV_VAR, "/env/db.json")
        with pytest.raises(ConfigurationError):
            resolve_database_filename(ProviderConfig(database_filename=""))


class TestProviderConfig:
    def test_unknown_setting_rejected(self):
        with pytest.raises(ValueError, match="database_file"):
            ProviderConfig(database_file="/tmp/db.json")
