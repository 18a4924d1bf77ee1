"""
Configuration Tests
Environment variable parsing for database and server settings.
"""

import pytest

from config import (
    DEFAULT_MONGODB_URI, DatabaseConfig, ServerConfig, ServerProfile, parse_profile,
)

ENV_VARS = (
    "MONGODB_URI", "MONGODB_DATABASE", "MONGODB_SERVER_SELECTION_TIMEOUT_MS",
    "MCP_PROFILE", "MCP_ALLOWED_ORIGINS", "MCP_SERVER_NAME", "MCP_HOST", "MCP_PORT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDatabaseConfig:

    def test_defaults(self):
        config = DatabaseConfig.from_environment()
        assert config.uri == DEFAULT_MONGODB_URI
        assert config.database == "main_store"
        assert config.server_selection_timeout_ms == 5000

    def test_database_from_uri_path(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://db.internal:27017/fitness?retryWrites=true")
        assert DatabaseConfig.from_environment().database == "fitness"

    def test_uri_without_database(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb+srv://cluster.example.net/?retryWrites=true")
        assert DatabaseConfig.from_environment().database == "main_store"

    def test_explicit_database_wins(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/fitness")
        monkeypatch.setenv("MONGODB_DATABASE", "other")
        monkeypatch.setenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "1500")
        config = DatabaseConfig.from_environment()
        assert config.database == "other"
        assert config.server_selection_timeout_ms == 1500


class TestServerConfig:

    def test_defaults(self):
        config = ServerConfig.from_environment()
        assert config.profile is ServerProfile.AUTHENTICATED
        assert config.auth_required is True
        assert config.allowed_origins == ("https://claude.ai",)
        assert config.server_name == "ms-exercise-mcp"
        assert (config.host, config.port) == ("127.0.0.1", 3001)

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("MCP_PROFILE", "Public")
        monkeypatch.setenv("MCP_ALLOWED_ORIGINS", "https://a.example, https://b.example,")
        monkeypatch.setenv("MCP_PORT", "8080")
        config = ServerConfig.from_environment()
        assert config.profile is ServerProfile.PUBLIC
        assert config.auth_required is False
        assert config.allowed_origins == ("https://a.example", "https://b.example")
        assert config.port == 8080

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Valid profiles: public, authenticated"):
            parse_profile("admin")
