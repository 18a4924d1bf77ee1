"""
Configuration for the Exercise MCP Server
Supports local development, testing, and serverless deployment
Environment-aware configuration based on APP_ENV
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Literal
from urllib.parse import urlsplit

from dotenv import load_dotenv

# Environment modes
EnvironmentMode = Literal["development", "test", "production"]

DEFAULT_MONGODB_URI = "mongodb://localhost:27017/main_store"
DEFAULT_DATABASE_NAME = "main_store"
DEFAULT_ALLOWED_ORIGINS = ("https://claude.ai",)


def load_app_environment(mode: Optional[str] = None) -> str:
    """
    Load environment variables from the appropriate .env file.

    Priority:
    1. Explicit 'mode' argument
    2. APP_ENV environment variable
    3. Default to 'development'

    Loads .env.{mode} if it exists. Variables already present in the
    process environment always win over the file.
    """
    if not mode:
        mode = os.getenv('APP_ENV', 'development')

    env_file = Path(__file__).parent / f'.env.{mode}'
    if env_file.exists():
        load_dotenv(env_file, override=False)

    return mode


class ServerProfile(str, Enum):
    """
    Deployment profiles served by the same dispatcher.

    PUBLIC exposes the read-only exercise catalog without credentials.
    AUTHENTICATED requires a bearer token on every POST/GET and adds the
    user-scoped and write tools.
    """
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"

    @property
    def auth_required(self) -> bool:
        return self is ServerProfile.AUTHENTICATED


def _database_from_uri(uri: str) -> Optional[str]:
    path = urlsplit(uri).path.lstrip('/')
    return path or None


@dataclass
class DatabaseConfig:
    """MongoDB connection configuration"""

    uri: str = DEFAULT_MONGODB_URI
    database: str = DEFAULT_DATABASE_NAME
    server_selection_timeout_ms: int = 5000
    app_name: str = "exercise-mcp-server"

    @classmethod
    def from_environment(cls, mode: Optional[EnvironmentMode] = None) -> 'DatabaseConfig':
        """
        Load configuration from environment variables

        Environment variables:
        - MONGODB_URI: Connection string (default: mongodb://localhost:27017/main_store)
        - MONGODB_DATABASE: Database name (default: taken from the URI path, else main_store)
        - MONGODB_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout (default: 5000)
        """
        load_app_environment(mode)

        uri = os.getenv('MONGODB_URI') or DEFAULT_MONGODB_URI
        database = (
            os.getenv('MONGODB_DATABASE')
            or _database_from_uri(uri)
            or DEFAULT_DATABASE_NAME
        )
        return cls(
            uri=uri,
            database=database,
            server_selection_timeout_ms=int(os.getenv('MONGODB_SERVER_SELECTION_TIMEOUT_MS', '5000')),
        )

    @classmethod
    def for_local_development(cls) -> 'DatabaseConfig':
        """Configuration for a local MongoDB instance"""
        return cls(uri=DEFAULT_MONGODB_URI, database=DEFAULT_DATABASE_NAME)

    @classmethod
    def for_testing(cls) -> 'DatabaseConfig':
        """Configuration for the test database"""
        return cls(uri="mongodb://localhost:27017/main_store_test", database="main_store_test")


@dataclass
class ServerConfig:
    """MCP server configuration shared by the HTTP, serverless and stdio transports"""

    profile: ServerProfile = ServerProfile.AUTHENTICATED
    allowed_origins: tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    server_name: str = "ms-exercise-mcp"
    host: str = "127.0.0.1"
    port: int = 3001
    database: DatabaseConfig = field(default_factory=DatabaseConfig)

    @property
    def auth_required(self) -> bool:
        return self.profile.auth_required

    @classmethod
    def from_environment(cls, mode: Optional[EnvironmentMode] = None) -> 'ServerConfig':
        """
        Load configuration from environment variables

        Environment variables:
        - APP_ENV: Environment mode (development, test, production)
        - MCP_PROFILE: authenticated (default) or public
        - MCP_ALLOWED_ORIGINS: Comma separated browser origins allowed besides localhost
        - MCP_SERVER_NAME: Name reported by initialize
        - MCP_HOST / MCP_PORT: Bind address for the HTTP transport
        """
        load_app_environment(mode)

        origins = os.getenv('MCP_ALLOWED_ORIGINS')
        if origins is not None:
            allowed = tuple(o.strip() for o in origins.split(',') if o.strip())
        else:
            allowed = DEFAULT_ALLOWED_ORIGINS

        return cls(
            profile=parse_profile(os.getenv('MCP_PROFILE', ServerProfile.AUTHENTICATED.value)),
            allowed_origins=allowed,
            server_name=os.getenv('MCP_SERVER_NAME', 'ms-exercise-mcp'),
            host=os.getenv('MCP_HOST', '127.0.0.1'),
            port=int(os.getenv('MCP_PORT', '3001')),
            database=DatabaseConfig.from_environment(mode),
        )


def parse_profile(value: str) -> ServerProfile:
    """Parse a profile name, rejecting unknown values"""
    try:
        return ServerProfile(value.strip().lower())
    except ValueError:
        valid = ", ".join(p.value for p in ServerProfile)
        raise ValueError(f"Unknown MCP profile '{value}'. Valid profiles: {valid}")


# Utility functions
def get_environment_mode() -> EnvironmentMode:
    """Get current environment mode from APP_ENV variable"""
    mode = os.getenv('APP_ENV', 'development').lower()
    if mode not in ('development', 'test', 'production'):
        mode = 'development'
    return mode  # type: ignore

