"""
Pytest configuration and shared fixtures for Exercise MCP Server tests

APPROACH: Replace the document store with in-memory fakes
- Handlers and the dispatcher run unchanged against FakeRepositoryContainer
- Bearer tokens are minted with PyJWT in tests/fakes.py (signature is never verified)
- No MongoDB instance is needed
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import DatabaseConfig, ServerConfig, ServerProfile
from server import McpDispatcher
from transport.endpoints import McpEndpoints
from tests.fakes import FakeRepositoryContainer, bearer, sample_exercise, sample_profile


@pytest.fixture
def repos():
    return FakeRepositoryContainer(
        exercises=[
            sample_exercise("Push Up", categories=["strength"], difficulty="easy", duration=30),
            sample_exercise("Plank", categories=["core"], difficulty="medium", duration=60),
        ],
        profiles=[sample_profile("user-1")],
    )


@pytest.fixture
def authenticated_config():
    return ServerConfig(
        profile=ServerProfile.AUTHENTICATED,
        allowed_origins=("https://claude.ai",),
        database=DatabaseConfig.for_testing(),
    )


@pytest.fixture
def public_config():
    return ServerConfig(
        profile=ServerProfile.PUBLIC,
        allowed_origins=("https://claude.ai",),
        database=DatabaseConfig.for_testing(),
    )


@pytest.fixture
def dispatcher(repos, authenticated_config):
    return McpDispatcher(repos, authenticated_config)


@pytest.fixture
def public_dispatcher(repos, public_config):
    return McpDispatcher(repos, public_config)


@pytest.fixture
def endpoints(dispatcher, authenticated_config):
    return McpEndpoints(dispatcher, authenticated_config)


@pytest.fixture
def public_endpoints(public_dispatcher, public_config):
    return McpEndpoints(public_dispatcher, public_config)


@pytest.fixture
def auth_headers():
    return {
        "Authorization": bearer({"sub": "user-1"}),
        "Accept": "application/json, text/event-stream",
        "Content-Type": "application/json",
    }
