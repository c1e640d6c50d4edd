"""
Pytest configuration and fixtures for registry service tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from skitsystem.app import create_app
from skitsystem.entity_registry import EntityRegistry
from shared.pubsub import EventPublisher


@pytest.fixture
def registry():
    """Strict registry with no event publishing."""
    return EntityRegistry()


@pytest.fixture
def permissive_registry():
    """Registry that substitutes placeholders for unknown player ids."""
    return EntityRegistry(strict_game_players=False)


@pytest.fixture
def app(registry):
    """Create application for testing."""
    app = create_app('testing', registry=registry)
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def permissive_client(permissive_registry):
    """Test client backed by a permissive registry."""
    return create_app('testing', registry=permissive_registry).test_client()


@pytest.fixture
def sample_players(registry):
    """Create sample players and return their ids."""
    return [registry.create_player(name) for name in ('Alice', 'Bob', 'Carol', 'Dave')]


@pytest.fixture
def mock_redis(mocker):
    """Mock Redis client."""
    return mocker.MagicMock()


@pytest.fixture
def publisher(mock_redis):
    """Event publisher writing to the mocked Redis client."""
    return EventPublisher(mock_redis, channel='test:events', log_size=10)
