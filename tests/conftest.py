"""Shared pytest fixtures for rev-models tests."""

from __future__ import annotations

import pytest

from rev_api_client.config import get_api_config
from rev_models.backends.inmemory import InMemoryBackend
from rev_models.config import get_config
from rev_models.models.manager import ModelManager


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Configuration is cached per process; tests that patch the environment need a fresh read."""
    get_config.cache_clear()
    get_api_config.cache_clear()
    yield
    get_config.cache_clear()
    get_api_config.cache_clear()


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def manager(backend: InMemoryBackend) -> ModelManager:
    """Manager with an in-memory backend bound as 'default' and no models registered."""
    manager = ModelManager()
    manager.register_backend("default", backend)
    return manager
