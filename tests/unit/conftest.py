import pytest

from radixring.config import default_config
from radixring.const import ENV_GROWTH_FACTOR
from tests.unit.pitfalls import TrackingMemoryManager


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep the cached process-wide config independent between tests."""
    monkeypatch.delenv(ENV_GROWTH_FACTOR, raising=False)
    default_config.cache_clear()
    yield
    default_config.cache_clear()


@pytest.fixture
def tracker():
    """Memory manager that verifies element lifetimes."""
    return TrackingMemoryManager()
