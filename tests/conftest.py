"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from tezsync.core import config as config_module
from tests.fixtures.tzkt_samples import ADDRESS, make_transaction


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def address() -> str:
    """The address of the account under test."""
    return ADDRESS


@pytest.fixture
def account_id() -> str:
    return f"tezos:{ADDRESS}"


@pytest.fixture
def sample_transfer_out() -> dict:
    """Applied transfer of 100 mutez from the account, 1 mutez baker fee."""
    return make_transaction(sender=ADDRESS, target="tz1Bob", amount=100, baker_fee=1)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests never read or write a real data directory
    monkeypatch.setenv("TEZSYNC_ENV", "test")
    monkeypatch.setenv("TEZSYNC_DATA_DIR", str(tmp_path / "tezsync_data"))
    monkeypatch.setenv("TZKT_API_URL", "https://tzkt.invalid")
    monkeypatch.delenv("TZKT_PAGE_SIZE", raising=False)
    monkeypatch.delenv("TZKT_TIMEOUT", raising=False)
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for amount handling and precision")
    config.addinivalue_line("markers", "classifier: Tests for raw operation classification")
    config.addinivalue_line("markers", "merge: Tests for the operation merger")
    config.addinivalue_line("markers", "reconcile: Tests for sub-account reconciliation")
    config.addinivalue_line("markers", "pagination: Tests for cursor pagination")
