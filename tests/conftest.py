"""
Pytest configuration and fixtures for ldapguard tests.
"""

import pytest
from unittest.mock import MagicMock

from ldapguard.auth.config import DomainConfiguration
from ldapguard.connections.interfaces import ConnectionInterface
from ldapguard.events import Dispatcher
from ldapguard.utils.config import Config, reset_config


@pytest.fixture
def test_config():
    """Create a test configuration."""
    return Config(
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture(autouse=True)
def reset_global_config():
    """Reset global configuration after each test."""
    yield
    reset_config()


@pytest.fixture
def mock_connection():
    """Create a mock directory connection that accepts every bind."""
    mock = MagicMock(spec=ConnectionInterface)
    mock.bind.return_value = True
    return mock


@pytest.fixture
def admin_configuration():
    """Domain configuration with administrator credentials."""
    return DomainConfiguration(
        hosts=["dc01.local.com"],
        base_dn="dc=local,dc=com",
        username="cn=admin,dc=local,dc=com",
        password="admin-secret",
    )


@pytest.fixture
def dispatcher():
    """Create an empty event dispatcher."""
    return Dispatcher()
