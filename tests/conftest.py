"""
Pytest configuration and fixtures for PktCrypt tests
"""

import shutil
import tempfile
from pathlib import Path

import pytest

TARGET_PORT = 5000
CLIENT_PORT = 40000


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def zero_key():
    """16 zero bytes"""
    return bytes(16)


@pytest.fixture
def text_secret():
    """Text secret longer than the 16 bytes actually used"""
    return "correct-horse-battery-staple"


@pytest.fixture
def target_port():
    return TARGET_PORT


@pytest.fixture
def client_port():
    return CLIENT_PORT


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "integration: end-to-end capture rewrite tests")
