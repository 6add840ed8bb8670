import pytest

from txvault.main import app

MASTER_KEY_HEX = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
OTHER_KEY_HEX = "f" * 64


@pytest.fixture
def master_key_hex():
    return MASTER_KEY_HEX


@pytest.fixture
def other_key_hex():
    return OTHER_KEY_HEX


@pytest.fixture(autouse=True)
def clear_overrides():
    """Automatically clear FastAPI dependency overrides before each test."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}

