"""
Shared test fixtures for the auth service startup gate.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from auth_scaffold.config import get_settings  # noqa: E402
from auth_scaffold.env import InMemoryEnvironment  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached process-wide; every test starts and ends uncached."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""
    yield
    app_logger = logging.getLogger("auth_scaffold")
    app_logger.handlers.clear()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def cert_file(tmp_path):
    """A readable file standing in for the database root certificate."""
    path = tmp_path / "root.crt"
    path.write_text("-----BEGIN CERTIFICATE-----\ntest\n-----END CERTIFICATE-----\n")
    return path


@pytest.fixture
def valid_vars(cert_file):
    """A complete, correctly typed set of required variables."""
    return {
        "APP_DB_NAME": "mydb",
        "APP_DB_HOST": "localhost",
        "APP_DB_PORT": "5432",
        "APP_DB_USER": "u",
        "APP_DB_PASS": "p",
        "APP_DB_SSL_MODE": "require",
        "APP_PATH_TO_DB_SSL_ROOT_CERT": str(cert_file),
    }


@pytest.fixture
def write_env(tmp_path):
    """Write a dotenv file from a mapping (or raw text) and return its path."""

    def _write(content, name=".env"):
        path = tmp_path / name
        if isinstance(content, dict):
            content = "".join(f"{key}={value}\n" for key, value in content.items())
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def store():
    """Isolated environment store."""
    return InMemoryEnvironment()
