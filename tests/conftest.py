"""
Pytest configuration for native driver tests
"""

import sys
from pathlib import Path

import pytest

# Ensure the parent directory is in the Python path for imports
parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import utils.env as env_config  # noqa: E402

# Ensure tests operate with runtime environment rather than .env overrides during imports
env_config.reload_env({"NATIVE_DRIVER_FORCE_ENV_OVERRIDE": "false"})


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "integration: runs a real native driver process")


@pytest.fixture(autouse=True)
def disable_force_env_override(monkeypatch):
    """Default tests to runtime environment visibility unless they explicitly opt in."""

    monkeypatch.setenv("NATIVE_DRIVER_FORCE_ENV_OVERRIDE", "false")
    env_config.reload_env({"NATIVE_DRIVER_FORCE_ENV_OVERRIDE": "false"})
    for var in ("NATIVE_DRIVER_BIN", "NATIVE_DRIVER_ENCODING", "NATIVE_DRIVER_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)

    yield

    env_config.reload_env({"NATIVE_DRIVER_FORCE_ENV_OVERRIDE": "false"})
