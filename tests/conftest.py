"""
Shared test fixtures for sentry-api-cli tests.
Patches config module to avoid loading a real .env or profile file and
making API calls.
"""

import os
import sys

import pytest

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sentry_api_cli import config  # noqa: E402
from sentry_api_cli.api import ClientCache  # noqa: E402
from sentry_api_cli.config import CliConfig, Profile  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env, profile file or SENTRY_* vars."""
    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "_config", None)
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 30)
    monkeypatch.setattr(config, "HTTP_MAX_RESPONSE_BYTES", 10_000_000)
    monkeypatch.setenv("CLAUDE_PROJECT_ROOT", str(tmp_path))
    for key in ("SENTRY_CLI_CONFIG", "SENTRY_AUTH_TOKEN", "SENTRY_ORG", "SENTRY_BASE_URL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_config():
    """Two profiles; 'default' points at sentry.io, 'selfhosted' elsewhere."""
    return CliConfig(
        profiles={
            "default": Profile(
                name="default",
                base_url="https://sentry.io/api/0",
                auth_token="sntrys_fake_default_token",
                organization="acme",
            ),
            "selfhosted": Profile(
                name="selfhosted",
                base_url="https://sentry.example.com/api/0",
                auth_token="sntrys_fake_selfhosted",
                organization="internal",
            ),
        },
        default_profile="default",
        default_format="json",
        source="test",
    )


@pytest.fixture
def cache(fake_config):
    c = ClientCache(fake_config)
    yield c
    c.clear()
