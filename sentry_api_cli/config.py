"""
sentry-api-cli shared configuration, constants, and module-level state.

Two sources feed the runtime:
  - a ``.env`` file in the project root (HTTP knobs, env-only profile), and
  - a JSON profile file (``.sentry-cli.json``) holding named Sentry profiles.
"""

import json
import os
from dataclasses import dataclass, field

from sentry_api_cli.exceptions import CliError, ConfigError

__all__ = [
    "CliError",
    "ConfigError",
    "CliConfig",
    "Profile",
    "get_config",
    "load_config",
    "reset_config",
    "resolve_profile",
]

# ---------------------------------------------------------------------------
# Project root and .env helpers
# ---------------------------------------------------------------------------


def project_root():
    """Directory the CLI treats as the project (``$CLAUDE_PROJECT_ROOT`` or cwd)."""
    return os.environ.get("CLAUDE_PROJECT_ROOT") or os.getcwd()


ENV_PATH = os.path.join(project_root(), ".env")


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip().strip('"').strip("'")
    return env


def _env_value(key, default=None):
    """Process environment first, then the .env file."""
    if key in os.environ:
        return os.environ[key]
    return env.get(key, default)


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = _env_value(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = _env_value(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.3.1"

DEFAULT_BASE_URL = "https://sentry.io/api/0"
DEFAULT_PROFILE = "default"
DEFAULT_FORMAT = "json"
VALID_FORMATS = ("json", "toon")

CONFIG_FILENAME = ".sentry-cli.json"

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

HTTP_TIMEOUT_SECONDS = _env_int("SENTRY_CLI_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("SENTRY_CLI_HTTP_MAX_RESPONSE_BYTES", 10_000_000)
HTTP_LOG_ENABLED = _env_bool("SENTRY_CLI_HTTP_LOG", False)

# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Profile:
    """Connection options for one Sentry account."""

    name: str
    base_url: str
    auth_token: str
    organization: str


@dataclass(frozen=True)
class CliConfig:
    """Loaded configuration: named profiles plus process-wide defaults."""

    profiles: dict[str, Profile] = field(default_factory=dict)
    default_profile: str = DEFAULT_PROFILE
    default_format: str = DEFAULT_FORMAT
    source: str | None = None


def config_path():
    return os.environ.get("SENTRY_CLI_CONFIG") or os.path.join(project_root(), CONFIG_FILENAME)


def _parse_profile(name, raw, source):
    if not isinstance(raw, dict):
        raise ConfigError(f"ERROR: Profile '{name}' in {source} must be an object.")
    missing = [key for key in ("authToken", "organization") if not raw.get(key)]
    if missing:
        raise ConfigError(
            f"ERROR: Profile '{name}' in {source} is missing: {', '.join(missing)}"
        )
    base_url = str(raw.get("baseUrl") or DEFAULT_BASE_URL).rstrip("/")
    return Profile(
        name=name,
        base_url=base_url,
        auth_token=str(raw["authToken"]),
        organization=str(raw["organization"]),
    )


def _load_profile_file(path):
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"ERROR: Invalid JSON in {path}: {e.msg} at line {e.lineno}"
        ) from None
    except OSError as e:
        raise ConfigError(f"ERROR: Cannot read config file {path}: {e.strerror}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"ERROR: Config file {path} must contain a JSON object.")
    profiles_raw = raw.get("profiles") or {}
    if not isinstance(profiles_raw, dict):
        raise ConfigError(f"ERROR: 'profiles' in {path} must be an object.")

    default_format = raw.get("defaultFormat") or DEFAULT_FORMAT
    if default_format not in VALID_FORMATS:
        raise ConfigError(
            f"ERROR: Invalid defaultFormat '{default_format}' in {path}. "
            f"Use: {', '.join(VALID_FORMATS)}"
        )
    return CliConfig(
        profiles={name: _parse_profile(name, p, path) for name, p in profiles_raw.items()},
        default_profile=raw.get("defaultProfile") or DEFAULT_PROFILE,
        default_format=default_format,
        source=path,
    )


def _load_env_profile():
    """Synthesize a single default profile from SENTRY_* variables, if set."""
    token = _env_value("SENTRY_AUTH_TOKEN")
    org = _env_value("SENTRY_ORG")
    if not token or not org:
        return CliConfig()
    profile = Profile(
        name=DEFAULT_PROFILE,
        base_url=(_env_value("SENTRY_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        auth_token=token,
        organization=org,
    )
    return CliConfig(profiles={DEFAULT_PROFILE: profile}, source="environment")


def load_config(path=None):
    """Read the profile file, falling back to SENTRY_* environment variables."""
    path = path or config_path()
    if os.path.exists(path):
        return _load_profile_file(path)
    return _load_env_profile()


# ---------------------------------------------------------------------------
# Runtime cache (loaded once per process)
# ---------------------------------------------------------------------------

_config = None


def get_config():
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config():
    global _config
    _config = None


def resolve_profile(name, cfg=None):
    """Return the Profile called *name*. Raises ConfigError when it is unknown."""
    cfg = cfg or get_config()
    profile = cfg.profiles.get(name)
    if profile is not None:
        return profile
    if not cfg.profiles:
        raise ConfigError(
            "ERROR: No Sentry profiles configured.\n"
            f"  Create {config_path()} or set SENTRY_AUTH_TOKEN and SENTRY_ORG."
        )
    available = ", ".join(sorted(cfg.profiles))
    raise ConfigError(f"ERROR: Profile '{name}' not found. Available: {available}")
