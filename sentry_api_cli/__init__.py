"""sentry-api-cli — CLI tool for querying and triaging Sentry issues and events."""

from sentry_api_cli.api import ClientCache
from sentry_api_cli.client import SentryClient
from sentry_api_cli.commands import run_command
from sentry_api_cli.config import VERSION, CliConfig, Profile
from sentry_api_cli.exceptions import ApiError, CliError, ConfigError, ValidationError
from sentry_api_cli.models import ApiResult, CommandArgs

__all__ = [
    "VERSION",
    "SentryClient",
    "ClientCache",
    "ApiResult",
    "CommandArgs",
    "CliConfig",
    "Profile",
    "CliError",
    "ConfigError",
    "ValidationError",
    "ApiError",
    "run_command",
]
