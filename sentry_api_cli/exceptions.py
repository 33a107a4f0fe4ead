"""
sentry-api-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class CliError(Exception):
    """Exit code 1 — validation, unknown command, API and parse errors."""

    exit_code = 1


class ValidationError(CliError):
    """A command argument is missing or malformed. Raised before any request."""


class UnknownCommandError(CliError):
    """The command name is not one of the registered commands."""

    def __init__(self, command):
        super().__init__(f"Unknown command: {command}")
        self.command = command


class ConfigError(CliError):
    """Exit code 2 — profile not found, config file unreadable or malformed."""

    exit_code = 2


class ApiError(CliError):
    """Transport failure or non-2xx response from the Sentry API."""

    def __init__(self, message, status=None, detail=None):
        super().__init__(message)
        self.status = status
        self.detail = detail


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        super().__init__(f"HTTP {code}: {reason}")
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
