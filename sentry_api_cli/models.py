"""
Typed models for command payloads and operation results.
"""

from dataclasses import dataclass, field
from typing import Any

from sentry_api_cli.config import VALID_FORMATS
from sentry_api_cli.exceptions import ValidationError

# Keys consumed by the CLI itself; never forwarded to the Sentry API.
CLI_ONLY_KEYS = frozenset({"profile", "format", "projectSlug", "issueId", "eventId", "tagKey"})


def strip_cli_params(params):
    """Return a copy of *params* without CLI-only keys."""
    return {k: v for k, v in params.items() if k not in CLI_ONLY_KEYS}


@dataclass(frozen=True)
class ObjectPayload:
    """Typed wrapper for raw JSON object payloads."""

    data: dict

    @classmethod
    def from_value(cls, value, context):
        if value is None:
            return cls(data={})
        if isinstance(value, dict):
            return cls(data=value)
        raise ValidationError(
            f"ERROR: Invalid JSON in {context}: expected object, got {type(value).__name__}."
        )


@dataclass(frozen=True)
class ApiResult:
    """Uniform success/error envelope returned by every SentryClient operation.

    Build instances with ``ok()`` or ``fail()`` so only one branch is populated.
    """

    success: bool
    data: Any = None
    rendered: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data, rendered):
        return cls(success=True, data=data, rendered=rendered)

    @classmethod
    def fail(cls, error):
        return cls(success=False, error=error)


def _is_missing(value):
    """None, false, 0 and blank strings all count as absent."""
    if isinstance(value, str):
        return not value.strip()
    return not value


def _missing_message(missing):
    if len(missing) == 1:
        return f'ERROR: "{missing[0]}" parameter is required'
    quoted = [f'"{name}"' for name in missing]
    return f"ERROR: {', '.join(quoted[:-1])} and {quoted[-1]} parameters are required"


@dataclass(frozen=True)
class CommandArgs:
    """Validated input for one command: path identifiers plus forwarded params."""

    profile: str
    format: str
    project_slug: str | None = None
    issue_id: str | None = None
    event_id: str | None = None
    tag_key: str | None = None
    params: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload, *, required=(), default_profile, default_format):
        """Validate a parsed JSON argument bag.

        Raises ValidationError naming the missing required field(s) or an
        unsupported format.
        """
        missing = [name for name in required if _is_missing(payload.get(name))]
        if missing:
            raise ValidationError(_missing_message(missing))

        fmt = payload.get("format") or default_format
        if fmt not in VALID_FORMATS:
            raise ValidationError(f"ERROR: Invalid format '{fmt}'. Use: {', '.join(VALID_FORMATS)}")

        def _ident(key):
            value = payload.get(key)
            return None if value is None else str(value)

        return cls(
            profile=str(payload.get("profile") or default_profile),
            format=fmt,
            project_slug=_ident("projectSlug"),
            issue_id=_ident("issueId"),
            event_id=_ident("eventId"),
            tag_key=_ident("tagKey"),
            params=strip_cli_params(payload),
        )
