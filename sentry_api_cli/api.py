"""
HTTP request layer, client handles, and the per-profile handle cache.
"""

import json
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from sentry_api_cli import config
from sentry_api_cli.exceptions import ApiError, CliError, HTTPError

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _safe_json_parse(text, context="input"):
    """Parse JSON with friendly error message on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CliError(f"ERROR: Invalid JSON in {context}: {e.msg} at position {e.pos}") from None


def _error_detail(body):
    """Return the server-provided ``detail`` message from an error body, if any."""
    if not body:
        return None
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(parsed, dict):
        return None
    detail = parsed.get("detail")
    if detail is None or detail == "":
        return None
    return detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------

_SENSITIVE_QUERY_KEYS = {"token", "auth_token", "access_token"}


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = [
        (key, "***") if key.lower() in _SENSITIVE_QUERY_KEYS else (key, value)
        for key, value in pairs
    ]
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _query_value(value):
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _encode_query(params):
    """Encode query params. Lists repeat the key; None values are dropped."""
    pairs = []
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(v)) for v in value if v is not None)
        else:
            pairs.append((key, _query_value(value)))
    return urllib.parse.urlencode(pairs)


def _http_request(url, data=None, headers=None, method="GET"):
    """Make one HTTP request. Returns parsed JSON (None for an empty body).
    Raises HTTPError for non-2xx responses and ApiError for transport failures.
    There is no retry: a failed call surfaces immediately."""
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = (headers or {}).get("X-Request-Id")
    safe_url = _sanitize_url_for_log(url)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    start = time.perf_counter()
    _log_http_event(
        phase="request",
        method=method,
        url=safe_url,
        request_id=request_id,
        timeout_seconds=timeout,
    )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=getattr(resp, "status", 200),
                content_type=content_type,
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        _log_http_event(
            phase="response",
            method=method,
            url=safe_url,
            status=e.code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
            request_id=request_id,
        )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        _log_http_event(
            phase="network_error",
            method=method,
            url=safe_url,
            error="timeout",
            request_id=request_id,
        )
        raise ApiError(f"Request timed out after {timeout} seconds.") from e
    except urllib.error.URLError as e:
        _log_http_event(
            phase="network_error",
            method=method,
            url=safe_url,
            error=f"url_error: {e.reason}",
            request_id=request_id,
        )
        raise ApiError(f"Connection failed: {e.reason}") from e

    if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
        raise ApiError(
            f"Response too large from Sentry API (>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
        )
    if not raw.strip():
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        if content_type and "json" not in content_type.lower():
            raise ApiError(
                f"Unexpected Content-Type from server ({content_type}). "
                "This may be a proxy or network issue."
            ) from None
        raise ApiError("Unexpected response from Sentry API (not valid JSON).") from None


# ---------------------------------------------------------------------------
# Client handles
# ---------------------------------------------------------------------------


class ApiSession:
    """Authenticated handle bound to one profile's base URL and bearer token."""

    def __init__(self, profile):
        self.profile = profile
        self.base_url = profile.base_url
        self.headers = {
            "Authorization": f"Bearer {profile.auth_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"sentry-api-cli/{config.VERSION}",
        }
        self.closed = False

    def __repr__(self):
        return (
            f"ApiSession(profile={self.profile.name!r}, base_url={self.base_url!r}, "
            f"token={_mask_token(self.profile.auth_token)!r})"
        )

    def url_for(self, path, params=None):
        url = self.base_url + path
        query = _encode_query(params)
        return f"{url}?{query}" if query else url

    def request(self, method, path, params=None, data=None):
        if self.closed:
            raise CliError(f"ERROR: Client for profile '{self.profile.name}' is closed.")
        headers = dict(self.headers)
        headers["X-Request-Id"] = str(uuid.uuid4())
        try:
            return _http_request(self.url_for(path, params), data, headers, method)
        except HTTPError as e:
            detail = _error_detail(e.body)
            message = detail or f"HTTP {e.code}: {e.reason}"
            raise ApiError(message, status=e.code, detail=detail) from e

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def put(self, path, data=None):
        return self.request("PUT", path, data=data if data is not None else {})

    def close(self):
        self.closed = True


class ClientCache:
    """One ApiSession per profile name, created lazily and reused until clear().

    Not thread-safe: callers run one command at a time.
    """

    def __init__(self, cfg=None):
        self._config = cfg
        self._clients = {}

    @property
    def config(self):
        if self._config is None:
            self._config = config.get_config()
        return self._config

    def resolve(self, profile_name):
        return config.resolve_profile(profile_name, self.config)

    def get_client(self, profile_name):
        client = self._clients.get(profile_name)
        if client is None:
            client = ApiSession(self.resolve(profile_name))
            self._clients[profile_name] = client
        return client

    def clear(self):
        for client in self._clients.values():
            client.close()
        self._clients.clear()

    def __len__(self):
        return len(self._clients)

    def __contains__(self, profile_name):
        return profile_name in self._clients

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.clear()
        return False
