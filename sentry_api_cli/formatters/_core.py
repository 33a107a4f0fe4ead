"""Core renderers: the two output formats a command result can take."""

import json

import toon_format


def format_as_json(data):
    return json.dumps(data, indent=2, ensure_ascii=False)


def _is_blank(data):
    """Values the TOON renderer prints as nothing (None, "", 0, False)."""
    if data is None:
        return True
    if isinstance(data, (str, int, float, bool)):
        return not data
    return False


def format_as_toon(data):
    if _is_blank(data):
        return ""
    return toon_format.encode(data)


def render(data, fmt="json"):
    """Render *data* in the requested format. Unknown formats fall back to JSON."""
    if fmt == "toon":
        return format_as_toon(data)
    return format_as_json(data)
