"""Low-level table rendering helpers (stdlib only)."""

import re

_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _trunc(s, maxlen):
    """Truncate string with ellipsis indicator."""
    if not s:
        return ""
    return s[: maxlen - 1] + "…" if len(s) > maxlen else s


def _sanitize_str(s):
    """Strip ANSI escape sequences and control chars. Keeps newlines and tabs."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _table(columns, rows, footer=None):
    """Build a left-aligned text table.
    columns: list of (name, width) tuples. Last column has no width (fills).
    rows: list of tuples matching columns."""
    header = " ".join(
        name if i == len(columns) - 1 else f"{name:<{width}}"
        for i, (name, width) in enumerate(columns)
    )
    lines = [header, "-" * max(len(header), 60)]
    for row in rows:
        cells = []
        for i, val in enumerate(row):
            safe = _sanitize_str(val) if isinstance(val, str) else str(val)
            if i == len(columns) - 1:
                cells.append(safe)
            else:
                cells.append(f"{_trunc(safe, columns[i][1]):<{columns[i][1]}}")
        lines.append(" ".join(cells))
    if footer:
        lines.append(f"\n{footer}")
    return "\n".join(lines)


def format_commands_table(names, descriptions):
    """Two-column listing of command names and their one-line descriptions."""
    rows = list(zip(names, descriptions))
    return _table(
        [("Command", 22), ("Description", None)],
        rows,
        footer=f"Total: {len(rows)} commands. Run '<command> -h' for parameters.",
    )
