"""HTML escaping for text embedded into generated documents."""
from __future__ import annotations

# Order matters: "&" first so entities produced by later replacements are not re-escaped.
_HTML_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(value: str | None) -> str:
    """Return ``value`` safe to embed as HTML text content.

    ``None`` becomes an empty string. Not idempotent: escaping twice
    double-encodes, so escape once, when building template fields.
    """
    if value is None:
        return ""
    text = str(value)
    for raw, entity in _HTML_REPLACEMENTS:
        text = text.replace(raw, entity)
    return text
