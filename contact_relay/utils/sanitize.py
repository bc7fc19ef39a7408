"""
HTML escaping for contact form values.

The same escaping runs in the browser-side controller and in the relay, so
a value never reaches the email body with raw markup in it.
"""

from typing import Dict, Mapping

# Order matters: "&" first so the entities introduced below are not re-escaped.
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(value: str) -> str:
    """
    Escape ``& < > " '`` so the value is inert inside HTML text and attributes.

    Args:
        value: Raw user input

    Returns:
        Escaped string (empty for None/empty input)
    """
    if not value:
        return ""

    escaped = str(value)
    for raw, entity in _HTML_ESCAPES:
        escaped = escaped.replace(raw, entity)
    return escaped


def newlines_to_breaks(value: str) -> str:
    """Turn CRLF/LF line endings into ``<br>`` for the HTML rendition."""
    return value.replace("\r\n", "\n").replace("\n", "<br>")


def strip_header_breaks(value: str) -> str:
    # Header values must stay on one line.
    return (value or "").replace("\r", "").replace("\n", " ").strip()


def sanitize_fields(data: Mapping[str, str], trim: bool = False) -> Dict[str, str]:
    """
    Escape every value of a flat mapping of form fields.

    Args:
        data: Field name -> raw value
        trim: Strip surrounding whitespace before escaping

    Returns:
        New dict with escaped values
    """
    sanitized = {}
    for field, value in data.items():
        value = value or ""
        sanitized[field] = escape_html(value.strip() if trim else value)
    return sanitized
