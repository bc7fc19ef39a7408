"""
Contact submission checks shared by the client controller and the relay.

Both layers call the same functions so their rules cannot drift apart.
"""

from typing import Any, List, Mapping, Tuple

REQUIRED_FIELDS = ("name", "email", "message")
HONEYPOT_FIELD = "website"


def field_text(data: Mapping[str, Any], field: str) -> str:
    """Read a field as text; missing or non-string values read as empty."""
    value = data.get(field, "")
    return value if isinstance(value, str) else ""


def validate_contact_fields(data: Mapping[str, Any]) -> Tuple[bool, List[str]]:
    """
    Check that name, email and message are present and not blank.

    Returns:
        Tuple of (is_valid, missing_fields)
    """
    missing = [field for field in REQUIRED_FIELDS if not field_text(data, field).strip()]
    return not missing, missing


def is_honeypot_triggered(honeypot: Any) -> bool:
    """Any value in the hidden field marks the sender as automated."""
    return bool(honeypot)
