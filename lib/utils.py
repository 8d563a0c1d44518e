# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date, datetime, timezone
from typing import Any


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string, the format Supabase accepts."""
    return datetime.now(timezone.utc).isoformat()


def to_date_string(value: Any) -> str | None:
    """
    Reduce a date/timestamp value to its YYYY-MM-DD part.

    Supabase returns timestamptz columns as ISO strings, date columns as
    plain dates; both render the same in resources.

    Example:
        to_date_string("2024-01-15T10:30:00+00:00")  # "2024-01-15"
        to_date_string(None)                         # None
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


# =============================================================================
# Request Value Utilities
# =============================================================================

def blank_to_none(value: Any) -> Any:
    """
    Treat empty and whitespace-only strings as absent.

    Query strings and HTML forms send `name=` for untouched inputs; those
    must behave exactly like a missing parameter.
    """
    if isinstance(value, str) and not value.strip():
        return None
    return value


def drop_blank(values: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of `values` without absent or blank entries."""
    return {key: value for key, value in values.items() if blank_to_none(value) is not None}
