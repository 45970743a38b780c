"""Date/time parsing helpers.

Provides ISO 8601 parsing for request filters and API timestamps,
including support for 'Z' suffix normalization to '+00:00'.
"""

from __future__ import annotations

from datetime import datetime


def _replace_z_suffix(value: str) -> str:
    if value.endswith(("Z", "z")):
        return value[:-1] + "+00:00"
    return value


def parse_iso8601(value: str) -> datetime:
    """Parse an ISO 8601 date-time that carries a UTC offset.

    Accepts values ending with 'Z' by converting to '+00:00'.

    Raises:
        ValueError: If the value cannot be parsed, has no time part or
            has no offset.
    """

    if "T" not in value.upper():
        raise ValueError(f"missing time part: {value!r}")
    dt = datetime.fromisoformat(_replace_z_suffix(value))
    if dt.tzinfo is None:
        raise ValueError(f"missing UTC offset: {value!r}")
    return dt


def is_iso8601_datetime(value: str) -> bool:
    """True when `value` is a full ISO 8601 date-time with an offset.

    Example:
        >>> is_iso8601_datetime("2024-01-01T00:00:00Z")
        True
        >>> is_iso8601_datetime("2024-01-01T00:00:00")
        False
    """

    if not isinstance(value, str):
        return False
    try:
        parse_iso8601(value)
    except ValueError:
        return False
    return True
