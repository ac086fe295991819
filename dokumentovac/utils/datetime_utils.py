"""
Datetime parsing and display helpers.

The document service sends ISO 8601 timestamps (usually with a ``Z``
suffix); the documents table shows them as Slovak short dates.
"""

from datetime import datetime
from typing import Optional, Union

MISSING_VALUE = "-"


def parse_datetime(value: Union[str, datetime, None],
                   default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a datetime value sent by the document service.

    Handles ISO 8601 strings with or without timezone, a ``Z`` suffix for
    UTC and already-parsed datetime objects.

    Examples:
        >>> parse_datetime("2024-01-15T10:30:00Z")
        datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    """
    if value is None:
        return default

    if isinstance(value, datetime):
        return value

    if not isinstance(value, str):
        return default

    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    if " " in normalized and "T" not in normalized:
        normalized = normalized.replace(" ", "T", 1)

    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return default


def format_sk_date(value: Union[str, datetime, None]) -> str:
    """Format a timestamp as a Slovak short date ("15. 1. 2024"), or "-"."""
    dt = parse_datetime(value)
    if dt is None:
        return MISSING_VALUE
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return f"{dt.day}. {dt.month}. {dt.year}"
