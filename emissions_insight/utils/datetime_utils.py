"""Utility functions for working with dates and times."""

from datetime import datetime, timezone

__all__ = [
    "get_current_timestamp",
    "parse_timestamp",
    "format_timestamp",
]


def get_current_timestamp() -> datetime:
    """Return the current UTC datetime with micro-second precision.

    Used as the default clock of the gateway's call budget. When you need a
    human-readable version, pass the datetime to ``format_timestamp``.
    """
    return datetime.now(tz=timezone.utc)


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 string (``Z`` suffix accepted) into an aware datetime.

    Naive values are assumed to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
