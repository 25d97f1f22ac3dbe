"""Timestamp and calendar-date parsing utilities."""
from datetime import date, datetime, timezone


def parse_timestamp(s: str) -> datetime:
    """
    Parse a timestamp string into a datetime object.

    Supports the formats the data service emits:
    - ISO format with "Z" suffix: "2024-01-02T09:10:00Z"
    - ISO format with timezone: "2024-01-02T09:10:00.123456+00:00"
    - ISO format without timezone: "2024-01-02T09:10:00"
    - Space-separated: "2024-01-02 09:10:00"

    Args:
        s: Timestamp string

    Returns:
        Timezone-aware datetime (naive input is assumed UTC)

    Raises:
        ValueError: If timestamp cannot be parsed
    """
    if not s:
        raise ValueError("Empty timestamp string")

    s = s.strip()

    # Convert trailing "Z" to "+00:00" for ISO format compatibility
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    if " " in s and "T" not in s:
        s = s.replace(" ", "T", 1)

    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        raise ValueError(
            f"Unable to parse timestamp: {s}. Expected ISO format "
            "(e.g., '2024-01-02T09:10:00Z' or '2024-01-02T09:10:00+00:00')"
        ) from None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_calendar_date(value) -> date:
    """
    Coerce a calendar date from a date, a datetime or a string.

    Strings may be a plain ISO date ("2024-01-02") or a full timestamp, in
    which case the calendar day of the timestamp as written is kept.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid calendar date: {value!r}")

    s = value.strip()
    if len(s) == 10:
        return date.fromisoformat(s)
    # Keep the written day; converting to UTC first could shift it.
    return parse_timestamp(s).date()
