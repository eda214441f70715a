"""Timestamp formatting for exports."""

from datetime import datetime


def _to_datetime(value):
    if isinstance(value, datetime):
        return value
    # YouTube timestamps end in 'Z'; older fromisoformat() only accepts an explicit offset
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


def localize(value, tz=None):
    """
    Reinterpret an instant in the given zone (the machine's local zone when tz is None).

    Parameters:
        value (str or datetime): ISO-8601 timestamp or datetime; naive values count as local time
        tz (tzinfo or None): Target zone
    """
    return _to_datetime(value).astimezone(tz)


def format_local_date(value, tz=None):
    """
    Format an instant as YYYY-MM-DDTHH:MM:SS±HHMM in local time.

    The offset is the local zone's, not the one the input string carried.

    Example:
        >>> format_local_date("2024-01-15T03:00:00Z", tz=timezone(timedelta(hours=8)))
        "2024-01-15T11:00:00+0800"
    """
    return localize(value, tz).strftime('%Y-%m-%dT%H:%M:%S%z')


def format_display_date(value, tz=None):
    """Human-readable local date and time, using the current locale's representation."""
    return localize(value, tz).strftime('%x %X')
