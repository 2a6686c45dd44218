"""
Datetime utilities for HTTP date headers
"""
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Optional


def utc_now() -> datetime:
    """
    Get current UTC time

    Returns:
        datetime: Current UTC time with timezone awareness
    """
    return datetime.now(timezone.utc)


def http_date(timestamp: float) -> str:
    """
    Format a unix timestamp as an HTTP-date (RFC 7231 IMF-fixdate)

    Example:
        >>> http_date(0)
        'Thu, 01 Jan 1970 00:00:00 GMT'
    """
    return format_datetime(datetime.fromtimestamp(timestamp, tz=timezone.utc), usegmt=True)


def parse_http_date(value: Optional[str]) -> Optional[int]:
    """
    Parse an HTTP-date header value into a unix timestamp

    Returns None for absent or unparseable values instead of raising.

    Example:
        >>> parse_http_date("Tue, 14 Nov 2023 22:13:20 GMT")
        1700000000
        >>> parse_http_date("yesterday") is None
        True
    """
    if not value or not value.strip():
        return None
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())
