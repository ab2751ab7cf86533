"""
Timestamp helpers: boundary parsing of ISO-8601 values into aware UTC
datetimes, and the current instant.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

from .logger import get_logger

logger = get_logger(__name__)

TimestampInput = Union[str, datetime, date, None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_instant(value: TimestampInput, field_name: str = "timestamp") -> Optional[datetime]:
    """
    Parse a stored timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (a trailing ``Z`` is allowed), datetimes and
    plain dates (midnight UTC). Empty or unparseable values return None;
    an unparseable value is logged as a data-integrity warning.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if not isinstance(value, str):
        logger.warning(f"Unsupported {field_name} value type: {type(value).__name__}")
        return None

    text = value.strip()
    if not text:
        return None

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        logger.warning(f"Unable to parse {field_name}: {value!r}")
        return None


def format_instant(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return ensure_utc(value).isoformat().replace("+00:00", "Z")
