"""Identifier generation and timestamp helpers."""

import re
import secrets
from datetime import datetime, timezone

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|z|[+-]\d{2}:\d{2})?$"
)


def new_id() -> str:
    """Return a fresh 16 hex digit identifier.

    "3f9a0c1be27d4a55"
    """
    return secrets.token_hex(8)


def utc_now() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def is_zero(value: datetime | None) -> bool:
    """True if value is missing or the zero time."""
    return value is None or value == ZERO_TIME


def format_time(value: datetime) -> str:
    """Format as RFC 3339 UTC with a Z suffix.

    Fractional seconds are written only when present, trailing zeros trimmed:
    2026-02-19 12:30:00.250000 → "2026-02-19T12:30:00.25Z"
    """
    value = value.astimezone(timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text + "Z"


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Accepts up to nanosecond precision (truncated to microseconds) and
    either a Z suffix or a numeric offset. Naive values are taken as UTC.
    Values that leave the datetime range when shifted to UTC clamp to
    ZERO_TIME.
    Raises ValueError if text is not a timestamp.
    """
    match = _TIMESTAMP_RE.match(text.strip())
    if not match:
        raise ValueError(f"invalid timestamp: {text!r}")
    frac = (match.group("frac") or "")[:6].ljust(6, "0")
    tz = match.group("tz") or "Z"
    if tz in ("Z", "z"):
        tz = "+00:00"
    value = datetime.fromisoformat(f"{match.group('base').replace(' ', 'T')}.{frac}{tz}")
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        return ZERO_TIME
