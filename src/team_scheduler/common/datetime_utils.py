from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(str(value).strip())


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp. A trailing 'Z' is accepted; tz info is dropped (local wall time)."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1]
    try:
        parsed = datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")
    return parsed.replace(tzinfo=None)


def parse_clock_time(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into time."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid time (HH:MM[:SS]): {value!r}")
    v = value.strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time (HH:MM[:SS]): {value!r}")


def format_minutes(minutes: int) -> str:
    """Format a minute count as HH:MM."""
    minutes = int(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
