from __future__ import annotations

import re
from datetime import date, datetime, timezone

_FRACTION_RE = re.compile(r"\.(\d+)")


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_api_datetime(value: str) -> datetime:
    """
    Parse a ShareFile timestamp into tz-aware UTC datetime.

    Accepts strings like:
      - 2016-08-17T09:10:41Z
      - 2016-08-17T09:10:41.12Z
      - 2016-08-17T09:10:41.1234567+02:00
      - 2016-08-17T09:10:41 (treated as UTC)
    """
    if not isinstance(value, str) or not value:
        raise ValueError("timestamp value must be a non-empty string")

    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    # fromisoformat wants exactly 3 or 6 fraction digits on older interpreters.
    s = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s, count=1)

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_api_date(value: date) -> str:
    """Format a date the way share expiration dates are sent (YYYY-MM-DD)."""
    if isinstance(value, datetime):
        value = normalize_dt(value).astimezone(timezone.utc).date()
    return value.strftime("%Y-%m-%d")


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt
