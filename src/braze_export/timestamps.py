"""Event time normalization for Braze event objects."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def system_clock() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(UTC)


def _pad(n: int) -> str:
    return f"0{n}" if n < 10 else str(n)


def to_utc(dt: datetime) -> datetime:
    """Convert to UTC. Naive values are treated as process-local time."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(UTC)


def iso_date_string(dt: datetime) -> str:
    """Format ``dt`` as an ISO-8601 UTC string with a literal ``Z``.

    Milliseconds share the two-digit padding of the other components, so a
    whole second renders as ``.00`` and 123 ms as ``.123``.
    """
    d = to_utc(dt)
    return (
        f"{d.year}-{_pad(d.month)}-{_pad(d.day)}"
        f"T{_pad(d.hour)}:{_pad(d.minute)}:{_pad(d.second)}"
        f".{_pad(d.microsecond // 1000)}Z"
    )


def last_midnight(clock: Clock = system_clock) -> datetime:
    """Midnight of today's local calendar date, as an aware datetime.

    The date is taken from the process-local calendar, so once formatted in
    UTC the result is shifted by the local UTC offset.
    """
    local_now = to_utc(clock()).astimezone()
    return datetime(local_now.year, local_now.month, local_now.day).astimezone()


def parse_timestamp(value: datetime | str | int | float | None) -> datetime | None:
    """Parse an event timestamp. Returns None when absent or unparseable.

    Numbers are epoch milliseconds. A date-only string such as
    ``2023-06-16`` is midnight UTC; other naive strings stay naive and are
    later read as process-local time.
    """
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if _DATE_ONLY_RE.match(value):
        return parsed.replace(tzinfo=UTC)
    return parsed
