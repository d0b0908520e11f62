from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

UTC = timezone.utc


def now_utc_iso() -> str:
    return datetime.now(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def ensure_date(value: str | date) -> date:
    """Parse an ISO date; raises ValueError naming the bad value."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date {value!r} (expected YYYY-MM-DD)") from exc


def week_start(d: date) -> date:
    """Sunday on or before *d* (calendar weeks run Sunday to Saturday)."""
    # weekday(): Monday=0 .. Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_days(d: date) -> list[date]:
    sunday = week_start(d)
    return [sunday + timedelta(days=i) for i in range(7)]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month!r}")
    first = date(year, month, 1)
    nxt = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return first, nxt - timedelta(days=1)

