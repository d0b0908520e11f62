"""Time-of-day parsing, time-range extraction and midnight crossover."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta

from .models import ShiftEntry, TimeRange

logger = logging.getLogger(__name__)

# ASCII hyphen, ASCII tilde, full-width tilde, wave dash
DASH_CHARS = "-~～〜"
FULLWIDTH_COLON = "："

TIME_RANGE_PATTERN = rf"\d{{1,2}}[:{FULLWIDTH_COLON}]\d{{2}}\s*[{DASH_CHARS}]\s*\d{{1,2}}[:{FULLWIDTH_COLON}]\d{{2}}"
TIME_RANGE_RE = re.compile(
    rf"(\d{{1,2}}[:{FULLWIDTH_COLON}]\d{{2}})\s*[{DASH_CHARS}]\s*(\d{{1,2}}[:{FULLWIDTH_COLON}]\d{{2}})"
)


def parse_hhmm_to_minutes(value: str | None) -> int | None:
    """Parse HH:MM into minutes after midnight."""
    if not value or ":" not in str(value):
        return None
    try:
        hh, mm = str(value).split(":", 1)
        h = int(hh)
        m = int(mm)
    except (TypeError, ValueError):
        return None
    if h < 0 or h > 23 or m < 0 or m > 59:
        return None
    return h * 60 + m


def parse_hhmm(value: str | None) -> time | None:
    """Parse ``H:MM``/``HH:MM`` (full-width colon allowed) into a time."""
    if not value:
        return None
    minutes = parse_hhmm_to_minutes(value.strip().replace(FULLWIDTH_COLON, ":"))
    if minutes is None:
        return None
    return time(minutes // 60, minutes % 60)


def extract_time_range(text: str | None) -> TimeRange | None:
    """Return the first start/end pair in *text*, or None.

    Only the first structural match is considered; if either half of it is not
    a valid time of day the result is None.
    """
    if not text:
        return None
    m = TIME_RANGE_RE.search(text)
    if not m:
        return None
    start = parse_hhmm(m.group(1))
    end = parse_hhmm(m.group(2))
    if start is None or end is None:
        return None
    return TimeRange(start=start, end=end, text=m.group(0), span=m.span())


def resolve_shift_times(day: date, time_range: TimeRange) -> tuple[datetime, datetime]:
    """Anchor a time range on *day*. End hour before start hour means next day."""
    start_dt = datetime.combine(day, time_range.start)
    end_day = day + timedelta(days=1) if time_range.crosses_midnight else day
    end_dt = datetime.combine(end_day, time_range.end)
    return start_dt, end_dt


def build_shift_entry(day: date, time_range: TimeRange, notes: str | None = None) -> ShiftEntry | None:
    start_dt, end_dt = resolve_shift_times(day, time_range)
    if end_dt <= start_dt:
        # same hour with end minute <= start minute, e.g. 9:30-9:10
        logger.debug("Dropping non-positive shift %s on %s", time_range.text, day)
        return None
    return ShiftEntry(date=day, start_time=start_dt, end_time=end_dt, notes=notes or None)


def format_duration(minutes: int) -> str:
    """Minutes -> ``8時間30分`` as shown next to a shift."""
    h, m = divmod(max(minutes, 0), 60)
    return f"{h}時間{m}分"


def format_hhmm(value: datetime | time | None) -> str:
    if value is None:
        return ""
    return value.strftime("%H:%M")
