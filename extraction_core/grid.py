"""Tabular mode: a header row of dates over one row of shift cells per employee.

Example input (OCR of a printed roster)::

    シフト表 5月
         5/1   5/2   5/3
    鈴木  9:00-17:00  休み  10:00-18:00
    佐藤  休  13:00-22:00  22:00-6:00

The header is the first line with more than one date. Every line that reads
as ``name cell cell ...`` (cells being time ranges or off-markers) is aligned
to the header columns by position.
"""

from __future__ import annotations

import logging
import re
from datetime import date

from .dates import find_header
from .models import DateToken, EmployeeSchedule, ShiftEntry, split_lines
from .time_utils import TIME_RANGE_PATTERN, build_shift_entry, extract_time_range

logger = logging.getLogger(__name__)

# Exact literals; no case folding beyond the listed variants.
OFF_MARKERS = frozenset({"休", "休み", "off", "OFF", "Off"})

# Longest first so "休み" is not read as "休" followed by junk.
_OFF_PATTERN = "|".join(re.escape(m) for m in sorted(OFF_MARKERS, key=len, reverse=True))
_CELL_PATTERN = rf"(?:{TIME_RANGE_PATTERN}|{_OFF_PATTERN})(?=\s|$)"

ROW_RE = re.compile(rf"^\s*(?P<name>\S.*?)\s+(?P<cells>{_CELL_PATTERN}(?:\s+{_CELL_PATTERN})*)")

# A spaced-out range such as "9:00 - 17:00" is still a single cell; a range
# glued to other text ("9:00-17:00休") stays one whitespace-delimited token.
_TOKEN_RE = re.compile(rf"{TIME_RANGE_PATTERN}(?=\s|$)|\S+")


def split_row(line: str) -> tuple[str, list[str]] | None:
    """Split a roster line into (name, tokens after the name), or None if it is not a row."""
    m = ROW_RE.search(line)
    if not m:
        return None
    name = m.group("name").strip()
    if not name:
        return None
    tokens = _TOKEN_RE.findall(line[m.end("name"):])
    return name, tokens


def is_off_marker(token: str) -> bool:
    return token in OFF_MARKERS


def parse_row(line: str, header: list[DateToken]) -> tuple[str, list[ShiftEntry]] | None:
    """Parse one roster line against the header dates.

    Returns None when the line is not a roster row or has fewer cells than
    the header has dates; a short row is dropped whole. Individual cells that
    are neither off-markers nor valid time ranges are skipped on their own.
    """
    row = split_row(line)
    if row is None:
        return None
    name, tokens = row
    if len(tokens) < len(header):
        logger.warning(
            "Skipping row for %r: %d cells for %d header dates",
            name, len(tokens), len(header),
        )
        return None

    entries: list[ShiftEntry] = []
    for column, (header_date, token) in enumerate(zip(header, tokens)):
        if is_off_marker(token):
            continue
        time_range = extract_time_range(token)
        if time_range is None:
            logger.debug("Unreadable cell %r for %r in column %d", token, name, column)
            continue
        entry = build_shift_entry(header_date.date, time_range)
        if entry is not None:
            entries.append(entry)
    return name, entries


def parse_shift_table(text: str, *, today: date | None = None) -> EmployeeSchedule:
    """Parse every employee row of a roster grid.

    Returns ``{name: [entries in column order]}``; empty when no header row
    exists. Employees whose rows yield no entries are left out. A name that
    appears on several rows accumulates the entries of all of them.
    """
    today = today or date.today()
    lines = split_lines(text)
    header = find_header(lines, today=today)
    if not header:
        logger.debug("No header row of dates in %d lines", len(lines))
        return {}
    logger.info(
        "Header row at line %d with %d dates (%s .. %s)",
        header[0].line_index, len(header), header[0].date, header[-1].date,
    )

    schedule: EmployeeSchedule = {}
    for line in lines:
        parsed = parse_row(line.text, header)
        if parsed is None:
            continue
        name, entries = parsed
        if not entries:
            continue
        schedule.setdefault(name, []).extend(entries)

    logger.info(
        "Grid parse: %d employees, %d entries",
        len(schedule), sum(len(v) for v in schedule.values()),
    )
    return schedule
