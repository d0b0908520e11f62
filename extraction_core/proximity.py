"""Free-form mode: a person's lines matched to the nearest date line."""

from __future__ import annotations

import logging
import re
from datetime import date

from .dates import extract_date
from .models import DateToken, Line, ShiftEntry, TimeRange, split_lines
from .time_utils import build_shift_entry, extract_time_range

logger = logging.getLogger(__name__)


def find_name_lines(lines: list[Line], name: str) -> list[Line]:
    """Lines containing *name* as a literal, case-sensitive substring."""
    if not name:
        return []
    return [line for line in lines if name in line.text]


def find_date_lines(lines: list[Line], *, today: date | None = None) -> list[DateToken]:
    tokens: list[DateToken] = []
    for line in lines:
        token = extract_date(line.text, line_index=line.index, today=today)
        if token is not None:
            tokens.append(token)
    return tokens


def closest_date(date_tokens: list[DateToken], line_index: int) -> DateToken | None:
    """Closest date line to *line_index*; on a tie the first one scanned wins.

    Date lines are scanned in ascending index order with a strict less-than, so
    between a date line above and one equally far below, the one above is kept.
    """
    best: DateToken | None = None
    best_distance: int | None = None
    for token in date_tokens:
        distance = abs(token.line_index - line_index)
        if best_distance is None or distance < best_distance:
            best = token
            best_distance = distance
    return best


def residual_notes(
    text: str,
    name: str,
    time_range: TimeRange,
    date_token: DateToken | None = None,
) -> str | None:
    """Text left on a line once the time range, the name and the line's own date are removed."""
    cuts = [time_range.span]
    if date_token is not None:
        cuts.append(date_token.span)
    pieces: list[str] = []
    pos = 0
    for start, end in sorted(cuts):
        if start < pos:
            pos = max(pos, end)
            continue
        pieces.append(text[pos:start])
        pos = end
    pieces.append(text[pos:])
    remainder = " ".join(p.strip() for p in pieces)
    remainder = remainder.replace(name, "")
    remainder = re.sub(r"\s+", " ", remainder).strip()
    return remainder or None


def match_shifts(text: str, name: str, *, today: date | None = None) -> list[ShiftEntry]:
    """Extract *name*'s shifts from free-form text.

    Each line that mentions *name* and carries a time range becomes one entry
    dated by the nearest line holding a date. Lines without a time range, or
    texts without any date, contribute nothing.
    """
    if not name:
        return []
    today = today or date.today()
    lines = split_lines(text)
    name_lines = find_name_lines(lines, name)
    if not name_lines:
        logger.debug("Name %r not found in %d lines", name, len(lines))
        return []

    date_tokens = find_date_lines(lines, today=today)
    if not date_tokens:
        logger.debug("No date lines found; %d name lines skipped", len(name_lines))
        return []

    entries: list[ShiftEntry] = []
    for line in name_lines:
        nearest = closest_date(date_tokens, line.index)
        if nearest is None:
            continue
        time_range = extract_time_range(line.text)
        if time_range is None:
            logger.debug("No time range on line %d", line.index)
            continue
        own_date = next((tok for tok in date_tokens if tok.line_index == line.index), None)
        notes = residual_notes(line.text, name, time_range, own_date)
        entry = build_shift_entry(nearest.date, time_range, notes)
        if entry is not None:
            entries.append(entry)

    logger.info("Proximity match for %r: %d entries from %d name lines", name, len(entries), len(name_lines))
    return entries
