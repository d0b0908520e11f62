"""Date detection in OCR lines.

Two entry points:
  extract_date(line)       -- the single best date in a line (priority-ordered formats)
  extract_all_dates(line)  -- every date in a line, left to right (header detection)

Both are driven by ordered lists of ``DatePolicy`` so that new formats are a
data change. Year-less formats take the year of the reference date, which
defaults to today and is resolved once per call.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date

from .models import DateToken, Line

logger = logging.getLogger(__name__)

# One-to-one character folding keeps match spans valid for the original line.
_FULLWIDTH_FOLD = str.maketrans(
    {
        **{chr(0xFF10 + i): str(i) for i in range(10)},
        "／": "/",
        "－": "-",
        "‐": "-",
        "−": "-",
    }
)


@dataclass(frozen=True)
class DatePolicy:
    """A date format: regex with (year, month, day) or (month, day) groups."""

    name: str
    pattern: re.Pattern[str]
    has_year: bool = True

    def build(self, match: re.Match[str], year: int) -> date | None:
        parts = [int(g) for g in match.groups()]
        if not self.has_year:
            parts = [year, *parts]
        y, m, d = parts
        try:
            return date(y, m, d)
        except ValueError:
            return None


_YMD_SLASH = DatePolicy("yyyy/MM/dd", re.compile(r"(?<!\d)(\d{4})/(\d{1,2})/(\d{1,2})(?!\d)"))
_YMD_DASH = DatePolicy("yyyy-MM-dd", re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)"))
_YMD_KANJI = DatePolicy(
    "yyyy年MM月dd日",
    re.compile(r"(?<!\d)(\d{4})\s*年\s*(\d{1,2})\s*月\s*(\d{1,2})\s*日"),
)
_MD_SLASH = DatePolicy(
    "MM/dd",
    re.compile(r"(?<![\d/])(\d{1,2})/(\d{1,2})(?![\d/])"),
    has_year=False,
)
_MD_KANJI = DatePolicy(
    "M月d日",
    re.compile(r"(?<!\d)(\d{1,2})\s*月\s*(\d{1,2})\s*日"),
    has_year=False,
)

# Priority order for extract_date: first policy that matches and builds a valid date wins.
DATE_POLICIES: tuple[DatePolicy, ...] = (
    _YMD_SLASH,
    _YMD_DASH,
    _YMD_KANJI,
    _MD_SLASH,
    _MD_KANJI,
)

# Same formats; year-bearing ones come first so they claim their span before a year-less one can.
ALL_DATE_POLICIES: tuple[DatePolicy, ...] = DATE_POLICIES


def fold_fullwidth(text: str) -> str:
    return text.translate(_FULLWIDTH_FOLD)


def _reference_year(today: date | None) -> int:
    return (today or date.today()).year


def extract_date(
    line: str,
    *,
    line_index: int = 0,
    today: date | None = None,
    policies: tuple[DatePolicy, ...] = DATE_POLICIES,
) -> DateToken | None:
    """Return the single best date in *line*, or None.

    Policies are tried in order and each reads only its first match; if that
    match is not a real calendar date the next policy is tried.
    """
    if not line:
        return None
    folded = fold_fullwidth(line)
    year = _reference_year(today)
    for policy in policies:
        m = policy.pattern.search(folded)
        if m is None:
            continue
        resolved = policy.build(m, year)
        if resolved is None:
            logger.debug("Policy %s rejected %r", policy.name, m.group(0))
            continue
        start, end = m.span()
        return DateToken(
            line_index=line_index,
            date=resolved,
            text=line[start:end],
            span=(start, end),
        )
    return None


def extract_all_dates(
    line: str,
    *,
    line_index: int = 0,
    today: date | None = None,
    policies: tuple[DatePolicy, ...] = ALL_DATE_POLICIES,
) -> list[DateToken]:
    """Return every date in *line* in order of appearance.

    A substring claimed by an earlier policy is not re-read by a later one, so
    ``2025/5/1`` yields one date, not an extra ``5/1``.
    """
    if not line:
        return []
    folded = fold_fullwidth(line)
    year = _reference_year(today)
    claimed: list[tuple[int, int]] = []
    tokens: list[DateToken] = []
    for policy in policies:
        for m in policy.pattern.finditer(folded):
            start, end = m.span()
            if any(start < c_end and c_start < end for c_start, c_end in claimed):
                continue
            resolved = policy.build(m, year)
            if resolved is None:
                continue
            claimed.append((start, end))
            tokens.append(
                DateToken(line_index=line_index, date=resolved, text=line[start:end], span=(start, end))
            )
    tokens.sort(key=lambda tok: tok.span[0])
    return tokens


def find_header(lines: list[Line], *, today: date | None = None) -> list[DateToken]:
    """Dates of the first line holding more than one date, or [] if none does."""
    for line in lines:
        tokens = extract_all_dates(line.text, line_index=line.index, today=today)
        if len(tokens) > 1:
            return tokens
    return []
