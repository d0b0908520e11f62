"""Column constants and formatting helpers for CSV/XLSX I/O."""

from __future__ import annotations

from datetime import date

# ---------------------------------------------------------------------------
# Shift record columns
# ---------------------------------------------------------------------------

SHIFT_ENTRIES_COLS = [
    "id",
    "employee_name",
    "date",
    "start_time",
    "end_time",
    "hours",
    "notes",
]

ROSTER_NAME_COL = "employee_name"

WEEKDAY_JA = ["月", "火", "水", "木", "金", "土", "日"]

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def fmt_hours(hours: float | None) -> str:
    """Format decimal hours for CSV output. None -> empty string."""
    if hours is None:
        return ""
    return f"{hours:.2f}"


def fmt_optional(value: str | None) -> str:
    if value is None:
        return ""
    return str(value)


def weekday_ja(d: date) -> str:
    return WEEKDAY_JA[d.weekday()]


def roster_column_label(d: date) -> str:
    """Header label of a roster column, e.g. ``5/1(木)``."""
    return f"{d.month}/{d.day}({weekday_ja(d)})"


# ---------------------------------------------------------------------------
# Type coercion helpers for reading CSV values
# ---------------------------------------------------------------------------


def to_optional_str(value: str | None) -> str | None:
    """Empty/whitespace-only CSV cell -> None."""
    if value is None or str(value).strip() == "":
        return None
    return str(value)
