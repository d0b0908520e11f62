"""Write extracted shift records to CSV."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

from extraction_core.models import EmployeeSchedule, ShiftEntry
from extraction_core.time_utils import format_hhmm

from .schemas import SHIFT_ENTRIES_COLS, fmt_hours, fmt_optional


def _write_csv(path: Path, columns: list[str], rows: list[dict[str, Any]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)
    return path


def entry_row(entry: ShiftEntry, employee_name: str = "") -> dict[str, Any]:
    return {
        "id": entry.id,
        "employee_name": employee_name,
        "date": entry.date.isoformat(),
        "start_time": entry.start_time.isoformat(timespec="minutes"),
        "end_time": entry.end_time.isoformat(timespec="minutes"),
        "hours": fmt_hours(entry.hours),
        "notes": fmt_optional(entry.notes),
    }


def write_entries_csv(entries: Iterable[ShiftEntry], path: Path, *, employee_name: str = "") -> Path:
    """Write one person's entries (free-form mode output)."""
    rows = [entry_row(e, employee_name) for e in entries]
    return _write_csv(Path(path), SHIFT_ENTRIES_COLS, rows)


def write_schedule_csv(schedule: EmployeeSchedule, path: Path) -> Path:
    """Write a roster in long format: one row per (employee, shift)."""
    rows = [
        entry_row(entry, name)
        for name, entries in schedule.items()
        for entry in entries
    ]
    return _write_csv(Path(path), SHIFT_ENTRIES_COLS, rows)


def schedule_dates(schedule: EmployeeSchedule) -> list[date]:
    """Sorted distinct shift dates across all employees."""
    return sorted({entry.date for entries in schedule.values() for entry in entries})


def schedule_matrix(schedule: EmployeeSchedule) -> tuple[list[date], list[list[str]]]:
    """Pivot a roster to ``name x date`` cells of ``HH:MM-HH:MM`` (empty = off).

    Two shifts of one person on the same date share a cell, comma separated.
    """
    dates = schedule_dates(schedule)
    col = {d: i for i, d in enumerate(dates)}
    matrix: list[list[str]] = []
    for name, entries in schedule.items():
        cells: list[list[str]] = [[] for _ in dates]
        for entry in entries:
            cells[col[entry.date]].append(f"{format_hhmm(entry.start_time)}-{format_hhmm(entry.end_time)}")
        matrix.append([name, *(", ".join(c) for c in cells)])
    return dates, matrix
