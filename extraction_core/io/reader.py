"""Read shift records written by ``writer`` back into ShiftEntry objects."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from extraction_core.models import EmployeeSchedule, ShiftEntry

from .schemas import to_optional_str

logger = logging.getLogger(__name__)


def _read_csv(path: Path) -> list[dict[str, str]]:
    if not path.exists():
        raise FileNotFoundError(f"Shift CSV not found: {path}")
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def _row_entry(row: dict[str, str], line_no: int) -> ShiftEntry | None:
    try:
        return ShiftEntry.from_dict({
            "id": row.get("id"),
            "date": row["date"],
            "start_time": row["start_time"],
            "end_time": row["end_time"],
            "notes": to_optional_str(row.get("notes")),
        })
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping unreadable shift row %d: %s", line_no, exc)
        return None


def read_entries_csv(path: Path) -> list[ShiftEntry]:
    """Read all entries of a shift CSV, ignoring the employee column.

    Raises FileNotFoundError if *path* does not exist.
    """
    entries: list[ShiftEntry] = []
    for line_no, row in enumerate(_read_csv(Path(path)), start=2):
        entry = _row_entry(row, line_no)
        if entry is not None:
            entries.append(entry)
    return entries


def read_schedule_csv(path: Path) -> EmployeeSchedule:
    """Read a long-format roster CSV into ``{employee_name: [entries]}``."""
    schedule: EmployeeSchedule = {}
    for line_no, row in enumerate(_read_csv(Path(path)), start=2):
        entry = _row_entry(row, line_no)
        if entry is None:
            continue
        name = (row.get("employee_name") or "").strip()
        schedule.setdefault(name, []).append(entry)
    return schedule
