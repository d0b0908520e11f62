"""Render extracted shifts to a multi-sheet XLSX workbook."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from extraction_core.models import EmployeeSchedule, ShiftEntry
from extraction_core.time_utils import format_duration

from .schemas import ROSTER_NAME_COL, SHIFT_ENTRIES_COLS, roster_column_label, weekday_ja
from .writer import entry_row, schedule_matrix

_SHIFTS_SHEET_COLS = [*SHIFT_ENTRIES_COLS, "weekday", "duration"]


def _get_openpyxl():
    try:
        from openpyxl import Workbook
        from openpyxl.styles import Font, PatternFill
        return Workbook, Font, PatternFill
    except ImportError as exc:
        raise ImportError("openpyxl is required for XLSX export: pip install openpyxl") from exc


def _style_headers(worksheets):
    """Apply bold + blue fill to header row of each worksheet."""
    _, Font, PatternFill = _get_openpyxl()
    header_font = Font(bold=True)
    header_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
    for ws in worksheets:
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
        ws.freeze_panes = "A2"


def _shift_sheet_row(entry: ShiftEntry, name: str) -> list[str]:
    row = entry_row(entry, name)
    row["weekday"] = weekday_ja(entry.date)
    row["duration"] = format_duration(entry.duration_minutes)
    return [row.get(c, "") for c in _SHIFTS_SHEET_COLS]


def render_schedule_xlsx(schedule: EmployeeSchedule, path: Path) -> Path:
    """Render a roster to XLSX.

    Sheets:
      Shifts -- one row per shift, sorted by date and start time
      Roster -- employee x date grid, blank cell = no shift

    Returns the path to the written file.
    """
    Workbook, _, _ = _get_openpyxl()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()

    # --- Shifts sheet ---
    ws_shifts = wb.active
    ws_shifts.title = "Shifts"
    ws_shifts.append(_SHIFTS_SHEET_COLS)
    flat = [(name, entry) for name, entries in schedule.items() for entry in entries]
    flat.sort(key=lambda pair: (pair[1].start_time, pair[0]))
    for name, entry in flat:
        ws_shifts.append(_shift_sheet_row(entry, name))

    # --- Roster sheet ---
    ws_roster = wb.create_sheet("Roster")
    dates, matrix = schedule_matrix(schedule)
    ws_roster.append([ROSTER_NAME_COL, *(roster_column_label(d) for d in dates)])
    for row in matrix:
        ws_roster.append(row)

    _style_headers([ws_shifts, ws_roster])
    wb.save(str(path))
    return path


def render_entries_xlsx(entries: Iterable[ShiftEntry], path: Path, *, employee_name: str = "") -> Path:
    """Render one person's entries (free-form mode output) to XLSX."""
    return render_schedule_xlsx({employee_name: list(entries)}, path)
