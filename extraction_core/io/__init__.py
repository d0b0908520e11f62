"""Import/export of extracted shift records.

Public API:
    write_entries_csv(entries, path)   -- one person's entries -> CSV
    write_schedule_csv(schedule, path) -- roster -> long-format CSV
    read_entries_csv(path)             -- CSV -> list[ShiftEntry]
    read_schedule_csv(path)            -- CSV -> {employee_name: [ShiftEntry]}
    render_schedule_xlsx(schedule, p)  -- roster -> Shifts + Roster workbook
"""

from .reader import read_entries_csv, read_schedule_csv
from .writer import write_entries_csv, write_schedule_csv

__all__ = [
    "read_entries_csv",
    "read_schedule_csv",
    "write_entries_csv",
    "write_schedule_csv",
]

# Lazy imports for optional heavy dependencies (openpyxl).
def render_schedule_xlsx(*args, **kwargs):
    from .xlsx import render_schedule_xlsx as _fn
    return _fn(*args, **kwargs)

def render_entries_xlsx(*args, **kwargs):
    from .xlsx import render_entries_xlsx as _fn
    return _fn(*args, **kwargs)
