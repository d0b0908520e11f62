"""Shift extraction from OCR text: free-form and roster-grid modes."""

from .dates import extract_all_dates, extract_date
from .extractor import extract, extract_async, extract_table, extract_table_async
from .grid import OFF_MARKERS, parse_shift_table
from .models import DateToken, EmployeeSchedule, Line, ShiftEntry, TimeRange, split_lines
from .proximity import match_shifts
from .time_utils import extract_time_range, resolve_shift_times

# CSV helpers only; XLSX export stays behind extraction_core.io so openpyxl loads on demand
from .io import read_entries_csv, write_entries_csv, write_schedule_csv

__all__ = [
    "DateToken",
    "EmployeeSchedule",
    "Line",
    "OFF_MARKERS",
    "ShiftEntry",
    "TimeRange",
    "extract",
    "extract_all_dates",
    "extract_async",
    "extract_date",
    "extract_table",
    "extract_table_async",
    "extract_time_range",
    "match_shifts",
    "parse_shift_table",
    "read_entries_csv",
    "resolve_shift_times",
    "split_lines",
    "write_entries_csv",
    "write_schedule_csv",
]
