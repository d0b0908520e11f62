"""Entry points: one call per extraction mode.

    extract(text, target_name)  -- free-form mode, one person's shifts
    extract_table(text)         -- grid mode, every employee in the roster

Both are pure functions of the text and the reference date. The ``*_async``
variants run the same work in a worker thread so an event loop (e.g. the MCP
server) stays responsive.
"""

from __future__ import annotations

import asyncio
from datetime import date

from .grid import parse_shift_table
from .models import EmployeeSchedule, ShiftEntry
from .proximity import match_shifts


def extract(text: str, target_name: str, *, today: date | None = None) -> list[ShiftEntry]:
    """Shifts of *target_name* found in *text*, in line order. Empty name -> []."""
    if not text or not target_name:
        return []
    return match_shifts(text, target_name, today=today)


def extract_table(text: str, *, today: date | None = None) -> EmployeeSchedule:
    """Per-employee shifts of a roster grid; {} when *text* has no header row."""
    if not text:
        return {}
    return parse_shift_table(text, today=today)


async def extract_async(text: str, target_name: str, *, today: date | None = None) -> list[ShiftEntry]:
    return await asyncio.to_thread(extract, text, target_name, today=today)


async def extract_table_async(text: str, *, today: date | None = None) -> EmployeeSchedule:
    return await asyncio.to_thread(extract_table, text, today=today)
