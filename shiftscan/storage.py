"""Local JSON store for finalized shift records.

Records live in ``<artifact_root>/shifts/shifts.json``. Saving assigns each
record a fresh storage id; the extraction id of the entry is not reused.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any
from uuid import uuid4

from extraction_core.models import EmployeeSchedule, ShiftEntry

from .utils import ensure_date, month_bounds, now_utc_iso, week_days

logger = logging.getLogger(__name__)

STORE_FILE = "shifts.json"


def _json_dump(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, ensure_ascii=False)


def _json_load(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def shift_root(artifact_root: Path) -> Path:
    path = Path(artifact_root) / "shifts"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _store_path(artifact_root: Path) -> Path:
    return shift_root(artifact_root) / STORE_FILE


def _load_records(artifact_root: Path) -> list[dict[str, Any]]:
    path = _store_path(artifact_root)
    if not path.exists():
        return []
    return list(_json_load(path).get("shifts", []))


def _write_records(artifact_root: Path, records: list[dict[str, Any]]) -> None:
    _json_dump(_store_path(artifact_root), {"updated_at": now_utc_iso(), "shifts": records})


def _sort_key(record: dict[str, Any]) -> tuple[str, str]:
    return record.get("date", ""), record.get("start_time", "")


def save_shifts(
    artifact_root: Path,
    entries: Iterable[ShiftEntry],
    *,
    employee_name: str = "",
    source: str | None = None,
) -> list[dict[str, Any]]:
    """Persist entries; returns the stored records with their new ids."""
    saved_at = now_utc_iso()
    new_records: list[dict[str, Any]] = []
    for entry in entries:
        record = entry.to_dict()
        record["id"] = uuid4().hex
        record["employee_name"] = employee_name
        record["source"] = source
        record["saved_at"] = saved_at
        new_records.append(record)
    if not new_records:
        return []
    records = _load_records(artifact_root)
    records.extend(new_records)
    _write_records(artifact_root, records)
    logger.info("Saved %d shifts (total %d)", len(new_records), len(records))
    return new_records


def save_schedule(
    artifact_root: Path,
    schedule: EmployeeSchedule,
    *,
    source: str | None = None,
) -> list[dict[str, Any]]:
    saved: list[dict[str, Any]] = []
    for name, entries in schedule.items():
        saved.extend(save_shifts(artifact_root, entries, employee_name=name, source=source))
    return saved


def list_shifts(artifact_root: Path, *, employee_name: str | None = None) -> list[dict[str, Any]]:
    """All stored records sorted by date then start time."""
    records = _load_records(artifact_root)
    if employee_name is not None:
        records = [r for r in records if r.get("employee_name", "") == employee_name]
    records.sort(key=_sort_key)
    return records


def shifts_between(
    artifact_root: Path,
    start: str | date,
    end: str | date,
    *,
    employee_name: str | None = None,
) -> list[dict[str, Any]]:
    """Records whose shift date lies in [start, end]."""
    first = ensure_date(start)
    last = ensure_date(end)
    if first > last:
        raise ValueError("start date is after end date")
    lo, hi = first.isoformat(), last.isoformat()
    return [
        r for r in list_shifts(artifact_root, employee_name=employee_name)
        if lo <= r.get("date", "") <= hi
    ]


def shifts_for_date(artifact_root: Path, day: str | date, *, employee_name: str | None = None) -> list[dict[str, Any]]:
    d = ensure_date(day)
    return shifts_between(artifact_root, d, d, employee_name=employee_name)


def shifts_for_week(artifact_root: Path, day: str | date, *, employee_name: str | None = None) -> list[dict[str, Any]]:
    """Records of the Sunday-to-Saturday week containing *day*."""
    days = week_days(ensure_date(day))
    return shifts_between(artifact_root, days[0], days[-1], employee_name=employee_name)


def shifts_for_month(
    artifact_root: Path,
    year: int,
    month: int,
    *,
    employee_name: str | None = None,
) -> list[dict[str, Any]]:
    first, last = month_bounds(year, month)
    return shifts_between(artifact_root, first, last, employee_name=employee_name)


def delete_shift(artifact_root: Path, shift_id: str) -> bool:
    records = _load_records(artifact_root)
    kept = [r for r in records if r.get("id") != shift_id]
    if len(kept) == len(records):
        return False
    _write_records(artifact_root, kept)
    logger.info("Deleted shift %s", shift_id)
    return True


def load_entries(records: Iterable[dict[str, Any]]) -> list[ShiftEntry]:
    """Stored records back to ShiftEntry objects (storage id kept)."""
    return [ShiftEntry.from_dict(r) for r in records]


def load_schedule(records: Iterable[dict[str, Any]]) -> EmployeeSchedule:
    schedule: EmployeeSchedule = {}
    for record in records:
        schedule.setdefault(record.get("employee_name", ""), []).append(ShiftEntry.from_dict(record))
    return schedule
