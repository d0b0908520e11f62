"""Value types shared by the extractors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class Line:
    index: int
    text: str


@dataclass(frozen=True)
class DateToken:
    """A calendar date found on one line, with the substring it came from."""

    line_index: int
    date: date
    text: str
    span: tuple[int, int]


@dataclass(frozen=True)
class TimeRange:
    """Start/end time of day. ``end`` may be earlier than ``start``."""

    start: time
    end: time
    text: str = field(default="", compare=False)
    span: tuple[int, int] = field(default=(0, 0), compare=False)

    @property
    def crosses_midnight(self) -> bool:
        return self.end.hour < self.start.hour


@dataclass(frozen=True)
class ShiftEntry:
    date: date
    start_time: datetime
    end_time: datetime
    notes: str | None = None
    id: str = field(default_factory=lambda: uuid4().hex, compare=False)

    @property
    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() // 60)

    @property
    def hours(self) -> float:
        return self.duration_minutes / 60.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "start_time": self.start_time.isoformat(timespec="minutes"),
            "end_time": self.end_time.isoformat(timespec="minutes"),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> ShiftEntry:
        """Rebuild an entry from ``to_dict()`` output. Raises ValueError on bad dates."""
        kwargs: dict[str, Any] = {
            "date": date.fromisoformat(str(row["date"])),
            "start_time": datetime.fromisoformat(str(row["start_time"])),
            "end_time": datetime.fromisoformat(str(row["end_time"])),
            "notes": row.get("notes") or None,
        }
        if row.get("id"):
            kwargs["id"] = str(row["id"])
        return cls(**kwargs)


EmployeeSchedule = dict[str, list[ShiftEntry]]


def split_lines(text: str | None) -> list[Line]:
    """Split raw OCR text on line breaks, keeping each line's 0-based index."""
    if not text:
        return []
    return [Line(index=i, text=raw) for i, raw in enumerate(text.splitlines())]
