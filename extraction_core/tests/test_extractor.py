"""Tests for the mode entry points."""

import asyncio
from datetime import date

from extraction_core import extract, extract_async, extract_table, extract_table_async

TODAY = date(2025, 3, 14)

NOTICE = """\
【5月シフトのお知らせ】
2024/05/10
田中 9:00-17:00
佐藤 13:00-22:00
2024/05/11
田中 22:00～6:00 夜勤
"""

ROSTER = """\
5/1 5/2 5/3
鈴木 9:00-17:00 休み 10:00-18:00
"""


class TestExtract:
    def test_free_form(self):
        entries = extract(NOTICE, "田中", today=TODAY)
        assert [e.date for e in entries] == [date(2024, 5, 10), date(2024, 5, 11)]
        assert entries[1].notes == "夜勤"
        assert entries[1].end_time.date() == date(2024, 5, 12)

    def test_empty_inputs(self):
        assert extract("", "田中") == []
        assert extract(NOTICE, "") == []

    def test_idempotent(self):
        assert extract(NOTICE, "田中", today=TODAY) == extract(NOTICE, "田中", today=TODAY)

    def test_identity_not_part_of_equality(self):
        first = extract(NOTICE, "田中", today=TODAY)
        second = extract(NOTICE, "田中", today=TODAY)
        assert first[0].id != second[0].id
        assert first[0] == second[0]

    def test_modes_not_mixed(self):
        # free-form mode reads a roster as prose: one entry per name line
        entries = extract(ROSTER, "鈴木", today=TODAY)
        assert len(entries) == 1
        assert entries[0].date == date(2025, 5, 1)


class TestExtractTable:
    def test_grid(self):
        schedule = extract_table(ROSTER, today=TODAY)
        assert list(schedule) == ["鈴木"]
        assert len(schedule["鈴木"]) == 2

    def test_free_form_text_has_no_table(self):
        assert extract_table(NOTICE, today=TODAY) == {}

    def test_empty(self):
        assert extract_table("") == {}


class TestAsync:
    def test_extract_async(self):
        entries = asyncio.run(extract_async(NOTICE, "田中", today=TODAY))
        assert entries == extract(NOTICE, "田中", today=TODAY)

    def test_extract_table_async(self):
        schedule = asyncio.run(extract_table_async(ROSTER, today=TODAY))
        assert schedule == extract_table(ROSTER, today=TODAY)
