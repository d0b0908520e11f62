"""Tests for roster grid parsing."""

import logging
from datetime import date, datetime

import pytest

from extraction_core.dates import extract_all_dates
from extraction_core.grid import OFF_MARKERS, parse_row, parse_shift_table, split_row

TODAY = date(2025, 3, 14)

ROSTER = """\
シフト表 5月
5/1 5/2 5/3
鈴木 9:00-17:00 休み 10:00-18:00
佐藤 休 13:00-22:00 22:00-6:00
山田 9:00-17:00 off
"""


@pytest.fixture
def header():
    return extract_all_dates("5/1 5/2 5/3", today=TODAY)


class TestParseShiftTable:
    def test_off_marker_column_skipped(self):
        text = "5/1 5/2 5/3\n鈴木 9:00-17:00 休み 10:00-18:00"
        schedule = parse_shift_table(text, today=TODAY)
        entries = schedule["鈴木"]
        assert len(entries) == 2
        assert entries[0].date == date(2025, 5, 1)
        assert entries[0].start_time == datetime(2025, 5, 1, 9, 0)
        assert entries[1].date == date(2025, 5, 3)
        assert entries[1].end_time == datetime(2025, 5, 3, 18, 0)
        assert all(e.notes is None for e in entries)

    def test_full_roster(self):
        schedule = parse_shift_table(ROSTER, today=TODAY)
        assert list(schedule) == ["鈴木", "佐藤"]
        night = schedule["佐藤"][1]
        assert night.date == date(2025, 5, 3)
        assert night.end_time == datetime(2025, 5, 4, 6, 0)

    def test_short_row_skipped_whole(self, caplog):
        with caplog.at_level(logging.WARNING, logger="extraction_core.grid"):
            schedule = parse_shift_table(ROSTER, today=TODAY)
        assert "山田" not in schedule
        assert any("山田" in rec.getMessage() for rec in caplog.records)

    def test_two_tokens_three_dates(self):
        text = "5/1 5/2 5/3\n高橋 9:00-17:00 10:00-18:00"
        assert parse_shift_table(text, today=TODAY) == {}

    def test_bad_cell_skipped_alone(self):
        text = "5/1 5/2 5/3\n鈴木 9:00-17:00 9:00-25:00 10:00-18:00"
        entries = parse_shift_table(text, today=TODAY)["鈴木"]
        assert [e.date for e in entries] == [date(2025, 5, 1), date(2025, 5, 3)]

    def test_cell_with_glued_suffix_keeps_column(self):
        text = "5/1 5/2 5/3\n鈴木 休 9:00-17:00休 10:00-18:00"
        entries = parse_shift_table(text, today=TODAY)["鈴木"]
        assert [e.date for e in entries] == [date(2025, 5, 2), date(2025, 5, 3)]
        assert entries[0].start_time == datetime(2025, 5, 2, 9, 0)
        assert entries[1].start_time == datetime(2025, 5, 3, 10, 0)

    def test_glued_marker_does_not_count_as_extra_cell(self):
        text = "5/1 5/2 5/3\n佐藤 9:00-17:00 22:00-6:00* 10:00-18:00"
        entries = parse_shift_table(text, today=TODAY)["佐藤"]
        assert [e.date for e in entries] == [date(2025, 5, 1), date(2025, 5, 2), date(2025, 5, 3)]
        assert entries[1].end_time == datetime(2025, 5, 3, 6, 0)

    def test_row_of_only_off_markers_omitted(self):
        text = "5/1 5/2\n伊藤 休み OFF"
        assert parse_shift_table(text, today=TODAY) == {}

    def test_no_header(self):
        assert parse_shift_table("鈴木 9:00-17:00 休み 10:00-18:00", today=TODAY) == {}

    def test_extra_tokens_ignored(self):
        text = "5/1 5/2\n鈴木 9:00-17:00 10:00-18:00 13:00-22:00"
        entries = parse_shift_table(text, today=TODAY)["鈴木"]
        assert len(entries) == 2

    def test_full_name_with_space(self):
        text = "5/1 5/2\n山田 太郎 9:00-17:00 休"
        schedule = parse_shift_table(text, today=TODAY)
        assert list(schedule) == ["山田 太郎"]

    def test_repeated_name_accumulates(self):
        text = "5/1 5/2\n鈴木 9:00-17:00 休\n6/1 6/2\n鈴木 休 10:00-18:00"
        entries = parse_shift_table(text, today=TODAY)["鈴木"]
        # the second header is not used; both rows align to 5/1 5/2
        assert [e.date for e in entries] == [date(2025, 5, 1), date(2025, 5, 2)]

    def test_fullwidth_cells(self):
        text = "5/1 5/2\n鈴木 9：00～17：00 10：00〜18：00"
        entries = parse_shift_table(text, today=TODAY)["鈴木"]
        assert [e.start_time.hour for e in entries] == [9, 10]

    def test_idempotent(self):
        assert parse_shift_table(ROSTER, today=TODAY) == parse_shift_table(ROSTER, today=TODAY)


class TestSplitRow:
    def test_spaced_range_is_one_token(self):
        assert split_row("鈴木 9:00 - 17:00 休") == ("鈴木", ["9:00 - 17:00", "休"])

    def test_glued_token_stays_whole(self):
        assert split_row("鈴木 休 9:00-17:00休 off") == ("鈴木", ["休", "9:00-17:00休", "off"])

    def test_header_is_not_a_row(self):
        assert split_row("5/1 5/2 5/3") is None

    def test_off_marker_prefix_not_a_cell(self):
        assert split_row("鈴木 Office") is None

    def test_off_markers_exact(self):
        assert OFF_MARKERS == {"休", "休み", "off", "OFF", "Off"}


class TestParseRow:
    def test_not_a_row(self, header):
        assert parse_row("お知らせ: 来週から新体制", header) is None

    def test_uppercase_variant_not_folded(self, header):
        # "oFF" is not an off-marker, so it reads as part of the name
        name, entries = parse_row("鈴木 oFF 9:00-17:00 9:00-17:00 9:00-17:00", header)
        assert name == "鈴木 oFF"
        assert len(entries) == 3
