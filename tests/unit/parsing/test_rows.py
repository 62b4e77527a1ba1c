"""Tests for the row classifier."""

from __future__ import annotations

from hours_import.parsing.rows import RowKind, classify_row


class TestWorkerHeader:
    def test_name_after_label_in_same_cell(self):
        row = classify_row(["עובד: דנה"])
        assert row.kind == RowKind.WORKER_HEADER
        assert row.name_hint == "דנה"

    def test_name_in_following_text_cell(self):
        row = classify_row(["שם עובד:", "123", "12:00", "יובל כהן"])
        assert row.kind == RowKind.WORKER_HEADER
        assert row.name_hint == "יובל כהן"

    def test_name_in_preceding_cell_for_rtl_layout(self):
        row = classify_row(["יובל", "שם עובד"])
        assert row.name_hint == "יובל"

    def test_header_wins_before_any_worker(self):
        row = classify_row(["עובד: משה"], has_current_worker=False)
        assert row.kind == RowKind.WORKER_HEADER
        assert row.name_hint == "משה"


class TestShiftData:
    def test_weekday_letter_marks_shift_row(self):
        row = classify_row(["ב", "8.5", "17:00", "08:30"])
        assert row.kind == RowKind.SHIFT_DATA
        assert row.day_marker == "ב"

    def test_weekday_inside_word_is_not_a_marker(self):
        assert classify_row(["שבת"]).kind == RowKind.NOISE

    def test_row_before_header_names_its_worker(self):
        row = classify_row(["אחמשית", "יובל", "א", "5.36", "19:00"], has_current_worker=False)
        assert row.kind == RowKind.SHIFT_DATA
        assert row.name_hint == "יובל"
        assert row.day_marker == "א"
        assert row.department == "אחמשית"

    def test_row_before_header_without_time_is_noise(self):
        row = classify_row(["יובל", "א", "5.36"], has_current_worker=False)
        assert row.kind == RowKind.NOISE


class TestSummary:
    def test_total_hours_label(self):
        row = classify_row(['סה"כ שעות', "", "42.5"])
        assert row.kind == RowKind.SUMMARY
        assert row.total_hours == 42.5

    def test_percentage_bucket(self):
        row = classify_row(['סה"כ 125%', "6.5"])
        assert row.kind == RowKind.SUMMARY
        assert row.hours125 == 6.5
        assert row.hours100 == 0.0
        assert row.total_hours == 0.0

    def test_english_total_label(self):
        row = classify_row(["Total hours", "40.25"])
        assert row.kind == RowKind.SUMMARY
        assert row.total_hours == 40.25

    def test_work_days_total_does_not_set_hours(self):
        row = classify_row(['סה"כ ימי עבודה', "22"])
        assert row.kind == RowKind.SUMMARY
        assert row.total_hours == 0.0


class TestNoise:
    def test_title_row(self):
        assert classify_row(["דוח נוכחות חודשי"]).kind == RowKind.NOISE

    def test_department_row_carries_department(self):
        row = classify_row(["מחלקה:", "טבח"])
        assert row.kind == RowKind.NOISE
        assert row.department == "טבח"

    def test_department_after_colon(self):
        assert classify_row(["מחלקה: סושימן"]).department == "סושימן"
