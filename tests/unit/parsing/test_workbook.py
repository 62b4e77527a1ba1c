"""Tests for reading workbooks and the sheet parser."""

from __future__ import annotations

import math
from datetime import datetime, time, timedelta

import pytest

from hours_import.core.exceptions import NoWorkerDataError, UnsupportedFileError
from hours_import.parsing.workbook import cell_to_text, parse_workbook, read_workbook
from tests.fakes import csv_bytes, xlsx_bytes

SCENARIO_A = [
    ["דוח נוכחות"],
    ["עובד: דנה"],
    ["א", "8.5"],
    ["ב", "7.25"],
    ["ג", "6.0"],
]


class TestCellToText:
    def test_time_of_day(self):
        assert cell_to_text(time(7, 5)) == "7:05"

    def test_excel_epoch_datetime_is_a_time(self):
        assert cell_to_text(datetime(1899, 12, 30, 23, 0)) == "23:00"

    def test_calendar_date(self):
        assert cell_to_text(datetime(2024, 3, 1)) == "01/03/2024"

    def test_duration(self):
        assert cell_to_text(timedelta(hours=5, minutes=22)) == "5:22"

    def test_blank_values(self):
        assert cell_to_text(None) == ""
        assert cell_to_text(math.nan) == ""

    def test_general_numbers(self):
        assert cell_to_text(8.5) == "8.5"
        assert cell_to_text(6) == "6"

    def test_whole_number_follows_decimal_format(self):
        assert cell_to_text(6, "0.00") == "6.00"
        assert cell_to_text(1234, "#,##0.0") == "1234.0"

    def test_percent_format_is_not_rescaled(self):
        assert cell_to_text(1, "0.00%") == "1"


class TestReadWorkbook:
    def test_csv_single_sheet(self):
        sheets = read_workbook(csv_bytes([["עובד: דנה"], ["א", "8.5"]]))
        assert len(sheets) == 1
        assert sheets[0][1][1] == ["א", "8.5"]

    def test_csv_windows_hebrew_encoding(self):
        sheets = read_workbook(csv_bytes([["עובד: דנה"]], encoding="cp1255"))
        assert sheets[0][1][0] == ["עובד: דנה"]

    def test_xlsx_every_sheet(self):
        data = xlsx_bytes({"one": [["עובד: דנה"]], "two": [["עובד: משה"]]})
        assert [name for name, _ in read_workbook(data)] == ["one", "two"]

    def test_corrupt_xlsx_raises(self):
        with pytest.raises(UnsupportedFileError):
            read_workbook(b"PK\x03\x04not really a zip")


class TestParseWorkbook:
    def test_header_followed_by_three_shifts(self):
        workers = parse_workbook(csv_bytes(SCENARIO_A))
        assert len(workers) == 1
        dana = workers[0]
        assert dana.name == "דנה"
        assert dana.total_hours == 21.75
        assert dana.work_days == 3
        assert [s.day_marker for s in dana.shifts] == ["א", "ב", "ג"]

    def test_summary_rows_override_shift_sum(self):
        rows = [
            ["עובד: יובל"],
            ["א", "5.5"],
            ["ב", "6.5"],
            ['סה"כ שעות', "20.0"],
            ['סה"כ 100%', "18.0"],
            ['סה"כ 125%', "2.0"],
        ]
        (worker,) = parse_workbook(csv_bytes(rows))
        assert worker.total_hours == 20.0
        assert worker.hours100 == 18.0
        assert worker.hours125 == 2.0
        assert worker.hours150 == 0.0
        assert worker.work_days == 2

    def test_worker_header_flushes_previous_worker(self):
        rows = [
            ["עובד: דנה"],
            ["א", "8.5"],
            ["עובד: משה"],
            ["ב", "4.5"],
            ["ג", "3.5"],
        ]
        workers = parse_workbook(csv_bytes(rows))
        assert [(w.name, w.total_hours, w.work_days) for w in workers] == [
            ("דנה", 8.5, 1),
            ("משה", 8.0, 2),
        ]

    def test_rows_without_header_create_workers_by_name(self):
        rows = [
            ["אחמשית", "יובל", "א", "5.36", "19:00"],
            ["אחמשית", "יובל", "ב", "6.26", "18:30"],
            ["טבח", "משה", "א", "7.5", "11:00"],
        ]
        workers = parse_workbook(csv_bytes(rows))
        assert [w.name for w in workers] == ["יובל", "משה"]
        yuval, moshe = workers
        assert yuval.total_hours == 11.62
        assert yuval.work_days == 2
        assert yuval.category == "אחמשית"
        assert moshe.category == "טבח"
        assert moshe.shifts[0].start_time == "11:00"

    def test_department_row_applies_to_next_worker(self):
        rows = [["מחלקה:", "טבח"], ["עובד: משה"], ["א", "7.5"]]
        (worker,) = parse_workbook(csv_bytes(rows))
        assert worker.category == "טבח"

    def test_same_name_across_sheets_is_one_worker(self):
        data = xlsx_bytes({
            "week1": [["עובד: דנה"], ["א", 8.5]],
            "week2": [["עובד: דנה"], ["ב", 7.25], ["עובד: משה"], ["ג", 6.75]],
        })
        workers = parse_workbook(data)
        assert [w.name for w in workers] == ["דנה", "משה"]
        assert workers[0].total_hours == 15.75
        assert workers[0].work_days == 2

    def test_xlsx_time_cells(self):
        data = xlsx_bytes({"hours": [["עובד: דנה"], ["ב", 8.5, time(17, 0), time(8, 30)]]})
        (worker,) = parse_workbook(data)
        shift = worker.shifts[0]
        assert (shift.start_time, shift.end_time, shift.total_hours) == ("08:30", "17:00", 8.5)

    def test_xlsx_whole_hours_shown_with_decimals(self):
        data = xlsx_bytes(
            {"hours": [["עובד: דנה"], ["א", 8.5], ["ב", 7.25], ["ג", 6]]},
            number_formats={"hours!B4": "0.00"},
        )
        (worker,) = parse_workbook(data)
        assert [s.total_hours for s in worker.shifts] == [8.5, 7.25, 6.0]
        assert worker.total_hours == 21.75
        assert worker.work_days == 3

    def test_no_workers_is_an_error(self):
        with pytest.raises(NoWorkerDataError):
            parse_workbook(csv_bytes([["דוח"], ["שלום"]]), "empty.csv")

    def test_empty_file_is_an_error(self):
        with pytest.raises(NoWorkerDataError):
            parse_workbook(b"")
