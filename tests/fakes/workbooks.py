"""Builders for timeclock exports and session records used across tests."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timedelta, timezone
from typing import Any

from openpyxl import Workbook

from hours_import.models.preview import ImportPreview, SessionRecord
from hours_import.models.timesheet import ParsedShift, ParsedWorker

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def csv_bytes(rows: list[list[str]], encoding: str = "utf-8") -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerows(rows)
    return buf.getvalue().encode(encoding)


def xlsx_bytes(sheets: dict[str, list[list[Any]]],
               number_formats: dict[str, str] | None = None) -> bytes:
    """Build an xlsx workbook; ``number_formats`` maps "sheet!A1" to a format."""
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title=title)
        for row in rows:
            ws.append(row)
    for ref, fmt in (number_formats or {}).items():
        title, coord = ref.split("!")
        wb[title][coord].number_format = fmt
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def make_record(created_at: datetime = T0, session_id: str = "import_test") -> SessionRecord:
    worker = ParsedWorker(
        name="דנה",
        shifts=[ParsedShift(day_marker="א", total_hours=8.5)],
        total_hours=8.5,
        work_days=1,
    )
    return SessionRecord(
        preview=ImportPreview(session_id=session_id, source_file_name="hours.xlsx"),
        raw_parsed_workers=[worker],
        created_at=created_at,
    )
