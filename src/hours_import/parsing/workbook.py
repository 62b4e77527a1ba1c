"""Sheet parser: drives row classification and shift extraction across a workbook."""

from __future__ import annotations

import csv
import io
import logging
import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable

import openpyxl
import pandas as pd

from hours_import.core.exceptions import NoWorkerDataError, UnsupportedFileError
from hours_import.models.timesheet import ParsedWorker
from hours_import.parsing.rows import RowKind, classify_row
from hours_import.parsing.shifts import extract_shift

logger = logging.getLogger(__name__)

_XLSX_MAGIC = b"PK\x03\x04"
_XLS_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
_CSV_ENCODINGS = ("utf-8-sig", "cp1255")

# Dates Excel attaches to a bare time-of-day value
_EXCEL_TIME_EPOCHS = {date(1899, 12, 30), date(1899, 12, 31), date(1900, 1, 1)}
# Decimal places shown by a number format such as "0.00" or "#,##0.0"
_FORMAT_DECIMALS_RE = re.compile(r"\.([0#?]+)")

Sheet = tuple[str, list[list[str]]]


def _format_number(value: float, number_format: str) -> str:
    section = number_format.split(";")[0]
    if "%" not in section:
        match = _FORMAT_DECIMALS_RE.search(section)
        if match:
            return f"{value:.{len(match.group(1))}f}"
    return str(value)


def cell_to_text(value: Any, number_format: str = "General") -> str:
    """Render one spreadsheet cell the way the export displays it.

    Numbers follow the cell's number format, so a whole value shown as
    ``6.00`` keeps its fraction.
    """
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _format_number(value, number_format or "General")
    if isinstance(value, datetime):
        if value.date() in _EXCEL_TIME_EPOCHS:
            return f"{value.hour}:{value.minute:02d}"
        return value.strftime("%d/%m/%Y")
    if isinstance(value, time):
        return f"{value.hour}:{value.minute:02d}"
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    if isinstance(value, timedelta):
        minutes = round(value.total_seconds() / 60)
        return f"{minutes // 60}:{minutes % 60:02d}"
    return str(value).strip()


def _read_xlsx(file_bytes: bytes) -> list[Sheet]:
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(file_bytes), data_only=True)
    except Exception as exc:
        raise UnsupportedFileError(f"Could not read workbook: {exc}") from exc
    sheets: list[Sheet] = []
    for worksheet in workbook.worksheets:
        rows = [
            [cell_to_text(cell.value, cell.number_format) for cell in row]
            for row in worksheet.iter_rows()
        ]
        sheets.append((worksheet.title, rows))
    workbook.close()
    return sheets


def _read_xls(file_bytes: bytes) -> list[Sheet]:
    # TODO: xlrd drops number formats here, so a whole number shown as 6.00
    # arrives as 6; read it with formatting_info=True to keep the fraction.
    try:
        frames = pd.read_excel(
            io.BytesIO(file_bytes), sheet_name=None, header=None, dtype=object, engine="xlrd",
        )
    except Exception as exc:
        raise UnsupportedFileError(f"Could not read workbook: {exc}") from exc
    sheets: list[Sheet] = []
    for sheet_name, frame in frames.items():
        rows = [
            [cell_to_text(v) for v in row]
            for row in frame.itertuples(index=False, name=None)
        ]
        sheets.append((str(sheet_name), rows))
    return sheets


def _read_csv(file_bytes: bytes) -> list[Sheet]:
    for encoding in _CSV_ENCODINGS:
        try:
            text = file_bytes.decode(encoding)
            break
        except UnicodeDecodeError:
            continue
    else:
        raise UnsupportedFileError("CSV file is not UTF-8 or Windows-1255 text")
    try:
        rows = [[c.strip() for c in row] for row in csv.reader(io.StringIO(text))]
    except csv.Error as exc:
        raise UnsupportedFileError(f"Could not read CSV: {exc}") from exc
    return [("csv", rows)]


def read_workbook(file_bytes: bytes) -> list[Sheet]:
    """Read every worksheet as rows of text cells.

    The format is detected from content: ``.xlsx`` (zip), ``.xls`` (OLE2),
    otherwise CSV.
    """
    if file_bytes.startswith(_XLSX_MAGIC):
        return _read_xlsx(file_bytes)
    if file_bytes.startswith(_XLS_MAGIC):
        return _read_xls(file_bytes)
    return _read_csv(file_bytes)


class SheetParser:
    """Accumulates one ParsedWorker per distinct name across all sheets fed to it."""

    def __init__(self) -> None:
        self._workers: list[ParsedWorker] = []
        self._by_name: dict[str, ParsedWorker] = {}

    def feed_sheet(self, rows: Iterable[list[str]]) -> None:
        current: ParsedWorker | None = None
        pending_department = ""

        for cells in rows:
            if not any(cells):
                continue
            row = classify_row(cells, has_current_worker=current is not None)

            if row.kind == RowKind.WORKER_HEADER:
                self._flush(current)
                department = row.department or pending_department
                pending_department = ""
                if row.name_hint:
                    current = ParsedWorker(name=row.name_hint, category=department)
                else:
                    logger.warning("Worker header without a name: %r", cells)
                    current = None
                continue

            if row.department:
                if current is None:
                    pending_department = row.department
                elif not current.category:
                    current.category = row.department

            if row.kind == RowKind.SHIFT_DATA:
                if current is None:
                    self._degraded_shift(cells, row.name_hint, row.day_marker, row.department)
                    continue
                shift = extract_shift(cells, row.day_marker)
                if shift is not None:
                    current.shifts.append(shift)

            elif row.kind == RowKind.SUMMARY and current is not None:
                # Summary figures win over the shift sum
                if row.total_hours > 0:
                    current.total_hours = row.total_hours
                if row.hours100 > 0:
                    current.hours100 = row.hours100
                if row.hours125 > 0:
                    current.hours125 = row.hours125
                if row.hours150 > 0:
                    current.hours150 = row.hours150

        self._flush(current)

    def finish(self) -> list[ParsedWorker]:
        for worker in self._workers:
            if worker.total_hours == 0:
                worker.total_hours = worker.shift_hours
            worker.total_hours = round(worker.total_hours, 2)
            # TODO: a work-day count read from a summary row is discarded here;
            # decide whether it should take precedence over the shift count.
            worker.work_days = len(worker.shifts)
        return self._workers

    def _register(self, worker: ParsedWorker) -> None:
        self._workers.append(worker)
        self._by_name[worker.name] = worker

    def _flush(self, block: ParsedWorker | None) -> None:
        if block is None:
            return
        if block.total_hours == 0:
            block.total_hours = block.shift_hours
        existing = self._by_name.get(block.name)
        if existing is None:
            self._register(block)
            return
        existing.shifts.extend(block.shifts)
        existing.total_hours = round(existing.total_hours + block.total_hours, 2)
        existing.hours100 += block.hours100
        existing.hours125 += block.hours125
        existing.hours150 += block.hours150
        if not existing.category:
            existing.category = block.category

    def _degraded_shift(self, cells: list[str], name: str, day: str, department: str) -> None:
        worker = self._by_name.get(name)
        if worker is None:
            worker = ParsedWorker(name=name, category=department)
            self._register(worker)
        elif department and not worker.category:
            worker.category = department
        shift = extract_shift(cells, day)
        if shift is not None:
            worker.shifts.append(shift)
            worker.total_hours = round(worker.total_hours + shift.total_hours, 2)


def parse_workbook(file_bytes: bytes, file_name: str = "") -> list[ParsedWorker]:
    """Parse a timeclock export into one aggregate record per worker name.

    Raises:
        UnsupportedFileError: The bytes are not a readable workbook or CSV.
        NoWorkerDataError: No worker could be found in any sheet.
    """
    parser = SheetParser()
    for sheet_name, rows in read_workbook(file_bytes):
        logger.debug("Scanning sheet %r (%d rows)", sheet_name, len(rows))
        parser.feed_sheet(rows)
    workers = parser.finish()
    if not workers:
        raise NoWorkerDataError(file_name)
    logger.info(
        "Parsed %d workers, %d shifts from %r",
        len(workers), sum(len(w.shifts) for w in workers), file_name or "<upload>",
    )
    return workers
