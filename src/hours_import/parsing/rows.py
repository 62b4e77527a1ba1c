"""Row classifier for the timeclock export.

The export is a right-to-left report: a block per worker, introduced by an
"employee:" label, followed by one row per worked day and closed by one or
more total rows. Everything else (titles, blank separators, column captions)
is noise. Classification is a pure function of the row cells plus whether the
sheet parser already holds a current worker.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Sequence

from pydantic import BaseModel

from hours_import.parsing.cells import (
    WEEKDAY_LETTERS,
    first_positive_number,
    is_figure,
    parse_time,
)
from hours_import.parsing.departments import is_department

WORKER_MARKERS = ("עובד:", "שם עובד")
DEPARTMENT_MARKER = "מחלקה"
SUMMARY_MARKERS = ('סה"כ', "סהכ", "לתשלום", "total")
HOURS_LABELS = ("שעות", "לתשלום", "hours")
PERCENT_BUCKETS = (("100%", "hours100"), ("125%", "hours125"), ("150%", "hours150"))

_NAME_RE = re.compile(r"^[^\W\d_]+(?:[\s'\-][^\W\d_]+)*$")


class RowKind(StrEnum):
    WORKER_HEADER = "worker_header"
    SHIFT_DATA = "shift_data"
    SUMMARY = "summary"
    NOISE = "noise"


class RowClassification(BaseModel):
    """Classifier verdict for one row, with whatever the row carried."""

    kind: RowKind
    name_hint: str = ""
    day_marker: str = ""
    department: str = ""
    total_hours: float = 0.0
    hours100: float = 0.0
    hours125: float = 0.0
    hours150: float = 0.0


def classify_row(cells: Sequence[str], *, has_current_worker: bool = True) -> RowClassification:
    """Classify one row of text cells.

    Args:
        cells: Row cells already rendered as stripped strings.
        has_current_worker: False until a worker header has been seen in the
            current sheet; in that state rows carrying a clock time are read
            as self-describing shift rows that name their worker.
    """
    row = [c.strip() for c in cells]
    department = _department(row)

    header_idx = next(
        (i for i, c in enumerate(row) if any(m in c for m in WORKER_MARKERS)), None
    )
    if header_idx is not None:
        return RowClassification(
            kind=RowKind.WORKER_HEADER,
            name_hint=_header_name(row, header_idx),
            department=department,
        )

    if not has_current_worker:
        return _degraded_row(row, department)

    if any(_is_summary_label(c) for c in row):
        return _summary_row(row, department)

    day = _day_marker(row)
    if day:
        return RowClassification(kind=RowKind.SHIFT_DATA, day_marker=day, department=department)

    return RowClassification(kind=RowKind.NOISE, department=department)


def _day_marker(row: list[str]) -> str:
    return next((c for c in row if c in WEEKDAY_LETTERS), "")


def _header_name(row: list[str], idx: int) -> str:
    cell = row[idx]
    if ":" in cell:
        name = cell.split(":")[-1].strip()
        if name:
            return name
    for candidate in row[idx + 1:]:
        if candidate and not is_figure(candidate) and ":" not in candidate:
            return candidate
    # RTL layout: the name often sits in the cell before the label
    if idx > 0:
        return row[idx - 1]
    return ""


def _is_summary_label(cell: str) -> bool:
    lowered = cell.lower()
    return any(m in lowered for m in SUMMARY_MARKERS)


def _summary_row(row: list[str], department: str) -> RowClassification:
    values: dict[str, float] = {}
    if any(label in c.lower() for c in row for label in HOURS_LABELS):
        values["total_hours"] = first_positive_number(row)
    for marker, field in PERCENT_BUCKETS:
        if any(marker in c for c in row):
            values[field] = first_positive_number(row)
    return RowClassification(kind=RowKind.SUMMARY, department=department, **values)


def _department(row: list[str]) -> str:
    if not any(DEPARTMENT_MARKER in c for c in row):
        return ""
    for cell in row:
        if is_department(cell):
            return cell
        if DEPARTMENT_MARKER in cell and ":" in cell:
            after = cell.split(":")[-1].strip()
            if is_department(after):
                return after
    return ""


def _looks_like_name(cell: str) -> bool:
    if len(cell) < 2 or not _NAME_RE.match(cell):
        return False
    if _is_summary_label(cell) or DEPARTMENT_MARKER in cell:
        return False
    return not is_department(cell)


def _degraded_row(row: list[str], department: str) -> RowClassification:
    """Shift row seen before any worker header: it must name its own worker."""
    if not any(parse_time(c) for c in row):
        return RowClassification(kind=RowKind.NOISE, department=department)
    name = next((c for c in row if _looks_like_name(c)), "")
    if not name:
        return RowClassification(kind=RowKind.NOISE, department=department)
    if not department:
        department = next((c for c in row if is_department(c)), "")
    return RowClassification(
        kind=RowKind.SHIFT_DATA,
        name_hint=name,
        day_marker=_day_marker(row),
        department=department,
    )
