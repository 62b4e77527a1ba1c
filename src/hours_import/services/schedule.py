"""Placement of weekday-marked shifts onto the dates of a month."""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import Sequence

from hours_import.core.exceptions import InvalidMonthError
from hours_import.models.timesheet import DatedShift, ParsedShift
from hours_import.parsing.cells import WEEKDAY_LETTERS

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(month: str) -> tuple[int, int]:
    match = _MONTH_RE.match(month.strip())
    if match is None:
        raise InvalidMonthError(month)
    year, month_no = int(match.group(1)), int(match.group(2))
    if not 1 <= month_no <= 12:
        raise InvalidMonthError(month)
    return year, month_no


def weekday_dates(year: int, month: int, day_marker: str) -> list[date]:
    """All dates in the month falling on the weekday the marker names (א = Sunday)."""
    sunday_index = WEEKDAY_LETTERS.index(day_marker)
    _, days = calendar.monthrange(year, month)
    return [
        date(year, month, d)
        for d in range(1, days + 1)
        if (date(year, month, d).weekday() + 1) % 7 == sunday_index
    ]


def distribute_shifts(month: str, shifts: Sequence[ParsedShift]) -> list[DatedShift]:
    """Place the n-th shift of each weekday on the n-th such date of the month.

    Shifts without a weekday marker, or beyond the month's dates for their
    weekday, are dropped.
    """
    year, month_no = parse_month(month)
    by_day: dict[str, list[ParsedShift]] = {}
    for shift in shifts:
        if shift.day_marker in WEEKDAY_LETTERS:
            by_day.setdefault(shift.day_marker, []).append(shift)

    dated: list[DatedShift] = []
    for day_marker, day_shifts in by_day.items():
        dates = weekday_dates(year, month_no, day_marker)
        dated.extend(DatedShift(shift_date=d, shift=s) for d, s in zip(dates, day_shifts))
    dated.sort(key=lambda d: d.shift_date)
    return dated
