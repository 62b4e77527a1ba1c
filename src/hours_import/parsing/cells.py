"""Token helpers shared by the row classifier and shift extractor."""

from __future__ import annotations

import re

# Sunday-first weekday letters used by the timeclock export
WEEKDAY_LETTERS: tuple[str, ...] = ("א", "ב", "ג", "ד", "ה", "ו", "ש")

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_NUMBER_RE = re.compile(r"^-?\d+(?:[.,]\d+)?$")
_DECIMAL_RE = re.compile(r"^\d+[.,]\d+$")


def parse_time(cell: str) -> tuple[int, int] | None:
    """Return (hour, minute) for an ``H:MM``/``HH:MM`` token with a valid clock value."""
    match = _TIME_RE.match(cell.strip())
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def time_to_hours(hour: int, minute: int) -> float:
    return hour + minute / 60


def parse_number(cell: str) -> float | None:
    """Parse a plain numeric cell; percent labels, times and text return None."""
    text = cell.strip()
    if not _NUMBER_RE.match(text):
        return None
    return float(text.replace(",", "."))


def parse_decimal(cell: str) -> float | None:
    """Parse a number written with a fractional separator (``8.5``, ``7,25``)."""
    text = cell.strip()
    if not _DECIMAL_RE.match(text):
        return None
    return float(text.replace(",", "."))


def is_figure(cell: str) -> bool:
    """True for cells holding a number or a clock value rather than text."""
    return parse_number(cell) is not None or parse_time(cell) is not None


def first_positive_number(cells: list[str]) -> float:
    for cell in cells:
        value = parse_number(cell)
        if value is not None and value > 0:
            return value
    return 0.0
