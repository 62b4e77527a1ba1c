"""Shift extraction from a classified shift data row."""

from __future__ import annotations

from typing import Sequence

from hours_import.models.timesheet import ParsedShift
from hours_import.parsing.cells import format_time, parse_decimal, parse_time, time_to_hours

# H:MM values in this range are shift-length candidates
DURATION_CLOCK_RANGE = (3.0, 18.0)
# Earlier H:MM values are never entry or exit times in this export
MIN_CLOCK_HOUR = 6
MAX_DECIMAL_HOURS = 24.0


class ClockToken:
    __slots__ = ("hour", "minute")

    def __init__(self, hour: int, minute: int) -> None:
        self.hour = hour
        self.minute = minute

    @property
    def hours(self) -> float:
        return time_to_hours(self.hour, self.minute)

    def __str__(self) -> str:
        return format_time(self.hour, self.minute)


def rtl_entry_exit(tokens: list[ClockToken]) -> tuple[ClockToken | None, ClockToken | None]:
    """Pick (entry, exit) clock tokens under the export's right-to-left column order.

    The report prints ... | total | exit | entry | date, so scanning cells in
    sheet order yields the exit before the entry: the last clock token is the
    entry (start) and the one before it the exit (end). A single token is
    taken as the entry. This rule belongs to this export layout only.
    """
    if len(tokens) >= 2:
        return tokens[-1], tokens[-2]
    if len(tokens) == 1:
        return tokens[0], None
    return None, None


def clock_span(start: ClockToken, end: ClockToken) -> float:
    """Hours from start to end, wrapping past midnight."""
    span = end.hours - start.hours
    if span < 0:
        span += 24
    return span


def extract_shift(cells: Sequence[str], day_marker: str) -> ParsedShift | None:
    """Derive start/end times and duration from one shift row.

    Returns None when the row has no positive duration.
    """
    tokens: list[ClockToken] = []
    decimals: list[float] = []
    for cell in cells:
        text = cell.strip()
        if not text or text == "0":
            continue
        clock = parse_time(text)
        if clock is not None:
            tokens.append(ClockToken(*clock))
            continue
        value = parse_decimal(text)
        if value is not None and 0 < value < MAX_DECIMAL_HOURS:
            decimals.append(value)

    start, end = rtl_entry_exit([t for t in tokens if t.hour >= MIN_CLOCK_HOUR])

    # The export renders shift length either as 5.36 or as 5:22
    low, high = DURATION_CLOCK_RANGE
    candidates = list(decimals)
    candidates.extend(
        t.hours for t in tokens if t is not start and t is not end and low < t.hours < high
    )
    total = max(candidates, default=0.0)

    if total <= 0 and start is not None and end is not None:
        total = clock_span(start, end)

    total = round(total, 2)
    if total <= 0:
        return None

    return ParsedShift(
        day_marker=day_marker,
        total_hours=total,
        start_time=str(start) if start is not None else None,
        end_time=str(end) if end is not None else None,
    )
