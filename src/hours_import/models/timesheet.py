"""Records produced by parsing a timeclock export.

Every sheet of the export, regardless of how loosely it is laid out, is
reduced to one ``ParsedWorker`` per distinct name with its ordered shifts.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ParsedShift(BaseModel):
    """One day of attendance read from a shift data row."""

    model_config = {"frozen": True}

    day_marker: str = ""  # Hebrew weekday letter, empty for degraded rows
    total_hours: float
    start_time: Optional[str] = None  # "HH:MM"
    end_time: Optional[str] = None  # "HH:MM"


class ParsedWorker(BaseModel):
    """Aggregate of everything the export says about one worker name."""

    name: str
    category: str = ""  # Department label from the export, e.g. "טבח"
    shifts: list[ParsedShift] = Field(default_factory=list)
    total_hours: float = 0.0
    hours100: float = 0.0
    hours125: float = 0.0
    hours150: float = 0.0
    work_days: int = 0

    @property
    def shift_hours(self) -> float:
        """Sum of the parsed shift durations."""
        return round(sum(s.total_hours for s in self.shifts), 2)


class DatedShift(BaseModel):
    """A parsed shift placed on a concrete calendar date."""

    shift_date: date
    shift: ParsedShift
