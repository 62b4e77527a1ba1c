"""Timeclock export parsing: row classification, shift extraction, sheet scanning."""

from __future__ import annotations

from hours_import.parsing.rows import RowClassification, RowKind, classify_row
from hours_import.parsing.shifts import extract_shift
from hours_import.parsing.workbook import SheetParser, parse_workbook, read_workbook

__all__ = [
    "RowClassification",
    "RowKind",
    "SheetParser",
    "classify_row",
    "extract_shift",
    "parse_workbook",
    "read_workbook",
]
