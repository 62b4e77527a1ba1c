"""Shared test doubles: memory backends and workbook builders."""

from __future__ import annotations

from hours_import.persistence.memory_backend import (
    MemoryAttendanceStore,
    MemorySessionStore,
    MemorySupervisorNotifier,
    MemoryWorkforceDirectory,
)
from tests.fakes.workbooks import FakeClock, csv_bytes, make_record, xlsx_bytes

__all__ = [
    "FakeClock",
    "MemoryAttendanceStore",
    "MemorySessionStore",
    "MemorySupervisorNotifier",
    "MemoryWorkforceDirectory",
    "csv_bytes",
    "make_record",
    "xlsx_bytes",
]
