"""In-memory backends: the single-process session store and dict-backed collaborator fakes."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

from hours_import.models.directory import DirectoryEntry, NewWorkerProfile
from hours_import.models.preview import SessionRecord
from hours_import.models.timesheet import DatedShift


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemorySessionStore:
    """Lock-guarded dict implementing ISessionStore for one process.

    Expired records are invisible to ``get`` but stay in memory until
    ``reclaim_expired`` runs, which the coordinator does at the start of each
    upload. With no uploads, nothing is reclaimed.
    """

    def __init__(self, ttl_seconds: int = 1800,
                 clock: Callable[[], datetime] | None = None) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        self._records: dict[str, SessionRecord] = {}

    def _expired(self, record: SessionRecord, now: datetime) -> bool:
        return now - record.created_at > self._ttl

    def put(self, session_id: str, record: SessionRecord) -> None:
        with self._lock:
            self._records[session_id] = record

    def get(self, session_id: str) -> SessionRecord | None:
        with self._lock:
            record = self._records.get(session_id)
        if record is None or self._expired(record, self._clock()):
            return None
        return record

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def reclaim_expired(self) -> int:
        now = self._clock()
        with self._lock:
            stale = [k for k, r in self._records.items() if self._expired(r, now)]
            for key in stale:
                del self._records[key]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class MemoryWorkforceDirectory:
    """Dict-backed IWorkforceDirectory for unit tests."""

    def __init__(self) -> None:
        self._entries: dict[str, list[tuple[DirectoryEntry, bool]]] = {}
        self.created: dict[str, NewWorkerProfile] = {}
        self._next_id = 1

    def add(self, organization_id: str, first_name: str, last_name: str = "",
            worker_id: str | None = None, active: bool = True) -> DirectoryEntry:
        if worker_id is None:
            worker_id = f"w{self._next_id}"
            self._next_id += 1
        entry = DirectoryEntry(id=worker_id, first_name=first_name, last_name=last_name)
        self._entries.setdefault(organization_id, []).append((entry, active))
        return entry

    def find_active_workers(self, organization_id: str) -> list[DirectoryEntry]:
        return [e for e, active in self._entries.get(organization_id, []) if active]

    def create_worker(self, organization_id: str, profile: NewWorkerProfile) -> str:
        entry = self.add(organization_id, profile.first_name, profile.last_name)
        self.created[entry.id] = profile
        return entry.id


class MemoryAttendanceStore:
    """List-backed IAttendanceStore for unit tests."""

    def __init__(self) -> None:
        self.hours: list[tuple[str, str, float, bool]] = []
        self.shifts: dict[str, list[DatedShift]] = {}

    def record_hours(self, worker_id: str, organization_id: str, total_hours: float,
                     derived_from_import: bool) -> None:
        self.hours.append((worker_id, organization_id, total_hours, derived_from_import))

    def record_shifts(self, worker_id: str, organization_id: str,
                      shifts: list[DatedShift]) -> int:
        self.shifts.setdefault(worker_id, []).extend(shifts)
        return len(shifts)


class MemorySupervisorNotifier:
    """Records ISupervisorNotifier calls for unit tests."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []

    def notify_supervisors(self, organization_id: str, newly_provisioned_names: list[str]) -> None:
        self.calls.append((organization_id, list(newly_provisioned_names)))
