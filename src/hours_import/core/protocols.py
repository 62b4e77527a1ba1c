"""Protocol interfaces for the hours import collaborators.

The workforce directory, attendance store and notification sink live outside
this service; the session store is ours but pluggable. All are structural
Protocols, so any object with the right methods can be injected.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hours_import.core.types import OrganizationId, SessionId, WorkerId
from hours_import.models.directory import DirectoryEntry, NewWorkerProfile
from hours_import.models.preview import SessionRecord
from hours_import.models.timesheet import DatedShift


# ---------------------------------------------------------------------------
# Workforce Directory
# ---------------------------------------------------------------------------

@runtime_checkable
class IWorkforceDirectory(Protocol):
    """Worker records keyed by opaque id."""

    def find_active_workers(self, organization_id: OrganizationId) -> list[DirectoryEntry]: ...

    def create_worker(self, organization_id: OrganizationId, profile: NewWorkerProfile) -> WorkerId: ...


# ---------------------------------------------------------------------------
# Attendance Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IAttendanceStore(Protocol):
    """Durable attendance / assignment records."""

    def record_hours(
        self, worker_id: WorkerId, organization_id: OrganizationId, total_hours: float, derived_from_import: bool
    ) -> None: ...

    def record_shifts(
        self, worker_id: WorkerId, organization_id: OrganizationId, shifts: list[DatedShift]
    ) -> int: ...


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

@runtime_checkable
class ISupervisorNotifier(Protocol):
    """Alerts every active supervisor of an organization."""

    def notify_supervisors(self, organization_id: OrganizationId, newly_provisioned_names: list[str]) -> None: ...


# ---------------------------------------------------------------------------
# Session Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ISessionStore(Protocol):
    """Short-lived storage for parsed-but-unapplied imports."""

    def put(self, session_id: SessionId, record: SessionRecord) -> None: ...

    def get(self, session_id: SessionId) -> SessionRecord | None: ...

    def delete(self, session_id: SessionId) -> None: ...

    def reclaim_expired(self) -> int: ...
