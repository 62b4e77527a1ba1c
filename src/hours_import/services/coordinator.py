"""Import coordinator: upload -> preview and preview -> apply."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from hours_import.core.config import AppSettings
from hours_import.core.exceptions import SessionNotFoundError
from hours_import.core.protocols import (
    IAttendanceStore,
    ISessionStore,
    ISupervisorNotifier,
    IWorkforceDirectory,
)
from hours_import.matching.matcher import match_workers
from hours_import.models.apply import (
    ApplyResult,
    ApplySummary,
    OutcomeStatus,
    ProvisionedWorker,
    WorkerOutcome,
)
from hours_import.models.directory import MatchCandidate
from hours_import.models.preview import ImportPreview, MatchedWorker, PreviewSummary, SessionRecord
from hours_import.parsing.workbook import parse_workbook
from hours_import.services.provisioning import FirstNameAllocator, build_profile
from hours_import.services.schedule import distribute_shifts, parse_month

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return f"import_{secrets.token_urlsafe(24)}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ImportCoordinator:
    """Orchestrates timesheet imports against the injected collaborators.

    Collaborators are injected at construction time: the workforce directory,
    the attendance store, the supervisor notifier and the session store. The
    session store is the only shared mutable state; everything else here is
    per call.
    """

    def __init__(
        self,
        *,
        directory: IWorkforceDirectory,
        attendance: IAttendanceStore,
        notifier: ISupervisorNotifier,
        session_store: ISessionStore,
        settings: AppSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._directory = directory
        self._attendance = attendance
        self._notifier = notifier
        self._sessions = session_store
        self._settings = settings or AppSettings()
        self._clock = clock or _utcnow

    # ---- upload ----

    def upload_and_preview(
        self,
        file_bytes: bytes,
        file_name: str,
        organization_id: str,
        overrides: Mapping[str, str] | None = None,
        month: str | None = None,
    ) -> ImportPreview:
        """Parse and match an upload and keep it as a session awaiting apply.

        Raises:
            NoWorkerDataError: The file holds no worker data; no session is created.
            UnsupportedFileError: The bytes are not a readable workbook.
            InvalidMonthError: ``month`` is not YYYY-MM.
        """
        reclaimed = self._sessions.reclaim_expired()
        if reclaimed:
            logger.info("Reclaimed %d expired import sessions", reclaimed)

        if month:
            parse_month(month)

        parsed = parse_workbook(file_bytes, file_name)
        snapshot = self._directory.find_active_workers(organization_id)
        matched = match_workers(
            parsed, snapshot, overrides, self._settings.provisioning.placeholder_last_name
        )

        preview = ImportPreview(
            session_id=new_session_id(),
            source_file_name=file_name,
            workers=matched,
            summary=PreviewSummary.from_workers(matched),
        )
        self._sessions.put(
            preview.session_id,
            SessionRecord(
                preview=preview,
                raw_parsed_workers=parsed,
                created_at=self._clock(),
                month=month or None,
            ),
        )
        logger.info(
            "Import session %s for org %s: %d workers (%d matched, %d unmatched)",
            preview.session_id, organization_id, preview.summary.total_workers,
            preview.summary.matched, preview.summary.unmatched,
        )
        return preview

    # ---- apply ----

    def apply(
        self,
        session_id: str,
        organization_id: str,
        final_mapping: Mapping[str, str] | None = None,
        month: str | None = None,
    ) -> ApplyResult:
        """Commit a previewed import using the human-confirmed name mapping.

        Matching is re-run on the session's raw parse with ``final_mapping``.
        Unresolved workers are auto-provisioned. A failing worker is reported
        as ``failed`` without stopping the batch; earlier writes stay
        committed. The session is deleted afterwards, so apply runs once.

        Raises:
            SessionNotFoundError: Unknown or expired session; the caller must re-upload.
        """
        record = self._sessions.get(session_id)
        if record is None:
            raise SessionNotFoundError(session_id)

        effective_month = month or record.month
        if effective_month:
            parse_month(effective_month)

        snapshot = self._directory.find_active_workers(organization_id)
        matched = match_workers(
            record.raw_parsed_workers, snapshot, final_mapping,
            self._settings.provisioning.placeholder_last_name,
        )
        allocator = FirstNameAllocator(snapshot)

        result = ApplyResult()
        for worker in matched:
            outcome = self._apply_worker(worker, organization_id, allocator, effective_month)
            result.per_worker.append(outcome)
            if outcome.is_new and outcome.directory_id is not None:
                result.newly_provisioned.append(
                    ProvisionedWorker(id=outcome.directory_id, name=worker.name)
                )

        if result.newly_provisioned:
            result.notified = self._notify(
                organization_id, [p.name for p in result.newly_provisioned]
            )

        result.summary = ApplySummary(
            updated=sum(1 for o in result.per_worker if o.status == OutcomeStatus.UPDATED),
            created=sum(1 for o in result.per_worker if o.status == OutcomeStatus.CREATED),
            failed=len(result.failures),
            total_hours=round(
                sum(o.total_hours for o in result.per_worker if o.status != OutcomeStatus.FAILED), 2
            ),
            shifts_recorded=sum(o.shifts_recorded for o in result.per_worker),
        )

        self._sessions.delete(session_id)
        logger.info(
            "Applied import session %s for org %s: %d updated, %d created, %d failed",
            session_id, organization_id, result.summary.updated,
            result.summary.created, result.summary.failed,
        )
        return result

    def _apply_worker(
        self,
        worker: MatchedWorker,
        organization_id: str,
        allocator: FirstNameAllocator,
        month: str | None,
    ) -> WorkerOutcome:
        directory_id = worker.matched_directory_id if worker.is_resolved else None
        is_new = directory_id is None
        try:
            if directory_id is None:
                profile = build_profile(worker, allocator, self._settings.provisioning)
                directory_id = self._directory.create_worker(organization_id, profile)
                logger.info(
                    "Provisioned worker %s as %r for spreadsheet name %r",
                    directory_id, profile.first_name, worker.name,
                )

            self._attendance.record_hours(
                directory_id, organization_id, worker.total_hours, derived_from_import=True
            )
            shifts_recorded = 0
            if month:
                dated = distribute_shifts(month, worker.shifts)
                if dated:
                    shifts_recorded = self._attendance.record_shifts(
                        directory_id, organization_id, dated
                    )
        except Exception as exc:
            logger.exception("Failed to apply hours for %r", worker.name)
            return WorkerOutcome(
                name=worker.name,
                directory_id=directory_id,
                total_hours=worker.total_hours,
                status=OutcomeStatus.FAILED,
                is_new=is_new and directory_id is not None,
                error=str(exc),
            )

        return WorkerOutcome(
            name=worker.name,
            directory_id=directory_id,
            total_hours=worker.total_hours,
            status=OutcomeStatus.CREATED if is_new else OutcomeStatus.UPDATED,
            is_new=is_new,
            shifts_recorded=shifts_recorded,
        )

    def _notify(self, organization_id: str, names: list[str]) -> bool:
        try:
            self._notifier.notify_supervisors(organization_id, names)
        except Exception:
            logger.exception("Supervisor notification failed for org %s", organization_id)
            return False
        return True

    # ---- directory ----

    def list_directory(self, organization_id: str) -> list[MatchCandidate]:
        """Active workers offered for manual matching, sorted by name."""
        entries = self._directory.find_active_workers(organization_id)
        return sorted(
            (MatchCandidate.from_entry(e) for e in entries), key=lambda c: c.display_name
        )

    def health_check(self) -> dict[str, Any]:
        return {
            "service": self.__class__.__name__,
            "status": "healthy",
            "environment": self._settings.environment,
            "session_backend": self._settings.session.backend,
        }
