"""Apply result models."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field


class OutcomeStatus(StrEnum):
    UPDATED = "updated"
    CREATED = "created"
    FAILED = "failed"


class WorkerOutcome(BaseModel):
    """What apply did for a single spreadsheet name."""

    name: str
    directory_id: Optional[str] = None
    total_hours: float = 0.0
    status: OutcomeStatus
    is_new: bool = False
    shifts_recorded: int = 0
    error: str = ""


class ProvisionedWorker(BaseModel):
    id: str
    name: str


class ApplySummary(BaseModel):
    updated: int = 0
    created: int = 0
    failed: int = 0
    total_hours: float = 0.0
    shifts_recorded: int = 0


class ApplyResult(BaseModel):
    """Transient result of committing one import session."""

    per_worker: list[WorkerOutcome] = Field(default_factory=list)
    newly_provisioned: list[ProvisionedWorker] = Field(default_factory=list)
    summary: ApplySummary = ApplySummary()
    notified: bool = False

    @property
    def failures(self) -> list[WorkerOutcome]:
        return [o for o in self.per_worker if o.status == OutcomeStatus.FAILED]
