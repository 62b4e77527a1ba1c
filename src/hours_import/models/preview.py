"""Preview and session models for the upload -> apply workflow."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from hours_import.models.directory import MatchCandidate
from hours_import.models.timesheet import ParsedWorker


class MatchStatus(StrEnum):
    MATCHED = "matched"
    PARTIAL = "partial"
    UNMATCHED = "unmatched"


class MatchedWorker(ParsedWorker):
    """A parsed worker resolved (or not) against the directory."""

    matched_directory_id: Optional[str] = None
    matched_display_name: Optional[str] = None
    match_status: MatchStatus = MatchStatus.UNMATCHED
    candidates: list[MatchCandidate] = Field(default_factory=list)

    @property
    def is_resolved(self) -> bool:
        """True when apply should commit against an existing directory id."""
        return self.matched_directory_id is not None and self.match_status != MatchStatus.UNMATCHED


class PreviewSummary(BaseModel):
    total_workers: int = 0
    matched: int = 0
    unmatched: int = 0
    total_hours: float = 0.0
    total_shifts: int = 0

    @classmethod
    def from_workers(cls, workers: list[MatchedWorker]) -> PreviewSummary:
        return cls(
            total_workers=len(workers),
            matched=sum(1 for w in workers if w.match_status == MatchStatus.MATCHED),
            unmatched=sum(1 for w in workers if w.match_status == MatchStatus.UNMATCHED),
            total_hours=round(sum(w.total_hours for w in workers), 2),
            total_shifts=sum(len(w.shifts) for w in workers),
        )


class ImportPreview(BaseModel):
    """Parsed-and-matched upload awaiting confirmation."""

    session_id: str
    source_file_name: str
    workers: list[MatchedWorker] = Field(default_factory=list)
    summary: PreviewSummary = PreviewSummary()


class SessionRecord(BaseModel):
    """Everything apply needs to re-run matching for one upload."""

    preview: ImportPreview
    raw_parsed_workers: list[ParsedWorker] = Field(default_factory=list)
    created_at: datetime
    month: Optional[str] = None  # "YYYY-MM"
