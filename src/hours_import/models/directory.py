"""Workforce directory models shared with the directory collaborator."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class DirectoryEntry(BaseModel):
    """An active worker as returned by the directory."""

    id: str
    first_name: str
    last_name: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class MatchCandidate(BaseModel):
    """A directory entry offered for manual selection."""

    id: str
    display_name: str

    @classmethod
    def from_entry(cls, entry: DirectoryEntry) -> MatchCandidate:
        return cls(id=entry.id, display_name=entry.display_name)


class PlaceholderCredentials(BaseModel):
    """Throwaway login for an auto-provisioned worker."""

    email: str
    password: str


class NewWorkerProfile(BaseModel):
    """Minimal directory entry created for a worker nobody could match."""

    first_name: str
    last_name: str
    credentials: PlaceholderCredentials
    job_category: Optional[str] = None  # waiter, cook, sushi, dishwasher
    tip_based: bool = False
    profile_incomplete: bool = True
