"""Auto-provisioning of directory entries for workers nobody could match."""

from __future__ import annotations

import secrets
from typing import Iterable

from hours_import.core.config import ProvisioningConfig
from hours_import.models.directory import DirectoryEntry, NewWorkerProfile, PlaceholderCredentials
from hours_import.models.timesheet import ParsedWorker
from hours_import.parsing.departments import lookup_department


def split_name(name: str, placeholder_last_name: str = "-") -> tuple[str, str]:
    """Best-effort split: first token is the first name, the rest the last name."""
    parts = name.split()
    if not parts:
        return name.strip(), placeholder_last_name
    if len(parts) == 1:
        return parts[0], placeholder_last_name
    return parts[0], " ".join(parts[1:])


def placeholder_credentials(config: ProvisioningConfig) -> PlaceholderCredentials:
    return PlaceholderCredentials(
        email=f"worker_{secrets.token_hex(8)}@{config.email_domain}",
        password=secrets.token_urlsafe(config.password_length),
    )


class FirstNameAllocator:
    """Numbers colliding first names: "יובל" -> "יובל 2" -> "יובל 3".

    Collisions count active directory entries plus names already handed out
    in the current batch.
    """

    def __init__(self, directory: Iterable[DirectoryEntry]) -> None:
        self._existing: dict[str, int] = {}
        for entry in directory:
            key = entry.first_name.strip()
            self._existing[key] = self._existing.get(key, 0) + 1
        self._batch: dict[str, int] = {}

    def allocate(self, first_name: str) -> str:
        taken = self._existing.get(first_name, 0) + self._batch.get(first_name, 0)
        self._batch[first_name] = self._batch.get(first_name, 0) + 1
        if taken:
            return f"{first_name} {taken + 1}"
        return first_name


def build_profile(worker: ParsedWorker, allocator: FirstNameAllocator,
                  config: ProvisioningConfig) -> NewWorkerProfile:
    first_name, last_name = split_name(worker.name, config.placeholder_last_name)
    department = lookup_department(worker.category) if worker.category else None
    return NewWorkerProfile(
        first_name=allocator.allocate(first_name),
        last_name=last_name,
        credentials=placeholder_credentials(config),
        job_category=department.category if department else None,
        tip_based=department.tip_based if department else False,
    )
