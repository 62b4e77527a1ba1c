"""Worker matcher: a fixed cascade of name-resolution strategies.

Given the same parsed name, directory snapshot and overrides the cascade always
produces the same status and selection; it consults nothing else.

Cascade, first hit wins:
    1. manual override (name -> directory id present in the snapshot)
    2. exact first name
    3. exact "first last"
    4. exact last name
    5. substring either way on first or last name
    6. no match, every directory entry offered as a candidate
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence

from hours_import.models.directory import DirectoryEntry, MatchCandidate
from hours_import.models.preview import MatchedWorker, MatchStatus
from hours_import.models.timesheet import ParsedWorker


def _norm(value: str) -> str:
    return value.strip().lower()


_EXACT_STRATEGIES: tuple[Callable[[DirectoryEntry], str], ...] = (
    lambda e: _norm(e.first_name),
    lambda e: _norm(f"{e.first_name} {e.last_name}"),
    lambda e: _norm(e.last_name),
)


def _with_match(
    worker: ParsedWorker,
    status: MatchStatus,
    entry: DirectoryEntry | None = None,
    candidates: Sequence[MatchCandidate] = (),
) -> MatchedWorker:
    return MatchedWorker(
        **worker.model_dump(),
        matched_directory_id=entry.id if entry else None,
        matched_display_name=entry.display_name if entry else None,
        match_status=status,
        candidates=list(candidates),
    )


MIN_CONTAINED_PART = 2


def _substring_hits(
    key: str, directory: Sequence[DirectoryEntry], placeholder_last_name: str
) -> list[DirectoryEntry]:
    placeholder = _norm(placeholder_last_name)
    hits: list[DirectoryEntry] = []
    for entry in directory:
        for part in (_norm(entry.first_name), _norm(entry.last_name)):
            if not part or part == placeholder:
                continue
            # A one-letter part would be found inside almost any name
            if key in part or (len(part) >= MIN_CONTAINED_PART and part in key):
                hits.append(entry)
                break
    return hits


def match_worker(
    worker: ParsedWorker,
    directory: Sequence[DirectoryEntry],
    overrides: Mapping[str, str] | None = None,
    placeholder_last_name: str = "-",
) -> MatchedWorker:
    """Resolve one parsed worker against a directory snapshot.

    ``placeholder_last_name`` is the filler given to auto-provisioned workers;
    it never counts as a substring match.
    """
    override_id = (overrides or {}).get(worker.name)
    if override_id:
        entry = next((e for e in directory if e.id == override_id), None)
        if entry is not None:
            return _with_match(worker, MatchStatus.MATCHED, entry)

    key = _norm(worker.name)
    if key:
        for strategy in _EXACT_STRATEGIES:
            entry = next((e for e in directory if strategy(e) == key), None)
            if entry is not None:
                return _with_match(worker, MatchStatus.MATCHED, entry)

        hits = _substring_hits(key, directory, placeholder_last_name)
        if len(hits) == 1:
            return _with_match(
                worker, MatchStatus.PARTIAL, hits[0], [MatchCandidate.from_entry(hits[0])]
            )
        if hits:
            # Several plausible entries: the first is pre-selected for display,
            # but the status stays unmatched until a human confirms one.
            return _with_match(
                worker,
                MatchStatus.UNMATCHED,
                hits[0],
                [MatchCandidate.from_entry(e) for e in hits],
            )

    return _with_match(
        worker,
        MatchStatus.UNMATCHED,
        candidates=[MatchCandidate.from_entry(e) for e in directory],
    )


def match_workers(
    parsed_workers: Sequence[ParsedWorker],
    directory: Sequence[DirectoryEntry],
    overrides: Mapping[str, str] | None = None,
    placeholder_last_name: str = "-",
) -> list[MatchedWorker]:
    """Resolve every parsed worker, preserving input order."""
    return [
        match_worker(w, directory, overrides, placeholder_last_name) for w in parsed_workers
    ]
