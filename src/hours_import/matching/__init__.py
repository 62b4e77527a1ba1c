"""Resolution of spreadsheet names against the workforce directory."""

from __future__ import annotations

from hours_import.matching.matcher import match_worker, match_workers

__all__ = ["match_worker", "match_workers"]
