"""Type aliases used across the hours import service."""

from __future__ import annotations

OrganizationId = str
WorkerId = str
SessionId = str
NameMapping = dict[str, str]  # spreadsheet name -> directory worker id
