"""Hours import exception hierarchy."""

from __future__ import annotations


class HoursImportError(Exception):
    """Base exception for all hours import errors."""


class UnsupportedFileError(HoursImportError):
    """Uploaded bytes are not a readable workbook or CSV export."""


class NoWorkerDataError(HoursImportError):
    """Parsing the upload produced no worker records."""

    def __init__(self, file_name: str = "") -> None:
        self.file_name = file_name
        label = f" in {file_name!r}" if file_name else ""
        super().__init__(f"No worker data found{label}")


class SessionNotFoundError(HoursImportError):
    """Import session is unknown or has expired; the file must be uploaded again."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(
            f"Import session {session_id!r} expired or not found. Please upload the file again."
        )


class SessionStoreError(HoursImportError):
    """Session store backend operation failed."""


class InvalidMonthError(HoursImportError):
    """Month is not a valid YYYY-MM value."""

    def __init__(self, month: str) -> None:
        self.month = month
        super().__init__(f"Invalid month {month!r}, expected YYYY-MM")
