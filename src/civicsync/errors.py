"""Exception hierarchy for the CivicSync client."""

from __future__ import annotations

from typing import Optional


class CivicSyncError(Exception):
    """Base error for the package."""


class ReportFetchError(CivicSyncError):
    """The report list or stats endpoint could not be read."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AssignmentError(CivicSyncError):
    """A department assignment or status update was not persisted."""

    def __init__(
        self,
        report_id: str,
        message: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(f"{report_id}: {message}")
        self.report_id = report_id
        self.status_code = status_code
