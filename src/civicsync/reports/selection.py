"""Filtering, ordering and labelling of report lists."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from civicsync.models import Report


ALL = "all"

SEVERITY_LABELS: dict[int, str] = {
    1: "Low",
    2: "Medium",
    3: "Medium priority",
    4: "High",
    5: "Critical",
}

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def filter_reports(
    reports: Sequence[Report],
    status: str = ALL,
    category: str = ALL,
    query: str = "",
) -> list[Report]:
    """Admin dashboard filter.

    ``status`` and ``category`` match exactly unless set to "all". ``query``
    is a case-insensitive substring match over category, address and
    description.
    """
    needle = query.strip().lower()
    selected = []
    for report in reports:
        if status != ALL and report.status != status:
            continue
        if category != ALL and report.category != category:
            continue
        if needle and not _matches(report, needle):
            continue
        selected.append(report)
    return selected


def _matches(report: Report, needle: str) -> bool:
    haystacks = (report.category, report.address, report.description)
    return any(needle in value.lower() for value in haystacks if value)


def distinct_categories(reports: Sequence[Report]) -> list[str]:
    """Categories in first-seen order."""
    seen: dict[str, None] = {}
    for report in reports:
        if report.category:
            seen.setdefault(report.category, None)
    return list(seen)


def newest_first(reports: Sequence[Report]) -> list[Report]:
    """Order by createdAt descending; undated reports go last."""
    return sorted(reports, key=lambda report: report.created_at or _OLDEST, reverse=True)


def severity_label(value: Optional[int]) -> str:
    return SEVERITY_LABELS.get(value, "Medium")


def expected_resolution(severity: int) -> str:
    """Expected turnaround shown to the reporter at submission time."""
    if severity <= 2:
        return "7-14"
    if severity <= 3:
        return "3-7"
    if severity <= 4:
        return "1-3"
    return "24 hours"
