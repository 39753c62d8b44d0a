"""Report selection and presentation helpers."""

from civicsync.reports.selection import (
    distinct_categories,
    expected_resolution,
    filter_reports,
    newest_first,
    severity_label,
)

__all__ = [
    "distinct_categories",
    "expected_resolution",
    "filter_reports",
    "newest_first",
    "severity_label",
]
