"""Partitioning of reports into department columns."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from civicsync.models import UNASSIGNED, Report


DepartmentColumns = dict[str, list[Report]]


def partition(reports: Iterable[Report], departments: Sequence[str]) -> DepartmentColumns:
    """Group reports by assigned department, keeping input order.

    Every department gets a list, possibly empty. Reports whose department is
    missing or not in ``departments`` land in the Unassigned column.
    """
    if UNASSIGNED not in departments:
        raise ValueError(f"departments must include {UNASSIGNED!r}")

    columns: DepartmentColumns = {department: [] for department in departments}
    for report in reports:
        department = report.assigned_department
        if department in columns:
            columns[department].append(report)
        else:
            columns[UNASSIGNED].append(report)
    return columns


def find_container(columns: DepartmentColumns, report_id: str) -> Optional[str]:
    """Return the department whose column holds ``report_id``."""
    for department, reports in columns.items():
        if any(report.id == report_id for report in reports):
            return department
    return None


def move_report(
    columns: DepartmentColumns,
    report_id: str,
    from_department: str,
    to_department: str,
) -> DepartmentColumns:
    """Move a report between columns, appending it to the destination.

    Returns a new mapping; untouched columns are shared with the input.
    """
    if from_department == to_department:
        return columns

    source = columns.get(from_department, [])
    index = next(
        (i for i, report in enumerate(source) if report.id == report_id),
        None,
    )
    if index is None:
        raise KeyError(f"report {report_id!r} not in column {from_department!r}")

    moved = source[index].model_copy(update={"assigned_department": to_department})
    updated = dict(columns)
    updated[from_department] = source[:index] + source[index + 1 :]
    updated[to_department] = list(columns.get(to_department, [])) + [moved]
    return updated


def resolve_drop_target(
    over_id: Optional[str],
    columns: DepartmentColumns,
    departments: Sequence[str],
) -> Optional[str]:
    """Map the id under the pointer to a destination department.

    A card id resolves to the card's column; a department name resolves to
    itself; anything else is not a drop target.
    """
    if over_id is None:
        return None
    container = find_container(columns, over_id)
    if container is not None:
        return container
    if over_id in departments:
        return over_id
    return None
