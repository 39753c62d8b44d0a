"""Department assignment board."""

from civicsync.board.board import AssignmentBoard, AssignmentOutcome
from civicsync.board.columns import (
    DepartmentColumns,
    find_container,
    move_report,
    partition,
    resolve_drop_target,
)

__all__ = [
    "AssignmentBoard",
    "AssignmentOutcome",
    "DepartmentColumns",
    "find_container",
    "move_report",
    "partition",
    "resolve_drop_target",
]
