"""Assignment board: optimistic drag moves with background persistence."""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from civicsync.board.columns import (
    DepartmentColumns,
    find_container,
    move_report,
    partition,
    resolve_drop_target,
)
from civicsync.config import Settings
from civicsync.errors import AssignmentError, ReportFetchError
from civicsync.models import UNASSIGNED, DragEvent, Report
from civicsync.utils.logging import get_logger


logger = get_logger(__name__)


class AssignmentBackend(Protocol):
    """The slice of the reports API the board depends on."""

    def list_reports(self) -> list[Report]:
        """Return the authoritative report list."""

    def assign_department(
        self,
        report_id: str,
        department: str,
        timeout: Optional[float] = None,
    ) -> None:
        """Persist a reassignment or raise AssignmentError."""


@dataclass(frozen=True)
class AssignmentOutcome:
    """Result of one background persist call."""

    report_id: str
    department: str
    version: int
    ok: bool
    stale: bool = False
    error: Optional[str] = None


class AssignmentBoard:
    """Kanban of reports by department.

    Drag moves are applied locally at once and persisted in the background.
    Each persist call carries the report's local move version; a result for
    a version that has since been superseded is dropped. A failure for the
    current version refetches the list and repartitions, discarding the
    optimistic move.
    """

    def __init__(
        self,
        backend: AssignmentBackend,
        settings: Optional[Settings] = None,
        departments: Optional[Sequence[str]] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.backend = backend
        self.departments = list(departments or self.settings.departments)
        if UNASSIGNED not in self.departments:
            raise ValueError(f"departments must include {UNASSIGNED!r}")

        self._lock = threading.RLock()
        self._columns: DepartmentColumns = {department: [] for department in self.departments}
        self._versions: dict[str, int] = {}
        self._closed = False
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.assign_max_workers,
            thread_name_prefix="civicsync-assign",
        )

    @property
    def columns(self) -> DepartmentColumns:
        """Copy of the current department columns."""
        with self._lock:
            return {department: list(reports) for department, reports in self._columns.items()}

    def load(self) -> DepartmentColumns:
        """Fetch the authoritative report list and repartition.

        On fetch failure the error propagates and the current columns stay.
        """
        reports = self.backend.list_reports()
        with self._lock:
            self._columns = partition(reports, self.departments)
        logger.info("board.load.complete reports=%s", len(reports))
        return self.columns

    def handle_drag_end(self, event: DragEvent) -> Optional[Future[AssignmentOutcome]]:
        """Apply a drop locally and persist it in the background.

        Returns the persist future, or None when the drop changes nothing.
        Raises RuntimeError once the board is closed; the columns are left as
        they were.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("assignment board is closed")

            source = find_container(self._columns, event.dragged_id)
            target = resolve_drop_target(event.over_id, self._columns, self.departments)
            if source is None or target is None or source == target:
                logger.debug(
                    "board.drop.ignored report_id=%s over_id=%s source=%s target=%s",
                    event.dragged_id,
                    event.over_id,
                    source,
                    target,
                )
                return None

            moved = move_report(self._columns, event.dragged_id, source, target)
            version = self._versions.get(event.dragged_id, 0) + 1
            # A rejected submit must leave the columns untouched.
            future = self._executor.submit(self._persist, event.dragged_id, target, version)
            self._columns = moved
            self._versions[event.dragged_id] = version

        logger.info(
            "board.move report_id=%s from=%s to=%s version=%s",
            event.dragged_id,
            source,
            target,
            version,
        )
        return future

    def close(self) -> None:
        with self._lock:
            self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "AssignmentBoard":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _persist(self, report_id: str, department: str, version: int) -> AssignmentOutcome:
        try:
            self.backend.assign_department(
                report_id,
                department,
                timeout=self.settings.assign_timeout_seconds,
            )
        except AssignmentError as exc:
            return self._on_failure(report_id, department, version, exc)

        if not self._is_current(report_id, version):
            logger.info("board.assign.stale_success report_id=%s version=%s", report_id, version)
            return AssignmentOutcome(report_id, department, version, ok=True, stale=True)
        return AssignmentOutcome(report_id, department, version, ok=True)

    def _on_failure(
        self,
        report_id: str,
        department: str,
        version: int,
        exc: AssignmentError,
    ) -> AssignmentOutcome:
        if not self._is_current(report_id, version):
            logger.info(
                "board.assign.stale_failure report_id=%s version=%s error=%s",
                report_id,
                version,
                exc,
            )
            return AssignmentOutcome(
                report_id, department, version, ok=False, stale=True, error=str(exc)
            )

        logger.warning(
            "board.assign.failed report_id=%s department=%s error=%s",
            report_id,
            department,
            exc,
        )
        try:
            self.load()
        except ReportFetchError:
            logger.exception("board.assign.refetch_failed report_id=%s", report_id)
        return AssignmentOutcome(report_id, department, version, ok=False, error=str(exc))

    def _is_current(self, report_id: str, version: int) -> bool:
        with self._lock:
            return self._versions.get(report_id) == version
