"""Typer CLI entry point."""

from __future__ import annotations

import base64
from datetime import date
from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from civicsync.analytics import build_snapshot, summarize
from civicsync.api import ReportsClient
from civicsync.board import AssignmentBoard, partition
from civicsync.config import Settings
from civicsync.errors import AssignmentError, CivicSyncError
from civicsync.models import KNOWN_STATUSES, DragEvent, Report
from civicsync.reports import filter_reports, newest_first
from civicsync.reports.export import load_reports, to_json
from civicsync.suggest import DescriptionSuggester
from civicsync.utils.logging import configure_logging, get_logger


app = typer.Typer(help="CivicSync CLI")
board_app = typer.Typer(help="Department assignment board")
reports_app = typer.Typer(help="Report listing and triage")

app.add_typer(board_app, name="board")
app.add_typer(reports_app, name="reports")

logger = get_logger(__name__)


@app.callback()
def main() -> None:
    """Initialize logging for all commands."""
    settings = Settings()
    configure_logging(settings.log_level)


def _load(from_file: Optional[Path]) -> List[Report]:
    if from_file is not None:
        return load_reports(from_file)
    with ReportsClient() as client:
        return client.list_reports()


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(1)


@app.command("analytics")
def analytics(
    from_file: Optional[Path] = typer.Option(
        None, "--from-file", exists=True, dir_okay=False, help="JSON export of /reports"
    ),
    today: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD, UTC)"),
) -> None:
    """Print the analytics snapshot as JSON."""
    try:
        reference = date.fromisoformat(today) if today else None
    except ValueError:
        _fail(f"Invalid --today {today!r}; expected YYYY-MM-DD")

    try:
        reports = _load(from_file)
    except (CivicSyncError, ValueError) as exc:
        _fail(f"Could not load reports: {exc}")

    snapshot = build_snapshot(reports, today=reference)
    typer.echo(to_json(snapshot))


@app.command("stats")
def stats(
    from_file: Optional[Path] = typer.Option(
        None, "--from-file", exists=True, dir_okay=False, help="JSON export of /reports"
    ),
    server: bool = typer.Option(False, help="Also fetch /reports/stats for comparison"),
) -> None:
    """Print status totals derived from the report list."""
    try:
        reports = _load(from_file)
        output = {"computed": summarize(reports)}
        if server:
            with ReportsClient() as client:
                output["server"] = client.get_stats()
    except (CivicSyncError, ValueError) as exc:
        _fail(f"Could not load stats: {exc}")
    typer.echo(to_json(output))


@board_app.command("show")
def board_show(
    from_file: Optional[Path] = typer.Option(
        None, "--from-file", exists=True, dir_okay=False, help="JSON export of /reports"
    ),
) -> None:
    """Print each department column with its report ids."""
    settings = Settings()
    try:
        reports = _load(from_file)
    except (CivicSyncError, ValueError) as exc:
        _fail(f"Could not load reports: {exc}")

    columns = partition(reports, settings.departments)
    for department, items in columns.items():
        typer.echo(f"{department} ({len(items)})")
        for report in items:
            typer.echo(f"  {report.id}  {report.category or '-'}  {report.address or '-'}")


@board_app.command("assign")
def board_assign(
    report_id: str = typer.Option(..., "--report-id", help="Report to move"),
    department: str = typer.Option(..., help="Destination department"),
) -> None:
    """Move a report to a department and wait for the backend to confirm."""
    settings = Settings()
    with ReportsClient(settings) as client, AssignmentBoard(client, settings) as board:
        try:
            board.load()
        except CivicSyncError as exc:
            _fail(f"Could not load reports: {exc}")

        future = board.handle_drag_end(DragEvent(dragged_id=report_id, over_id=department))
        if future is None:
            _fail(f"Nothing to do for {report_id} -> {department}")
        outcome = future.result()

    if not outcome.ok:
        _fail(f"Assignment failed: {outcome.error}")
    typer.echo(f"{report_id} assigned to {department}")


@reports_app.command("list")
def reports_list(
    status: str = typer.Option("all", help="Status filter or 'all'"),
    category: str = typer.Option("all", help="Category filter or 'all'"),
    query: str = typer.Option("", help="Search category, address and description"),
    mine: bool = typer.Option(False, help="Only reports submitted by the API token's user"),
    from_file: Optional[Path] = typer.Option(
        None, "--from-file", exists=True, dir_okay=False, help="JSON export of /reports"
    ),
) -> None:
    """List reports newest first."""
    try:
        if mine and from_file is None:
            with ReportsClient() as client:
                reports = client.list_my_reports()
        else:
            reports = _load(from_file)
    except (CivicSyncError, ValueError) as exc:
        _fail(f"Could not load reports: {exc}")

    selected = newest_first(filter_reports(reports, status=status, category=category, query=query))
    typer.echo(f"Showing {len(selected)} of {len(reports)} reports")
    for report in selected:
        typer.echo(
            f"{report.id}  {report.status or '-'}  {report.category or '-'}  "
            f"{report.created_at_raw or '-'}"
        )


@reports_app.command("set-status")
def reports_set_status(
    report_id: str = typer.Option(..., "--report-id"),
    status: str = typer.Option(..., help="pending, in-progress or resolved"),
) -> None:
    """Update a report's status."""
    if status not in KNOWN_STATUSES:
        _fail(f"Unknown status {status!r}; expected one of {', '.join(KNOWN_STATUSES)}")
    try:
        with ReportsClient() as client:
            client.update_status(report_id, status)
    except AssignmentError as exc:
        logger.error("reports.set_status.failed: %s", exc)
        _fail(f"Status update failed: {exc}")
    typer.echo(f"{report_id} set to {status}")


@app.command("suggest")
def suggest(
    image: Path = typer.Option(..., exists=True, dir_okay=False, help="JPEG photo of the issue"),
    location: str = typer.Option(..., help="Address or 'lat,lng'"),
) -> None:
    """Suggest a report description for a photo."""
    encoded = base64.b64encode(image.read_bytes()).decode("ascii")
    text = DescriptionSuggester().suggest(f"data:image/jpeg;base64,{encoded}", location)
    typer.echo(text)


if __name__ == "__main__":
    app()
