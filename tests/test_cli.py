from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from civicsync.cli.main import app


runner = CliRunner()


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    payload = {
        "success": True,
        "data": [
            {
                "_id": "r1",
                "category": "Garbage",
                "status": "resolved",
                "assignedDepartment": "Sanitation",
                "createdAt": "2026-10-18T08:00:00Z",
                "severity": 4,
                "location": {"type": "Point", "coordinates": [77.5946, 12.9716]},
            },
            {
                "_id": "r2",
                "category": "Pothole",
                "status": "pending",
                "createdAt": "2026-10-17T08:00:00Z",
            },
        ],
    }
    path = tmp_path / "reports.json"
    path.write_bytes(orjson.dumps(payload))
    return path


def test_analytics_from_file(export_file: Path):
    result = runner.invoke(app, ["analytics", "--from-file", str(export_file), "--today", "2026-10-18"])

    assert result.exit_code == 0
    snapshot = orjson.loads(result.stdout)
    assert snapshot["total_reports"] == 2
    assert snapshot["resolution_rate"] == 50
    assert snapshot["average_per_day"] == 1
    assert [day["count"] for day in snapshot["weekly_trend"]][-2:] == [1, 1]
    assert snapshot["hotspots"] == [{"count": 1, "lat": 12.9716, "lng": 77.5946}]


def test_stats_from_file(export_file: Path):
    result = runner.invoke(app, ["stats", "--from-file", str(export_file)])

    assert result.exit_code == 0
    output = orjson.loads(result.stdout)
    assert output["computed"] == {"total": 2, "pending": 1, "inProgress": 0, "resolved": 1}


def test_board_show_lists_columns(export_file: Path, monkeypatch):
    monkeypatch.delenv("CIVICSYNC_DEPARTMENTS", raising=False)
    result = runner.invoke(app, ["board", "show", "--from-file", str(export_file)])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "Unassigned (1)"
    assert lines[1].split()[0] == "r2"
    assert "Sanitation (1)" in lines


def test_reports_list_filters_by_status(export_file: Path):
    result = runner.invoke(
        app, ["reports", "list", "--from-file", str(export_file), "--status", "pending"]
    )

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "Showing 1 of 2 reports"
    assert lines[1].startswith("r2")


def test_set_status_rejects_unknown_status():
    result = runner.invoke(app, ["reports", "set-status", "--report-id", "r1", "--status", "done"])
    assert result.exit_code == 1


def test_analytics_rejects_bad_export(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_bytes(orjson.dumps({"success": False, "message": "nope"}))

    result = runner.invoke(app, ["analytics", "--from-file", str(path)])
    assert result.exit_code == 1


def test_analytics_rejects_bad_today(export_file: Path):
    result = runner.invoke(
        app, ["analytics", "--from-file", str(export_file), "--today", "2026-13-45"]
    )
    assert result.exit_code == 1
    assert "Traceback" not in result.stdout
