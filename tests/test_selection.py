from civicsync.models import Report
from civicsync.reports import (
    distinct_categories,
    expected_resolution,
    filter_reports,
    newest_first,
    severity_label,
)


def _report(report_id: str, **overrides) -> Report:
    payload = {
        "_id": report_id,
        "category": "Pothole",
        "address": "12 Lake View Road",
        "description": "Deep pothole near the bus stop",
        "status": "pending",
        "createdAt": "2026-10-01T10:00:00Z",
    }
    payload.update(overrides)
    return Report.model_validate(payload)


def _reports() -> list[Report]:
    return [
        _report("r1"),
        _report("r2", category="Garbage", description="Overflowing bin", status="resolved"),
        _report("r3", category="Streetlight", address="Station Road", status="in-progress"),
        _report("r4", category="Garbage", address="Market Street", description=None),
    ]


def test_filter_all_returns_everything():
    assert [report.id for report in filter_reports(_reports())] == ["r1", "r2", "r3", "r4"]


def test_filter_by_status_and_category():
    selected = filter_reports(_reports(), status="pending", category="Garbage")
    assert [report.id for report in selected] == ["r4"]


def test_filter_query_is_case_insensitive_across_fields():
    assert [r.id for r in filter_reports(_reports(), query="garbage")] == ["r2", "r4"]
    assert [r.id for r in filter_reports(_reports(), query="STATION")] == ["r3"]
    assert [r.id for r in filter_reports(_reports(), query="bin")] == ["r2"]
    assert filter_reports(_reports(), query="volcano") == []


def test_distinct_categories_first_seen_order():
    assert distinct_categories(_reports()) == ["Pothole", "Garbage", "Streetlight"]


def test_newest_first_puts_undated_last():
    reports = [
        _report("old", createdAt="2026-01-01T00:00:00Z"),
        _report("undated", createdAt="garbage"),
        _report("new", createdAt="2026-10-10T00:00:00Z"),
        _report("mid", createdAt="2026-05-01T00:00:00+05:30"),
    ]
    assert [report.id for report in newest_first(reports)] == ["new", "mid", "old", "undated"]


def test_severity_label():
    assert [severity_label(level) for level in range(1, 6)] == [
        "Low",
        "Medium",
        "Medium priority",
        "High",
        "Critical",
    ]
    assert severity_label(None) == "Medium"
    assert severity_label(9) == "Medium"


def test_expected_resolution():
    assert expected_resolution(1) == "7-14"
    assert expected_resolution(2) == "7-14"
    assert expected_resolution(3) == "3-7"
    assert expected_resolution(4) == "1-3"
    assert expected_resolution(5) == "24 hours"
