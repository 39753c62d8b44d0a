"""Dashboard analytics computed from a report list.

Every figure is re-derived from the list passed in; nothing is cached
between calls. Calendar bucketing uses UTC dates.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta
from typing import Optional, Sequence

from civicsync.models import (
    AnalyticsSnapshot,
    CategoryCount,
    DailyCount,
    Hotspot,
    MonthlyCount,
    Report,
    ReportStats,
    ReportStatus,
    SeverityCount,
)
from civicsync.utils.numbers import fixed, percentage, round_half_up
from civicsync.utils.time import month_key, utc_today, weekday_label


TOP_CATEGORIES = 5
TREND_MONTHS = 6
TREND_DAYS = 7
TOP_HOTSPOTS = 5
SEVERITY_LEVELS = range(1, 6)
AVERAGE_WINDOW_DAYS = 30


def build_snapshot(
    reports: Sequence[Report],
    today: Optional[date] = None,
) -> AnalyticsSnapshot:
    """Compute every dashboard figure for ``reports``."""
    today = today or utc_today()
    total = len(reports)
    status_counts = status_distribution(reports)

    return AnalyticsSnapshot(
        category_distribution=category_distribution(reports),
        monthly_trend=monthly_trend(reports),
        weekly_trend=weekly_trend(reports, today),
        status_distribution=status_counts,
        severity_histogram=severity_histogram(reports),
        hotspots=hotspots(reports),
        total_reports=total,
        resolution_rate=percentage(status_counts.get(ReportStatus.RESOLVED.value, 0), total),
        average_per_day=average_per_day(total),
    )


def category_distribution(
    reports: Sequence[Report],
    limit: int = TOP_CATEGORIES,
) -> list[CategoryCount]:
    counts = Counter(report.category for report in reports if report.category)
    # sorted() is stable, so ties keep first-seen order.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        CategoryCount(name=name, value=count, percentage=percentage(count, len(reports)))
        for name, count in ranked
    ]


def monthly_trend(
    reports: Sequence[Report],
    months: int = TREND_MONTHS,
) -> list[MonthlyCount]:
    counts: Counter[str] = Counter()
    for report in reports:
        created_at = report.created_at
        if created_at is None:
            continue
        counts[month_key(created_at)] += 1

    keys = sorted(counts)[-months:]
    return [MonthlyCount(month=key, count=counts[key]) for key in keys]


def weekly_trend(
    reports: Sequence[Report],
    today: date,
    days: int = TREND_DAYS,
) -> list[DailyCount]:
    """One entry per day ending today, oldest first; days without reports count 0."""
    per_day: Counter[date] = Counter()
    for report in reports:
        created_at = report.created_at
        if created_at is not None:
            per_day[created_at.date()] += 1

    trend = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        trend.append(DailyCount(day=weekday_label(day), date=day, count=per_day[day]))
    return trend


def status_distribution(reports: Sequence[Report]) -> dict[str, int]:
    """Raw status counts; statuses that never occur are absent."""
    return dict(Counter(report.status for report in reports if report.status))


def severity_histogram(reports: Sequence[Report]) -> list[SeverityCount]:
    counts = Counter(
        report.severity for report in reports if report.severity in SEVERITY_LEVELS
    )
    return [SeverityCount(level=level, value=counts[level]) for level in sorted(counts)]


def hotspots(
    reports: Sequence[Report],
    limit: int = TOP_HOTSPOTS,
) -> list[Hotspot]:
    """Cluster reports on a 0.01 degree grid and return the busiest cells.

    A cluster's coordinates are those of the first report seen in its cell.
    """
    clusters: dict[str, dict[str, float]] = {}
    for report in reports:
        coords = report.lat_lng
        if coords is None:
            continue
        lat, lng = coords
        key = f"{fixed(lat)},{fixed(lng)}"
        cluster = clusters.setdefault(key, {"count": 0, "lat": lat, "lng": lng})
        cluster["count"] += 1

    ranked = sorted(clusters.values(), key=lambda cluster: cluster["count"], reverse=True)
    return [
        Hotspot(count=int(cluster["count"]), lat=cluster["lat"], lng=cluster["lng"])
        for cluster in ranked[:limit]
    ]


def average_per_day(total: int) -> int:
    """Reports per day over a 30 day window; at least 1 once any report exists."""
    if total <= 0:
        return 0
    return max(1, round_half_up(total / AVERAGE_WINDOW_DAYS))


def summarize(reports: Sequence[Report]) -> ReportStats:
    """The /reports/stats totals, derived from the raw list."""
    counts = status_distribution(reports)
    return ReportStats(
        total=len(reports),
        pending=counts.get(ReportStatus.PENDING.value, 0),
        in_progress=counts.get(ReportStatus.IN_PROGRESS.value, 0),
        resolved=counts.get(ReportStatus.RESOLVED.value, 0),
    )
