"""Core data models for reports, board events and analytics."""

from __future__ import annotations

import datetime as dt
import math
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from civicsync.utils.time import parse_created_at


UNASSIGNED = "Unassigned"


class ReportStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


KNOWN_STATUSES: tuple[str, ...] = tuple(status.value for status in ReportStatus)


class Location(BaseModel):
    """GeoJSON point; coordinates are [lng, lat]."""

    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    coordinates: Optional[list[Any]] = None

    @field_validator("type", mode="before")
    @classmethod
    def _drop_non_string_type(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("coordinates", mode="before")
    @classmethod
    def _drop_non_list_coordinates(cls, value: Any) -> Optional[list[Any]]:
        return list(value) if isinstance(value, (list, tuple)) else None


class Report(BaseModel):
    """Citizen-submitted civic issue as served by the reports API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(alias="_id")
    category: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    status: Optional[str] = None
    severity: Optional[int] = None
    priority: Optional[Literal["low", "medium", "high"]] = None
    assigned_department: Optional[str] = Field(default=None, alias="assignedDepartment")
    created_at_raw: Optional[str] = Field(default=None, alias="createdAt")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    location: Optional[Location] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator(
        "category",
        "description",
        "address",
        "status",
        "assigned_department",
        "image_url",
        mode="before",
    )
    @classmethod
    def _drop_non_string(cls, value: Any) -> Optional[str]:
        # A wrong-typed field only blanks that field; the report itself stays.
        return value if isinstance(value, str) else None

    @field_validator("location", mode="before")
    @classmethod
    def _drop_non_mapping_location(cls, value: Any) -> Any:
        if isinstance(value, (dict, Location)):
            return value
        return None

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return None

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> Optional[str]:
        if value in ("low", "medium", "high"):
            return value
        return None

    @field_validator("created_at_raw", mode="before")
    @classmethod
    def _stringify_created_at(cls, value: Any) -> Optional[str]:
        if isinstance(value, dt.datetime):
            return value.isoformat()
        if isinstance(value, str):
            return value
        return None

    @property
    def created_at(self) -> Optional[dt.datetime]:
        """createdAt as an aware UTC datetime, or None when unparseable."""
        return parse_created_at(self.created_at_raw)

    @property
    def lat_lng(self) -> Optional[tuple[float, float]]:
        """(lat, lng) when the report carries a usable coordinate pair."""
        if self.location is None or not self.location.coordinates:
            return None
        coords = self.location.coordinates
        if len(coords) < 2:
            return None
        lng, lat = coords[0], coords[1]
        if isinstance(lng, bool) or isinstance(lat, bool):
            return None
        if not isinstance(lng, (int, float)) or not isinstance(lat, (int, float)):
            return None
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return None
        return float(lat), float(lng)

    @property
    def department(self) -> str:
        return self.assigned_department or UNASSIGNED


class DragEvent(BaseModel):
    """End of a pointer-drag session: what was dragged and what it was released over."""

    model_config = ConfigDict(frozen=True)

    dragged_id: str
    over_id: Optional[str] = None


class ReportStats(BaseModel):
    """Summary totals as served by /reports/stats."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    total: int = 0
    pending: int = 0
    in_progress: int = Field(default=0, alias="inProgress")
    resolved: int = 0


class CategoryCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: int
    percentage: int


class MonthlyCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str
    count: int


class DailyCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    date: dt.date
    count: int


class SeverityCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int
    value: int


class Hotspot(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int
    lat: float
    lng: float


class AnalyticsSnapshot(BaseModel):
    """Derived dashboard figures for one report list."""

    model_config = ConfigDict(frozen=True)

    category_distribution: list[CategoryCount] = Field(default_factory=list)
    monthly_trend: list[MonthlyCount] = Field(default_factory=list)
    weekly_trend: list[DailyCount] = Field(default_factory=list)
    status_distribution: dict[str, int] = Field(default_factory=dict)
    severity_histogram: list[SeverityCount] = Field(default_factory=list)
    hotspots: list[Hotspot] = Field(default_factory=list)
    total_reports: int = 0
    resolution_rate: int = 0
    average_per_day: int = 0

    def status_totals(self) -> dict[str, int]:
        """Status counts with every known status present, zero when unseen."""
        totals = {status: 0 for status in KNOWN_STATUSES}
        totals.update(self.status_distribution)
        return totals
