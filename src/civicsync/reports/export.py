"""Loading report exports and rendering results as JSON."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List

import orjson
from pydantic import BaseModel, ValidationError

from civicsync.models import Report
from civicsync.utils.logging import get_logger


logger = get_logger(__name__)


def unwrap(payload: Any) -> Any:
    """Accept both {"success": ..., "data": ...} envelopes and bare payloads."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def parse_reports(items: Iterable[Any]) -> List[Report]:
    """Validate raw report dicts, skipping entries that lack an id."""
    reports: List[Report] = []
    skipped = 0
    for item in items:
        try:
            reports.append(Report.model_validate(item))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.warning("reports.parse.skipped_invalid count=%s", skipped)
    return reports


def load_reports(path: Path) -> List[Report]:
    """Read a JSON export of the /reports payload."""
    payload = orjson.loads(path.read_bytes())
    items = unwrap(payload)
    if not isinstance(items, list):
        raise ValueError(f"{path} does not contain a report list")
    return parse_reports(items)


def to_json(value: Any) -> str:
    """Serialize models (or lists/dicts of them) as indented JSON."""
    return orjson.dumps(_jsonable(value), option=orjson.OPT_INDENT_2).decode("utf-8")


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value
