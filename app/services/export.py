# app/services/export.py
from __future__ import annotations

import csv
import io
from typing import Any, Dict, List, Sequence, Tuple

import orjson

from app.core.contracts import HazardEvent

CSV_COLUMNS: List[str] = [
    "tracking_id", "id", "hazard_type", "severity", "status", "priority",
    "title", "location_name", "lat", "lng", "region",
    "reporter_name", "reporter_verified", "confidence", "affected_people",
    "public_visibility", "source", "created_at",
    "reviewed_by", "reviewed_at", "review_notes",
]


def _iso(dt) -> str:
    return dt.isoformat() if dt is not None else ""


def _row(e: HazardEvent) -> List[Any]:
    return [
        e.tracking_id, e.id, e.hazard_type, e.severity, e.status, e.priority,
        e.title, e.location.name, e.location.lat, e.location.lng, e.region or "",
        e.reporter.name, e.reporter.verified, e.confidence,
        "" if e.affected_people is None else e.affected_people,
        e.public_visibility, e.source, _iso(e.created_at),
        e.reviewed_by or "", _iso(e.reviewed_at), e.review_notes or "",
    ]


def to_csv(events: Sequence[HazardEvent]) -> bytes:
    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(CSV_COLUMNS)
    for e in events:
        w.writerow(_row(e))
    return buf.getvalue().encode("utf-8")


def to_json(events: Sequence[HazardEvent]) -> bytes:
    payload: List[Dict[str, Any]] = [e.model_dump(mode="json") for e in events]
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def export_events(events: Sequence[HazardEvent], fmt: str) -> Tuple[bytes, str]:
    """Serialize events; returns (body, media type)."""
    if fmt == "csv":
        return to_csv(events), "text/csv; charset=utf-8"
    if fmt == "json":
        return to_json(events), "application/json"
    raise ValueError(f"unsupported export format: {fmt}")
