from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.core.contracts import (
    EventFilter,
    EventSummary,
    ExportRequest,
    HazardEvent,
    QueryRequest,
    QueryResponse,
    ReportSubmission,
    ReviewRequest,
    SummaryRequest,
)
from app.core.errors import HazardError, raise_http
from app.core.settings import settings
from app.services.alerts import Alerts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events")


def get_alerts_service() -> Alerts:
    raise RuntimeError("Alerts must be provided by app dependency override")


def _clamp(flt: EventFilter) -> EventFilter:
    if flt.limit is not None and flt.limit > settings.query_max_limit:
        return flt.model_copy(update={"limit": settings.query_max_limit})
    return flt


# ──────────────────────────────────────────────────────────────
# Submission
# ──────────────────────────────────────────────────────────────

@router.post("", response_model=HazardEvent, status_code=201)
def submit_report(
    req: ReportSubmission,
    alerts: Alerts = Depends(get_alerts_service),
) -> HazardEvent:
    try:
        return alerts.submit_report(req)
    except HazardError as e:
        raise_http(e)


# ──────────────────────────────────────────────────────────────
# Feed / map queries
# ──────────────────────────────────────────────────────────────

@router.post("/query", response_model=QueryResponse)
def query_events(
    req: QueryRequest,
    alerts: Alerts = Depends(get_alerts_service),
) -> QueryResponse:
    try:
        items = alerts.query_events(_clamp(req.filter), req.session)
        # unread across every match, not just this page
        unread = alerts.unread_count(req.session, req.filter)
    except HazardError as e:
        raise_http(e)
    return QueryResponse(session=req.session, count=len(items), unread=unread, items=items)


@router.post("/summary", response_model=EventSummary)
def events_summary(
    req: SummaryRequest,
    alerts: Alerts = Depends(get_alerts_service),
) -> EventSummary:
    try:
        return alerts.summary(req.filter, req.session)
    except HazardError as e:
        raise_http(e)


@router.post("/export")
def export_events(
    req: ExportRequest,
    alerts: Alerts = Depends(get_alerts_service),
) -> Response:
    try:
        body, media_type = alerts.export(_clamp(req.filter), req.format)
    except HazardError as e:
        raise_http(e)
    logger.info("events_export format=%s bytes=%d", req.format, len(body))
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="hazard-events.{req.format}"'},
    )


@router.get("/{event_id}", response_model=HazardEvent)
def get_event(
    event_id: str,
    alerts: Alerts = Depends(get_alerts_service),
) -> HazardEvent:
    try:
        return alerts.get_event(event_id)
    except HazardError as e:
        raise_http(e)


# ──────────────────────────────────────────────────────────────
# Review queue
# ──────────────────────────────────────────────────────────────

@router.post("/{event_id}/review", response_model=HazardEvent)
def review_event(
    event_id: str,
    req: ReviewRequest,
    alerts: Alerts = Depends(get_alerts_service),
) -> HazardEvent:
    try:
        return alerts.review_event(event_id, req.action, req.reviewer, req.notes, role=req.role)
    except HazardError as e:
        raise_http(e)
