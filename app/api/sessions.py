from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.contracts import ReadStateResponse
from app.core.errors import HazardError, raise_http
from app.services.alerts import Alerts

router = APIRouter(prefix="/sessions")


def get_alerts_service() -> Alerts:
    raise RuntimeError("Alerts must be provided by app dependency override")


@router.post("/{session}/read/{event_id}", response_model=ReadStateResponse)
def mark_read(
    session: str,
    event_id: str,
    alerts: Alerts = Depends(get_alerts_service),
) -> ReadStateResponse:
    try:
        unread = alerts.mark_read(session, event_id)
    except HazardError as e:
        raise_http(e)
    return ReadStateResponse(session=session, event_id=event_id, unread=unread)


@router.post("/{session}/read-all", response_model=ReadStateResponse)
def mark_all_read(
    session: str,
    alerts: Alerts = Depends(get_alerts_service),
) -> ReadStateResponse:
    try:
        unread = alerts.mark_all_read(session)
    except HazardError as e:
        raise_http(e)
    return ReadStateResponse(session=session, unread=unread)


@router.get("/{session}/unread", response_model=ReadStateResponse)
def unread_count(
    session: str,
    alerts: Alerts = Depends(get_alerts_service),
) -> ReadStateResponse:
    try:
        unread = alerts.unread_count(session)
    except HazardError as e:
        raise_http(e)
    return ReadStateResponse(session=session, unread=unread)
