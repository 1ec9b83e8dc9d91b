from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from app.core.contracts import FeedStartRequest, FeedStatus
from app.core.errors import HazardError, raise_http
from app.services.alerts import Alerts

router = APIRouter(prefix="/feed")


def get_alerts_service() -> Alerts:
    raise RuntimeError("Alerts must be provided by app dependency override")


@router.get("", response_model=FeedStatus)
def feed_status(alerts: Alerts = Depends(get_alerts_service)) -> FeedStatus:
    return alerts.feed_status()


@router.post("/start", response_model=FeedStatus)
def feed_start(
    req: Optional[FeedStartRequest] = None,
    alerts: Alerts = Depends(get_alerts_service),
) -> FeedStatus:
    # Already running -> no-op, current status returned
    req = req or FeedStartRequest()
    try:
        return alerts.start_feed(interval_ms=req.interval_ms, probability=req.probability)
    except HazardError as e:
        raise_http(e)


@router.post("/stop", response_model=FeedStatus)
def feed_stop(alerts: Alerts = Depends(get_alerts_service)) -> FeedStatus:
    return alerts.stop_feed()
