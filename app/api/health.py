from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.time import utc_now_iso
from app.services.alerts import Alerts

router = APIRouter()


def get_alerts_service() -> Alerts:
    raise RuntimeError("Alerts must be provided by app dependency override")


@router.get("/health")
def health(alerts: Alerts = Depends(get_alerts_service)) -> dict:
    return {
        "ok": True,
        "time": utc_now_iso(),
        "events": len(alerts.store),
        "feed_running": alerts.feed.running,
    }
