from __future__ import annotations

from fastapi import APIRouter

from .health import router as health_router
from .events import router as events_router
from .sessions import router as sessions_router
from .feed import router as feed_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(events_router)
api_router.include_router(sessions_router)
api_router.include_router(feed_router)
