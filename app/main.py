# app/main.py
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

# Load <repo>/.env (main.py is <repo>/app/main.py)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

from app.core.errors import ValidationError, describe_errors
from app.core.settings import settings
from app.api import api_router
from app.services.alerts import Alerts

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Coastal Alerts Backend", version="1.0.0")

# ── Compression (must be added before CORS) ──
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # same {"code","message"} detail as raise_http; raw input is not echoed back
    return JSONResponse(
        status_code=400,
        content={"detail": {"code": ValidationError.code, "message": describe_errors(exc.errors())}},
    )


# ──────────────────────────────────────────────────────────────
# Shared state: one store, one read-state tracker, one feed
# ──────────────────────────────────────────────────────────────

_alerts = Alerts()

# ──────────────────────────────────────────────────────────────
# Dependency providers
# ──────────────────────────────────────────────────────────────


def provide_alerts_service() -> Alerts:
    return _alerts


# ──────────────────────────────────────────────────────────────
# Dependency overrides
# ──────────────────────────────────────────────────────────────

from app.api import events as events_api
from app.api import feed as feed_api
from app.api import health as health_api
from app.api import sessions as sessions_api

ALERTS_DEPENDENCIES = (
    events_api.get_alerts_service,
    sessions_api.get_alerts_service,
    feed_api.get_alerts_service,
    health_api.get_alerts_service,
)

for _dep in ALERTS_DEPENDENCIES:
    app.dependency_overrides[_dep] = provide_alerts_service

# Routes
app.include_router(api_router)

# ──────────────────────────────────────────────────────────────
# Lifecycle
# ──────────────────────────────────────────────────────────────


@app.on_event("startup")
def startup():
    if settings.seed_demo_data:
        _alerts.seed_demo_data()
    if settings.feed_autostart:
        status = _alerts.start_feed()
        logger.info("[app] Synthetic feed every %.1fs p=%.2f", status.interval_s, status.probability)


@app.on_event("shutdown")
def shutdown():
    logger.info("[app] Shutting down, stopping synthetic feed")
    try:
        _alerts.stop_feed()
    except Exception as e:
        logger.warning(f"[app] Error stopping feed: {e}")
