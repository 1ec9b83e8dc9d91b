# app/services/feed.py
"""
Synthetic hazard feed.

Models the bursty arrival of crowdsourced / social-derived reports: every
interval one Bernoulli trial decides whether a new event shows up. The
producer sits behind the same ReportSubmission -> EventStore.insert contract
as human submissions, so a real ingestion adapter (e.g. a classifier over
social posts) can replace SyntheticProducer without touching the store,
query engine or review workflow.
"""
from __future__ import annotations

import logging
import random
import threading
from typing import Optional, Protocol

from app.core import catalog
from app.core.contracts import FeedStatus, GeoPoint, Reporter, ReportSubmission
from app.core.errors import HazardError
from app.core.settings import settings
from app.services.event_store import EventStore

logger = logging.getLogger(__name__)


class EventProducer(Protocol):
    def produce(self, rng: random.Random) -> Optional[ReportSubmission]:
        """Return a new submission, or None when nothing arrived this tick."""
        ...


class SyntheticProducer:
    def __init__(self, probability: float):
        self.probability = probability

    @property
    def probability(self) -> float:
        return self._probability

    @probability.setter
    def probability(self, value: float) -> None:
        p = float(value)
        if not (0.0 <= p <= 1.0):
            raise ValueError(f"probability must be within [0, 1], got {value}")
        self._probability = p

    def produce(self, rng: random.Random) -> Optional[ReportSubmission]:
        # random() is in [0, 1): p=1.0 always fires, p=0.0 never does
        if rng.random() >= self.probability:
            return None

        hazard_type = rng.choice(catalog.HAZARD_TYPES)
        site = rng.choice(sorted(catalog.COASTAL_SITES))
        lat, lng = catalog.COASTAL_SITES[site]

        return ReportSubmission(
            hazard_type=hazard_type,
            severity=rng.choice(catalog.SEVERITIES),
            priority=rng.choice(catalog.PRIORITIES),
            title="New Hazard Alert",
            description="Automated detection system has identified a potential coastal hazard.",
            location=GeoPoint(lat=lat, lng=lng, name=site),
            reporter=Reporter(name="Automated Detection", verified=False),
            confidence=rng.randint(40, 95),
            affected_people=rng.randrange(10000),
            affected_areas=["Coastal Areas"],
            public_visibility=True,
        )


class SyntheticFeedGenerator:
    def __init__(
        self,
        store: EventStore,
        *,
        producer: Optional[EventProducer] = None,
        interval_s: Optional[float] = None,
        probability: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.producer = producer or SyntheticProducer(
            settings.feed_probability if probability is None else probability
        )
        self.interval_s = float(interval_s if interval_s is not None else settings.feed_interval_s)
        self.rng = rng or random.Random(settings.feed_seed)

        self.ticks = 0
        self.inserted = 0

        self._lifecycle = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        t = self._thread
        return t is not None and t.is_alive()

    # ──────────────────────────────────────────────────────────
    # One tick
    # ──────────────────────────────────────────────────────────

    def tick(self) -> bool:
        """Run one trial; True when an event was inserted. Never raises HazardError."""
        self.ticks += 1
        submission = self.producer.produce(self.rng)
        if submission is None:
            return False
        try:
            ev = self.store.insert(submission, source="synthetic")
        except HazardError as e:
            logger.warning("[feed] tick %d skipped: %s", self.ticks, e)
            return False
        self.inserted += 1
        logger.info("[feed] new %s alert %s at %s", ev.hazard_type, ev.tracking_id, ev.location.name)
        return True

    def _run(self) -> None:
        logger.info("[feed] started interval=%.3fs", self.interval_s)
        # wait() returns True once stop is requested; an insert already in
        # progress finishes before the loop re-checks
        while not self._stop.wait(self.interval_s):
            try:
                self.tick()
            except Exception:
                # unattended loop: log and carry on to the next tick
                logger.exception("[feed] tick %d failed", self.ticks)
        logger.info("[feed] stopped after %d ticks (%d inserted)", self.ticks, self.inserted)

    # ──────────────────────────────────────────────────────────
    # Lifecycle (idempotent)
    # ──────────────────────────────────────────────────────────

    def start(self, *, interval_s: Optional[float] = None, probability: Optional[float] = None) -> bool:
        """Start the loop; returns False (no-op) when it is already running."""
        with self._lifecycle:
            if self.running:
                return False
            if interval_s is not None:
                if interval_s <= 0:
                    raise ValueError(f"interval must be positive, got {interval_s}")
                self.interval_s = float(interval_s)
            if probability is not None and isinstance(self.producer, SyntheticProducer):
                self.producer.probability = probability

            self._stop.clear()
            self._thread = threading.Thread(target=self._run, name="synthetic-feed", daemon=True)
            self._thread.start()
            return True

    def stop(self, timeout_s: Optional[float] = None) -> bool:
        """Stop the loop and wait for it; returns False when it was not running."""
        with self._lifecycle:
            t = self._thread
            if t is None:
                return False
            self._stop.set()
            t.join(timeout_s)
            if t.is_alive():
                # join timed out; keep the handle so start() still sees it running
                logger.warning("[feed] stop timed out after %.3fs, loop still finishing", timeout_s or 0.0)
            else:
                self._thread = None
            return True

    def status(self) -> FeedStatus:
        probability = getattr(self.producer, "probability", 0.0)
        return FeedStatus(
            running=self.running,
            interval_s=self.interval_s,
            probability=float(probability),
            ticks=self.ticks,
            inserted=self.inserted,
        )
