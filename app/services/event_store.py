# app/services/event_store.py
"""
Authoritative in-memory store of HazardEvents.

  - insert: assigns id / tracking id / created_at, always starts at "pending"
  - get / snapshot: point-in-time reads (records are frozen, swapped whole)
  - update_status: review transition, legality checked under the write lock

One lock per store, held for a single operation only; never across calls
into the query engine or the read-state tracker. A durable backend only has
to honour the same insert / get / snapshot / update_status contract.
"""
from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional, Set

from app.core.contracts import EventSource, HazardEvent, ReportSubmission
from app.core.errors import DuplicateTrackingId, InvariantViolation, NotFound
from app.core.geo_registry import region_for_point
from app.core.settings import settings
from app.core.time import utc_now
from app.services.review import ReviewWorkflow

logger = logging.getLogger(__name__)


def _check_invariants(ev: HazardEvent) -> HazardEvent:
    # Frozen + validated models make these unreachable unless something
    # bypassed validation (model_construct, bad backend). Never repair.
    if not (1 <= ev.severity <= 5):
        raise InvariantViolation(f"event {ev.id} severity out of range: {ev.severity}")
    if not (0 <= ev.confidence <= 100):
        raise InvariantViolation(f"event {ev.id} confidence out of range: {ev.confidence}")
    loc = ev.location
    if loc is None or not (-90.0 <= loc.lat <= 90.0) or not (-180.0 <= loc.lng <= 180.0):
        raise InvariantViolation(f"event {ev.id} has invalid coordinates")
    return ev


class EventStore:
    def __init__(
        self,
        *,
        workflow: Optional[ReviewWorkflow] = None,
        clock: Callable[[], datetime] = utc_now,
        tracking_prefix: Optional[str] = None,
        tracking_start: Optional[int] = None,
    ):
        self.workflow = workflow or ReviewWorkflow()
        self.clock = clock
        self.tracking_prefix = tracking_prefix if tracking_prefix is not None else settings.tracking_id_prefix
        self._next_tracking = int(tracking_start if tracking_start is not None else settings.tracking_id_start)

        self._lock = threading.Lock()
        # dicts keep insertion order; snapshot() relies on it
        self._events: Dict[str, HazardEvent] = {}
        self._tracking_ids: Set[str] = set()

    # ──────────────────────────────────────────────────────────
    # Writes
    # ──────────────────────────────────────────────────────────

    def _allocate_tracking_id(self) -> str:
        while True:
            tid = f"{self.tracking_prefix}{self._next_tracking:06d}"
            self._next_tracking += 1
            if tid not in self._tracking_ids:
                return tid

    def insert(self, submission: ReportSubmission, *, source: EventSource = "report") -> HazardEvent:
        requested = (submission.tracking_id or "").strip() or None

        with self._lock:
            if requested is not None and requested in self._tracking_ids:
                raise DuplicateTrackingId(requested)

            tracking_id = requested or self._allocate_tracking_id()
            data = submission.model_dump(exclude={"tracking_id"})
            ev = HazardEvent(
                **data,
                id=uuid.uuid4().hex,
                tracking_id=tracking_id,
                source=source,
                status=self.workflow.initial_status,
                region=region_for_point(submission.location.lat, submission.location.lng),
                created_at=self.clock(),
            )
            _check_invariants(ev)

            self._events[ev.id] = ev
            self._tracking_ids.add(tracking_id)

        logger.info(
            "[store] inserted %s (%s sev=%d src=%s region=%s)",
            ev.tracking_id, ev.hazard_type, ev.severity, source, ev.region,
        )
        return ev

    def update_status(
        self,
        event_id: str,
        new_status: str,
        reviewer: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> HazardEvent:
        with self._lock:
            current = self._events.get(event_id)
            if current is None:
                raise NotFound(event_id)
            updated = self.workflow.apply(current, new_status, reviewer=reviewer, notes=notes, at=self.clock())
            _check_invariants(updated)
            self._events[event_id] = updated

        logger.info("[store] %s %s -> %s by %s", updated.tracking_id, current.status, updated.status, updated.reviewed_by)
        return updated

    # ──────────────────────────────────────────────────────────
    # Reads
    # ──────────────────────────────────────────────────────────

    def get(self, event_id: str) -> HazardEvent:
        with self._lock:
            ev = self._events.get(event_id)
        if ev is None:
            raise NotFound(event_id)
        return ev

    def has(self, event_id: str) -> bool:
        with self._lock:
            return event_id in self._events

    def snapshot(self) -> List[HazardEvent]:
        """All events in insertion order, as of the moment the lock was held."""
        with self._lock:
            return list(self._events.values())

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._events.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
