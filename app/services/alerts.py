# app/services/alerts.py
"""
Alerts service: the single entry point the UI collaborators talk to.

Write paths: submit_report (human reports) and the synthetic feed, both
landing in EventStore.insert. Read path: query_events = QueryEngine over a
store snapshot, overlaid with the caller session's read state. Review
commands go through the store so the legality check and the write share
one lock.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from app.core import catalog
from app.core.contracts import EventFilter, EventSummary, FeedItem, FeedStatus, HazardEvent, ReportSubmission
from app.core.errors import DuplicateTrackingId, NotFound, ValidationError, describe_errors
from app.services.event_store import EventStore
from app.services.export import export_events
from app.services.feed import SyntheticFeedGenerator
from app.services.query import QueryEngine, summarize
from app.services.read_state import ReadStateTracker
from app.services.seed import DEMO_REPORTS

logger = logging.getLogger(__name__)


def _session(session_key: Optional[str]) -> str:
    key = (session_key or "").strip()
    if not key:
        raise ValidationError("session key is required")
    return key


def _unpaged(flt: Optional[EventFilter]) -> EventFilter:
    return (flt or EventFilter()).model_copy(update={"offset": 0, "limit": None})


class Alerts:
    def __init__(
        self,
        *,
        store: Optional[EventStore] = None,
        engine: Optional[QueryEngine] = None,
        tracker: Optional[ReadStateTracker] = None,
        feed: Optional[SyntheticFeedGenerator] = None,
    ):
        self.store = store or EventStore()
        self.engine = engine or QueryEngine()
        self.tracker = tracker or ReadStateTracker()
        self.feed = feed or SyntheticFeedGenerator(self.store)

    # ──────────────────────────────────────────────────────────
    # Writes
    # ──────────────────────────────────────────────────────────

    def submit_report(self, data: Union[ReportSubmission, Dict[str, Any]]) -> HazardEvent:
        if isinstance(data, ReportSubmission):
            submission = data
        else:
            try:
                submission = ReportSubmission.model_validate(data)
            except PydanticValidationError as e:
                raise ValidationError(describe_errors(e.errors(), "invalid report")) from None
        return self.store.insert(submission, source="report")

    def review_event(
        self,
        event_id: str,
        action: str,
        reviewer: Optional[str],
        notes: Optional[str] = None,
        *,
        role: Optional[str] = None,
    ) -> HazardEvent:
        target = catalog.target_status(action)
        logger.info("[review] %s on %s by %s (role=%s)", action, event_id, reviewer, role or "-")
        return self.store.update_status(event_id, target, reviewer=reviewer, notes=notes)

    # ──────────────────────────────────────────────────────────
    # Reads
    # ──────────────────────────────────────────────────────────

    def get_event(self, event_id: str) -> HazardEvent:
        return self.store.get(event_id)

    def query_events(self, flt: Optional[EventFilter], session_key: str) -> List[FeedItem]:
        session = _session(session_key)
        flt = flt or EventFilter()
        seen = self.tracker.read_ids(session)

        extra = [lambda e: e.id not in seen] if flt.unread_only else []
        events = self.engine.select(self.store.snapshot(), flt, extra=extra)
        return [FeedItem(event=e, is_read=e.id in seen) for e in events]

    def summary(self, flt: Optional[EventFilter] = None, session_key: Optional[str] = None) -> EventSummary:
        events = self.engine.select(self.store.snapshot(), _unpaged(flt))
        out = summarize(events)
        if session_key:
            out.unread = self.tracker.unread_count(_session(session_key), events)
        return out

    def export(self, flt: Optional[EventFilter], fmt: str) -> Tuple[bytes, str]:
        events = self.engine.select(self.store.snapshot(), flt)
        try:
            return export_events(events, fmt)
        except ValueError as e:
            raise ValidationError(str(e)) from None

    # ──────────────────────────────────────────────────────────
    # Read state
    # ──────────────────────────────────────────────────────────

    def mark_read(self, session_key: str, event_id: str) -> int:
        """Mark one event read; returns the session's remaining unread count."""
        session = _session(session_key)
        if not self.store.has(event_id):
            raise NotFound(event_id)
        self.tracker.mark_read(session, event_id)
        return self.unread_count(session)

    def mark_all_read(self, session_key: str) -> int:
        """Mark every event stored right now as read; later arrivals stay unread."""
        session = _session(session_key)
        self.tracker.mark_all_read(session, self.store.ids())
        return self.unread_count(session)

    def unread_count(self, session_key: str, flt: Optional[EventFilter] = None) -> int:
        session = _session(session_key)
        events = self.engine.iter_events(self.store.snapshot(), _unpaged(flt))
        return self.tracker.unread_count(session, events)

    # ──────────────────────────────────────────────────────────
    # Feed lifecycle
    # ──────────────────────────────────────────────────────────

    def start_feed(self, interval_ms: Optional[int] = None, probability: Optional[float] = None) -> FeedStatus:
        interval_s = None if interval_ms is None else interval_ms / 1000.0
        try:
            self.feed.start(interval_s=interval_s, probability=probability)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        return self.feed.status()

    def stop_feed(self) -> FeedStatus:
        self.feed.stop()
        return self.feed.status()

    def feed_status(self) -> FeedStatus:
        return self.feed.status()

    # ──────────────────────────────────────────────────────────
    # Demo data
    # ──────────────────────────────────────────────────────────

    def seed_demo_data(self) -> List[HazardEvent]:
        out: List[HazardEvent] = []
        for submission, history in DEMO_REPORTS:
            try:
                ev = self.store.insert(ReportSubmission.model_validate(submission), source="seed")
            except DuplicateTrackingId as e:
                logger.info("[seed] skipping %s", e.tracking_id)
                continue
            for action, reviewer, notes in history:
                ev = self.review_event(ev.id, action, reviewer, notes, role="seed")
            out.append(ev)
        logger.info("[seed] loaded %d demo reports", len(out))
        return out
