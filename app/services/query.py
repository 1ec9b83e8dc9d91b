# app/services/query.py
"""
Filter + order engine behind both the live alert feed and the map.

A pure function of (snapshot, filter):
  - predicates AND across dimensions, OR within one dimension's set
  - missing / empty dimension = no constraint
  - order: created_at desc, then priority desc, then severity desc;
    remaining ties keep snapshot (insertion) order via a stable sort
"""
from __future__ import annotations

from datetime import datetime, timezone
from itertools import islice
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from app.core import catalog
from app.core.contracts import BBox4, EventFilter, EventSummary, HazardEvent
from app.core.geo_registry import region_bbox

Predicate = Callable[[HazardEvent], bool]


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _text_haystack(ev: HazardEvent) -> str:
    return " \x1f ".join(
        [ev.title, ev.description, ev.location.name, ev.reporter.name, ev.tracking_id]
    ).lower()


def _sort_key(ev: HazardEvent):
    return (ev.created_at, catalog.priority_rank(ev.priority), ev.severity)


class QueryEngine:
    def predicates(self, flt: EventFilter) -> List[Predicate]:
        preds: List[Predicate] = []

        if flt.severities:
            severities = frozenset(flt.severities)
            preds.append(lambda e: e.severity in severities)
        if flt.hazard_types:
            types = frozenset(flt.hazard_types)
            preds.append(lambda e: e.hazard_type in types)
        if flt.statuses:
            statuses = frozenset(flt.statuses)
            preds.append(lambda e: e.status in statuses)
        if flt.priorities:
            priorities = frozenset(flt.priorities)
            preds.append(lambda e: e.priority in priorities)

        needle = (flt.text or "").strip().lower()
        if needle:
            preds.append(lambda e: needle in _text_haystack(e))

        boxes: List[BBox4] = []
        if flt.bbox is not None:
            boxes.append(flt.bbox)
        if flt.region:
            boxes.append(region_bbox(flt.region))
        for box in boxes:
            preds.append(lambda e, b=box: b.contains(e.location.lat, e.location.lng))

        if flt.created_after is not None:
            after = _as_utc(flt.created_after)
            preds.append(lambda e: e.created_at >= after)
        if flt.created_before is not None:
            before = _as_utc(flt.created_before)
            preds.append(lambda e: e.created_at <= before)

        if flt.public_only:
            preds.append(lambda e: e.public_visibility)

        return preds

    def iter_events(
        self,
        snapshot: Sequence[HazardEvent],
        flt: Optional[EventFilter] = None,
        *,
        extra: Sequence[Predicate] = (),
    ) -> Iterator[HazardEvent]:
        """
        Lazily yield matching events in feed order, honouring offset/limit.

        `extra` lets callers add predicates that live outside the snapshot
        (the facade uses it for per-session unread filtering).
        """
        flt = flt or EventFilter()
        preds = self.predicates(flt) + list(extra)

        matches = [e for e in snapshot if all(p(e) for p in preds)]
        matches.sort(key=_sort_key, reverse=True)

        stop = None if flt.limit is None else flt.offset + flt.limit
        return islice(iter(matches), flt.offset, stop)

    def select(
        self,
        snapshot: Sequence[HazardEvent],
        flt: Optional[EventFilter] = None,
        *,
        extra: Sequence[Predicate] = (),
    ) -> List[HazardEvent]:
        return list(self.iter_events(snapshot, flt, extra=extra))


def summarize(events: Iterable[HazardEvent]) -> EventSummary:
    out = EventSummary(
        by_status={s: 0 for s in catalog.STATUSES},
        by_hazard_type={t: 0 for t in catalog.HAZARD_TYPES},
        by_priority={p: 0 for p in catalog.PRIORITIES},
        by_severity_band={"high": 0, "moderate": 0, "low": 0},
    )
    for ev in events:
        out.total += 1
        out.affected_people += ev.affected_people or 0
        out.by_status[ev.status] += 1
        out.by_hazard_type[ev.hazard_type] += 1
        out.by_priority[ev.priority] += 1
        out.by_severity_band[catalog.severity_band(ev.severity)] += 1
    return out
