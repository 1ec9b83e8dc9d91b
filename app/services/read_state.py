# app/services/read_state.py
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Set

from app.core.contracts import HazardEvent


class ReadStateTracker:
    """
    Per-session "seen" annotations layered over query results.

    Each session owns one set of event ids; absence means unread. Ids are
    kept by value, so ids of events the store no longer (or never) knew are
    harmless. Hazard events themselves are never touched.

    dict.setdefault and set.add/update are atomic under the GIL, so sessions
    need no shared lock and never wait on each other.
    """

    def __init__(self):
        self._sessions: Dict[str, Set[str]] = {}

    def _ids(self, session: str) -> Set[str]:
        return self._sessions.setdefault(session, set())

    def mark_read(self, session: str, event_id: str) -> None:
        self._ids(session).add(event_id)

    def mark_all_read(self, session: str, event_ids: Iterable[str]) -> None:
        self._ids(session).update(event_ids)

    def is_read(self, session: str, event_id: str) -> bool:
        ids = self._sessions.get(session)
        return ids is not None and event_id in ids

    def read_ids(self, session: str) -> FrozenSet[str]:
        return frozenset(self._sessions.get(session, ()))

    def unread_count(self, session: str, events: Iterable[HazardEvent]) -> int:
        seen = self.read_ids(session)
        return sum(1 for ev in events if ev.id not in seen)

    def forget(self, session: str) -> None:
        self._sessions.pop(session, None)
