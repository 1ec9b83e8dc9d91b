# app/services/review.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from app.core import catalog
from app.core.contracts import HazardEvent
from app.core.errors import IllegalTransition
from app.core.time import utc_now

logger = logging.getLogger(__name__)


class ReviewWorkflow:
    """
    Review lifecycle for a hazard event:

        pending -> under-review -> verified | false-alarm | rejected
        pending ----------------> verified | false-alarm | rejected

    Terminal states never move again. Legality comes from the catalog table;
    a rejected request raises IllegalTransition and is never coerced into a
    nearby legal state.
    """

    initial_status = catalog.INITIAL_STATUS

    def check(self, current: str, target: str, reviewer: Optional[str]) -> None:
        catalog.legal_transitions(target)  # unknown target -> InvalidEnum
        allowed = catalog.legal_transitions(current)
        if catalog.is_terminal(current):
            raise IllegalTransition(current, target, "event already has a final disposition")
        if target not in allowed:
            raise IllegalTransition(current, target)
        if catalog.is_terminal(target) and not (reviewer or "").strip():
            raise IllegalTransition(current, target, "reviewer identity is required")

    def apply(
        self,
        event: HazardEvent,
        target: str,
        *,
        reviewer: Optional[str] = None,
        notes: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> HazardEvent:
        """Return the transitioned copy of `event`; the input is left untouched."""
        self.check(event.status, target, reviewer)

        reviewer = (reviewer or "").strip() or None

        update: dict = {"status": target}
        if reviewer:
            update["reviewed_by"] = reviewer
        if catalog.is_terminal(target):
            # final disposition replaces any triage note, absent notes included
            update["reviewed_at"] = at or utc_now()
            update["review_notes"] = notes
        elif notes is not None:
            update["review_notes"] = notes

        logger.info("[review] %s %s -> %s by %s", event.tracking_id, event.status, target, reviewer or "-")
        return event.model_copy(update=update)
