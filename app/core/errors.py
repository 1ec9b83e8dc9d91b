from __future__ import annotations

from typing import Any, Mapping, Sequence

from fastapi import HTTPException


# ──────────────────────────────────────────────────────────────
# Domain errors (raised by the core, mapped to HTTP by app/api)
# ──────────────────────────────────────────────────────────────

class HazardError(Exception):
    """Recoverable failure reported back to the caller."""

    code = "hazard_error"


class ValidationError(HazardError):
    code = "validation_error"


class InvalidEnum(ValidationError):
    code = "invalid_enum"

    def __init__(self, kind: str, value: object):
        super().__init__(f"unknown {kind}: {value!r}")
        self.kind = kind
        self.value = value


class NotFound(HazardError):
    code = "event_not_found"

    def __init__(self, event_id: str):
        super().__init__(f"no hazard event with id {event_id!r}")
        self.event_id = event_id


class IllegalTransition(HazardError):
    code = "illegal_transition"

    def __init__(self, current: str, target: str, reason: str | None = None):
        msg = f"cannot move event from {current!r} to {target!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.current = current
        self.target = target


class DuplicateTrackingId(HazardError):
    code = "duplicate_tracking_id"

    def __init__(self, tracking_id: str):
        super().__init__(f"tracking id already in use: {tracking_id}")
        self.tracking_id = tracking_id


class InvariantViolation(RuntimeError):
    """A stored record broke a model invariant. Programming error, never a 4xx."""


# ──────────────────────────────────────────────────────────────
# HTTP helpers
# ──────────────────────────────────────────────────────────────

def bad_request(code: str, message: str):
    raise HTTPException(status_code=400, detail={"code": code, "message": message})


def not_found(code: str, message: str):
    raise HTTPException(status_code=404, detail={"code": code, "message": message})


def conflict(code: str, message: str):
    raise HTTPException(status_code=409, detail={"code": code, "message": message})


def raise_http(err: HazardError):
    """Map a domain error onto the matching HTTP helper."""
    if isinstance(err, NotFound):
        not_found(err.code, str(err))
    if isinstance(err, (IllegalTransition, DuplicateTrackingId)):
        conflict(err.code, str(err))
    bad_request(err.code, str(err))


def describe_errors(errors: Sequence[Mapping[str, Any]], fallback: str = "invalid request") -> str:
    """One-line summary of pydantic error dicts: `loc: msg; ...`. Input values are left out."""
    parts = []
    for e in errors:
        loc = ".".join(str(p) for p in e.get("loc", ()))
        parts.append(f"{loc}: {e.get('msg')}" if loc else str(e.get("msg")))
    return "; ".join(parts) or fallback
