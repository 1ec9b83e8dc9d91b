# app/core/catalog.py
"""
Static hazard taxonomy: hazard types, severity scale, review statuses and
priorities, plus the one canonical table of legal review transitions.

Pure lookups. Anything outside an enumeration is a caller contract violation
and raises InvalidEnum; nothing here silently falls back to a default.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Tuple, get_args

from app.core.contracts import EventStatus, HazardType, Priority, ReviewAction
from app.core.errors import InvalidEnum


HAZARD_TYPES: Tuple[str, ...] = get_args(HazardType)
STATUSES: Tuple[str, ...] = get_args(EventStatus)
PRIORITIES: Tuple[str, ...] = get_args(Priority)  # ascending urgency
REVIEW_ACTIONS: Tuple[str, ...] = get_args(ReviewAction)
SEVERITIES: Tuple[int, ...] = (1, 2, 3, 4, 5)

INITIAL_STATUS = "pending"
TERMINAL_STATUSES: FrozenSet[str] = frozenset({"verified", "false-alarm", "rejected"})


# ══════════════════════════════════════════════════════════════
# Review transitions
# ══════════════════════════════════════════════════════════════

_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "pending": frozenset({"under-review", "verified", "false-alarm", "rejected"}),
    "under-review": frozenset({"verified", "false-alarm", "rejected"}),
    "verified": frozenset(),
    "false-alarm": frozenset(),
    "rejected": frozenset(),
}

_ACTION_TARGETS: Dict[str, str] = {
    "start-review": "under-review",
    "verify": "verified",
    "reject": "rejected",
    "mark-false-alarm": "false-alarm",
}


def legal_transitions(status: str) -> FrozenSet[str]:
    try:
        return _TRANSITIONS[status]
    except KeyError:
        raise InvalidEnum("status", status) from None


def is_terminal(status: str) -> bool:
    legal_transitions(status)
    return status in TERMINAL_STATUSES


def target_status(action: str) -> str:
    """Review action -> status it moves the event into."""
    try:
        return _ACTION_TARGETS[action]
    except KeyError:
        raise InvalidEnum("review action", action) from None


# ══════════════════════════════════════════════════════════════
# Severity
# ══════════════════════════════════════════════════════════════

_SEVERITY_COLORS: Dict[int, str] = {1: "green", 2: "blue", 3: "yellow", 4: "orange", 5: "red"}
_SEVERITY_LABELS: Dict[int, str] = {1: "minimal", 2: "low", 3: "moderate", 4: "high", 5: "critical"}


def _check_severity(severity: int) -> int:
    # bool is an int subclass; True is not a severity
    if isinstance(severity, bool) or severity not in _SEVERITY_COLORS:
        raise InvalidEnum("severity", severity)
    return severity


def severity_color(severity: int) -> str:
    return _SEVERITY_COLORS[_check_severity(severity)]


def severity_label(severity: int) -> str:
    return _SEVERITY_LABELS[_check_severity(severity)]


def severity_band(severity: int) -> str:
    """Map-legend bucket: high (4-5), moderate (3), low (1-2)."""
    s = _check_severity(severity)
    if s >= 4:
        return "high"
    if s == 3:
        return "moderate"
    return "low"


# ══════════════════════════════════════════════════════════════
# Hazard types, statuses, priorities
# ══════════════════════════════════════════════════════════════

_HAZARD_ICONS: Dict[str, str] = {
    "tsunami": "🌊",
    "storm-surge": "⛈️",
    "high-waves": "🌊",
    "flooding": "💧",
    "erosion": "🏔️",
}

_STATUS_COLORS: Dict[str, str] = {
    "pending": "outline",
    "under-review": "secondary",
    "verified": "default",
    "false-alarm": "destructive",
    "rejected": "destructive",
}

_PRIORITY_COLORS: Dict[str, str] = {
    "low": "green",
    "medium": "yellow",
    "high": "orange",
    "critical": "red",
}


def hazard_icon(hazard_type: str) -> str:
    try:
        return _HAZARD_ICONS[hazard_type]
    except KeyError:
        raise InvalidEnum("hazard type", hazard_type) from None


def status_color(status: str) -> str:
    try:
        return _STATUS_COLORS[status]
    except KeyError:
        raise InvalidEnum("status", status) from None


def priority_color(priority: str) -> str:
    try:
        return _PRIORITY_COLORS[priority]
    except KeyError:
        raise InvalidEnum("priority", priority) from None


def priority_rank(priority: str) -> int:
    """0 = low ... 3 = critical."""
    try:
        return PRIORITIES.index(priority)
    except ValueError:
        raise InvalidEnum("priority", priority) from None


# ══════════════════════════════════════════════════════════════
# Coastal sites (synthetic feed + demo seed)
# ══════════════════════════════════════════════════════════════

# name -> (lat, lng)
COASTAL_SITES: Dict[str, Tuple[float, float]] = {
    "Dwarka, Gujarat": (22.2394, 68.9685),
    "Mumbai, Maharashtra": (18.9220, 72.8347),
    "Colva Beach, Goa": (15.2891, 73.9213),
    "Kovalam, Kerala": (8.4004, 76.9787),
    "Chennai Port, Tamil Nadu": (13.1067, 80.3012),
    "Visakhapatnam, Andhra Pradesh": (17.6868, 83.2185),
    "Puri, Odisha": (19.8135, 85.8312),
    "Salt Lake, Kolkata, West Bengal": (22.5958, 88.2636),
}
