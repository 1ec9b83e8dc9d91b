from __future__ import annotations

from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator


# ──────────────────────────────────────────────────────────────
# Shared
# ──────────────────────────────────────────────────────────────

class BBox4(BaseModel):
    minLng: float = Field(ge=-180.0, le=180.0)
    minLat: float = Field(ge=-90.0, le=90.0)
    maxLng: float = Field(ge=-180.0, le=180.0)
    maxLat: float = Field(ge=-90.0, le=90.0)

    @model_validator(mode="after")
    def _check_order(self) -> "BBox4":
        # No antimeridian wrap: min must not exceed max on either axis
        if self.minLng > self.maxLng or self.minLat > self.maxLat:
            raise ValueError("bbox min corner must not exceed max corner")
        return self

    def contains(self, lat: float, lng: float) -> bool:
        return self.minLat <= lat <= self.maxLat and self.minLng <= lng <= self.maxLng


# ──────────────────────────────────────────────────────────────
# Taxonomy (values are looked up through app.core.catalog)
# ──────────────────────────────────────────────────────────────

HazardType = Literal["tsunami", "storm-surge", "high-waves", "flooding", "erosion"]

EventStatus = Literal["pending", "under-review", "verified", "false-alarm", "rejected"]

Priority = Literal["low", "medium", "high", "critical"]

ReviewAction = Literal["start-review", "verify", "reject", "mark-false-alarm"]

EventSource = Literal["report", "synthetic", "seed"]

MediaType = Literal["image", "video"]

Severity = Annotated[StrictInt, Field(ge=1, le=5)]


# ──────────────────────────────────────────────────────────────
# Hazard events
# ──────────────────────────────────────────────────────────────

class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    lng: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
    name: str = ""


class Reporter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    verified: bool = False  # reporter trust, not the event's review status


class MediaFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: MediaType
    url: str
    name: str = ""


class ReportSubmission(BaseModel):
    """Payload accepted by submit_report and produced by feed producers."""

    hazard_type: HazardType
    severity: Severity
    priority: Priority = "medium"
    title: str = Field(min_length=1, max_length=240)
    description: str = ""
    location: GeoPoint
    reporter: Reporter = Field(default_factory=Reporter)
    confidence: int = Field(default=50, ge=0, le=100)
    affected_people: Optional[int] = Field(default=None, ge=0)
    affected_areas: List[str] = Field(default_factory=list)
    media: List[MediaFile] = Field(default_factory=list)
    public_visibility: bool = True
    tracking_id: Optional[str] = None  # assigned by the store when absent


class HazardEvent(BaseModel):
    """Stored record. Frozen: changes go through the store as a whole-record swap."""

    model_config = ConfigDict(frozen=True)

    id: str
    tracking_id: str
    source: EventSource = "report"
    hazard_type: HazardType
    severity: Severity
    status: EventStatus = "pending"
    priority: Priority = "medium"
    title: str
    description: str = ""
    location: GeoPoint
    region: Optional[str] = None  # "gujarat", "kerala", ...
    reporter: Reporter = Field(default_factory=Reporter)
    confidence: int = Field(default=50, ge=0, le=100)
    created_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    affected_people: Optional[int] = Field(default=None, ge=0)
    affected_areas: Tuple[str, ...] = ()
    media: Tuple[MediaFile, ...] = ()
    public_visibility: bool = True


# ──────────────────────────────────────────────────────────────
# Queries
# ──────────────────────────────────────────────────────────────

class EventFilter(BaseModel):
    # Missing or empty = no constraint on that dimension
    severities: Optional[List[Severity]] = None
    hazard_types: Optional[List[HazardType]] = None
    statuses: Optional[List[EventStatus]] = None
    priorities: Optional[List[Priority]] = None
    text: Optional[str] = None
    bbox: Optional[BBox4] = None
    region: Optional[str] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    public_only: bool = False
    unread_only: bool = False
    offset: int = Field(default=0, ge=0)
    limit: Optional[int] = Field(default=None, ge=1)


class FeedItem(BaseModel):
    event: HazardEvent
    is_read: bool


class QueryRequest(BaseModel):
    session: str = Field(min_length=1)
    filter: EventFilter = Field(default_factory=EventFilter)


class QueryResponse(BaseModel):
    session: str
    count: int
    unread: int
    items: List[FeedItem] = Field(default_factory=list)


class SummaryRequest(BaseModel):
    session: Optional[str] = None
    filter: EventFilter = Field(default_factory=EventFilter)


class EventSummary(BaseModel):
    total: int = 0
    affected_people: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_hazard_type: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(default_factory=dict)
    by_severity_band: Dict[str, int] = Field(default_factory=dict)
    unread: Optional[int] = None


ExportFormat = Literal["csv", "json"]


class ExportRequest(BaseModel):
    format: ExportFormat = "json"
    filter: EventFilter = Field(default_factory=EventFilter)


# ──────────────────────────────────────────────────────────────
# Review + read state
# ──────────────────────────────────────────────────────────────

class ReviewRequest(BaseModel):
    action: ReviewAction
    reviewer: str = ""
    notes: Optional[str] = None
    role: Optional[str] = None  # opaque, recorded in logs only


class ReadStateResponse(BaseModel):
    session: str
    unread: int
    event_id: Optional[str] = None


# ──────────────────────────────────────────────────────────────
# Feed lifecycle
# ──────────────────────────────────────────────────────────────

class FeedStartRequest(BaseModel):
    interval_ms: Optional[int] = Field(default=None, gt=0)
    probability: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class FeedStatus(BaseModel):
    running: bool
    interval_s: float
    probability: float
    ticks: int
    inserted: int
