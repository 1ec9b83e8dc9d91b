# app/core/geo_registry.py
"""
Indian coastal region detection from coordinates and bounding boxes.

Used by the event store (region tag on every event) and by the query engine
(``region`` filter -> bbox). Bounds are deliberately generous and overlap at
state borders; a border event takes the smallest region whose box
contains it.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from app.core.contracts import BBox4
from app.core.errors import InvalidEnum


# Approximate coastal-state bounding boxes: (minLng, minLat, maxLng, maxLat)
# Ordered west coast north -> south, then east coast south -> north.
_REGION_BOUNDS: dict[str, Tuple[float, float, float, float]] = {
    "gujarat":        (68.0, 20.0, 74.5, 24.8),
    "maharashtra":    (72.6, 15.6, 80.9, 22.1),
    "goa":            (73.6, 14.9, 74.4, 15.8),
    "karnataka":      (74.0, 11.5, 78.6, 18.5),
    "kerala":         (74.8,  8.1, 77.5, 12.8),
    "tamil_nadu":     (76.2,  8.0, 80.4, 13.6),
    "andhra_pradesh": (76.7, 12.6, 84.8, 19.9),
    "odisha":         (81.3, 17.8, 87.5, 22.6),
    "west_bengal":    (85.8, 21.5, 89.9, 27.3),
}

# Smaller boxes first so Goa wins over Maharashtra/Karnataka at its own coast
_LOOKUP_ORDER: List[str] = sorted(
    _REGION_BOUNDS,
    key=lambda c: (_REGION_BOUNDS[c][2] - _REGION_BOUNDS[c][0]) * (_REGION_BOUNDS[c][3] - _REGION_BOUNDS[c][1]),
)


def region_bbox(code: str) -> BBox4:
    key = (code or "").strip().lower().replace(" ", "_").replace("-", "_")
    bounds = _REGION_BOUNDS.get(key)
    if bounds is None:
        raise InvalidEnum("region", code)
    return BBox4(minLng=bounds[0], minLat=bounds[1], maxLng=bounds[2], maxLat=bounds[3])


def region_for_point(lat: float, lng: float) -> Optional[str]:
    """
    Smallest coastal region whose bounds contain the point, or None offshore
    / outside the covered coastline.

    >>> region_for_point(22.2394, 68.9685)
    'gujarat'
    """
    for code in _LOOKUP_ORDER:
        b = _REGION_BOUNDS[code]
        if b[0] <= lng <= b[2] and b[1] <= lat <= b[3]:
            return code
    return None
